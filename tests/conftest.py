"""Mini README: Pytest fixtures shared across the flightaction test suite."""

from __future__ import annotations

import pytest

from flightaction.action import Action
from flightaction.protocol import LandedState

from helpers import RecordingChannel, state_message


@pytest.fixture()
def channel() -> RecordingChannel:
    return RecordingChannel()


@pytest.fixture()
def action(channel: RecordingChannel) -> Action:
    dispatcher = Action(channel)
    dispatcher.init()
    yield dispatcher
    dispatcher.deinit()


@pytest.fixture()
def report(channel: RecordingChannel):
    """Publish a landed state through the channel's router."""

    def _report(landed_state: LandedState) -> None:
        channel.router.publish(state_message(landed_state))

    return _report

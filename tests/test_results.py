"""Mini README: Tests for result descriptions and outcome normalisation."""

from __future__ import annotations

import pytest

from flightaction.action import ActionResult, describe_result, normalize_outcome
from flightaction.channel import CommandOutcome


@pytest.mark.parametrize(
    "outcome, expected",
    [
        (CommandOutcome.SUCCESS, ActionResult.SUCCESS),
        (CommandOutcome.NO_DEVICE, ActionResult.NO_DEVICE),
        (CommandOutcome.CONNECTION_ERROR, ActionResult.CONNECTION_ERROR),
        (CommandOutcome.BUSY, ActionResult.BUSY),
        (CommandOutcome.COMMAND_DENIED, ActionResult.COMMAND_DENIED),
        (CommandOutcome.TIMEOUT, ActionResult.TIMEOUT),
        (CommandOutcome.IN_PROGRESS, ActionResult.UNKNOWN),
        (CommandOutcome.UNKNOWN_ERROR, ActionResult.UNKNOWN),
    ],
)
def test_normalize_maps_every_outcome(outcome: CommandOutcome, expected: ActionResult) -> None:
    assert normalize_outcome(outcome) is expected


@pytest.mark.parametrize("foreign", [None, 0, "success", object(), ["unhashable"]])
def test_normalize_defaults_foreign_values_to_unknown(foreign: object) -> None:
    """Values the normaliser does not recognise never raise."""

    assert normalize_outcome(foreign) is ActionResult.UNKNOWN


def test_every_result_has_a_description() -> None:
    assert describe_result(ActionResult.SUCCESS) == "Success"
    assert ActionResult.COMMAND_DENIED.description == "Command denied"
    assert ActionResult.NO_DEVICE.description == "No device"
    assert {result.description for result in ActionResult} == {
        "Success",
        "No device",
        "Connection error",
        "Busy",
        "Command denied",
        "Timeout",
        "Unknown",
    }

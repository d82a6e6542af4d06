"""Mini README: Public action results and transport outcome normalisation.

Structure:
    * ActionResult - closed set of results returned by every action.
    * describe_result - human readable text for diagnostics and UIs.
    * normalize_outcome - total mapping from ``CommandOutcome`` to
      ``ActionResult``.

The public result set is kept separate from the channel's outcome set so that
either can grow without the other. Outcomes without a public counterpart,
including values from newer transports, become ``ActionResult.UNKNOWN``.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict

from ..channel.base import CommandOutcome


class ActionResult(Enum):
    """Result of an action request."""

    SUCCESS = "success"
    NO_DEVICE = "no_device"
    CONNECTION_ERROR = "connection_error"
    BUSY = "busy"
    COMMAND_DENIED = "command_denied"
    TIMEOUT = "timeout"
    UNKNOWN = "unknown"

    @property
    def description(self) -> str:
        return describe_result(self)


_DESCRIPTIONS: Dict[ActionResult, str] = {
    ActionResult.SUCCESS: "Success",
    ActionResult.NO_DEVICE: "No device",
    ActionResult.CONNECTION_ERROR: "Connection error",
    ActionResult.BUSY: "Busy",
    ActionResult.COMMAND_DENIED: "Command denied",
    ActionResult.TIMEOUT: "Timeout",
    ActionResult.UNKNOWN: "Unknown",
}

_OUTCOME_TO_RESULT: Dict[CommandOutcome, ActionResult] = {
    CommandOutcome.SUCCESS: ActionResult.SUCCESS,
    CommandOutcome.NO_DEVICE: ActionResult.NO_DEVICE,
    CommandOutcome.CONNECTION_ERROR: ActionResult.CONNECTION_ERROR,
    CommandOutcome.BUSY: ActionResult.BUSY,
    CommandOutcome.COMMAND_DENIED: ActionResult.COMMAND_DENIED,
    CommandOutcome.TIMEOUT: ActionResult.TIMEOUT,
}


def describe_result(result: ActionResult) -> str:
    """Return display text for ``result``."""

    return _DESCRIPTIONS.get(result, "Unknown")


def normalize_outcome(outcome: Any) -> ActionResult:
    """Map a channel outcome onto the public result set.

    Never raises: unmapped outcomes, foreign values and unhashable objects all
    yield ``ActionResult.UNKNOWN``.
    """

    try:
        return _OUTCOME_TO_RESULT.get(outcome, ActionResult.UNKNOWN)
    except TypeError:
        return ActionResult.UNKNOWN

"""Mini README: Shared test doubles for channel and telemetry interactions."""

from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

from pymavlink.dialects.v20 import common as mavlink

from flightaction.channel import CommandOutcome, DeviceCommandChannel, OutcomeCallback


def state_message(landed_state: int) -> mavlink.MAVLink_extended_sys_state_message:
    """Build the telemetry message an autopilot sends for ``landed_state``."""

    return mavlink.MAVLink_extended_sys_state_message(
        mavlink.MAV_VTOL_STATE_UNDEFINED, int(landed_state)
    )


class RecordingChannel(DeviceCommandChannel):
    """Channel stub that records requests and answers with a fixed outcome.

    With ``defer=True`` async continuations are stored instead of being run so
    tests can complete them later, possibly from another thread.
    """

    provider_name = "recording"

    def __init__(self, outcome: object = CommandOutcome.SUCCESS, *, defer: bool = False) -> None:
        super().__init__()
        self.outcome = outcome
        self.defer = defer
        self.calls: List[Tuple[str, int, Tuple[float, ...]]] = []
        self.pending: List[OutcomeCallback] = []

    def connect(self) -> None:
        pass

    def disconnect(self) -> None:
        pass

    def send_command_blocking(self, command: int, params: Sequence[float]) -> CommandOutcome:
        self.calls.append(("blocking", command, tuple(params)))
        return self.outcome

    def send_command_async(
        self, command: int, params: Sequence[float], callback: OutcomeCallback
    ) -> None:
        self.calls.append(("async", command, tuple(params)))
        if self.defer:
            self.pending.append(callback)
        else:
            callback(self.outcome)

    def complete(self, outcome: Optional[object] = None) -> None:
        callback = self.pending.pop(0)
        callback(self.outcome if outcome is None else outcome)

"""Mini README: Simulated vehicle behind a device command channel.

Structure:
    * SimulatedChannel - executes commands against an in-memory multicopter,
      acknowledges them with MAVLink ``MAV_RESULT`` codes and publishes
      ``EXTENDED_SYS_STATE`` messages whenever the landed state changes.
    * outcome_from_mav_result - maps acknowledgement codes to
      ``CommandOutcome``.

The simulation lets the CLI, the HTTP interface and the tests run without
hardware while still producing real pymavlink message objects.
"""

from __future__ import annotations

import threading
import time
from concurrent.futures import ThreadPoolExecutor
from typing import Dict, Optional, Sequence

from pymavlink.dialects.v20 import common as mavlink

from ...logging_utils import get_logger
from ...protocol import (
    ARM,
    MAV_CMD_COMPONENT_ARM_DISARM,
    MAV_CMD_DO_SET_MODE,
    MAV_CMD_NAV_LAND,
    MAV_CMD_NAV_TAKEOFF,
    PARAM_COUNT,
    PX4_CUSTOM_MAIN_MODE_AUTO,
    PX4_CUSTOM_SUB_MODE_AUTO_RTL,
    LandedState,
)
from ..base import CommandOutcome, DeviceCommandChannel, OutcomeCallback
from ..registry import REGISTRY
from ..router import MessageRouter

LOGGER = get_logger(__name__)

_MAV_RESULT_OUTCOMES: Dict[int, CommandOutcome] = {
    mavlink.MAV_RESULT_ACCEPTED: CommandOutcome.SUCCESS,
    mavlink.MAV_RESULT_TEMPORARILY_REJECTED: CommandOutcome.BUSY,
    mavlink.MAV_RESULT_DENIED: CommandOutcome.COMMAND_DENIED,
    mavlink.MAV_RESULT_UNSUPPORTED: CommandOutcome.COMMAND_DENIED,
    mavlink.MAV_RESULT_FAILED: CommandOutcome.COMMAND_DENIED,
    mavlink.MAV_RESULT_IN_PROGRESS: CommandOutcome.IN_PROGRESS,
}

_INITIAL_LANDED_STATES = {
    "on_ground": LandedState.ON_GROUND,
    "in_air": LandedState.IN_AIR,
    "unknown": None,
}


def outcome_from_mav_result(mav_result: int) -> CommandOutcome:
    return _MAV_RESULT_OUTCOMES.get(mav_result, CommandOutcome.UNKNOWN_ERROR)


@REGISTRY.register
class SimulatedChannel(DeviceCommandChannel):
    """In-memory vehicle that acknowledges commands like a PX4 multicopter."""

    provider_name = "simulated"

    def __init__(
        self,
        connection_string: Optional[str] = None,
        *,
        router: Optional[MessageRouter] = None,
        latency_seconds: float = 0.0,
        initial_landed_state: str = "on_ground",
    ) -> None:
        super().__init__(connection_string, router=router)
        if initial_landed_state not in _INITIAL_LANDED_STATES:
            raise ValueError(f"Unknown initial landed state '{initial_landed_state}'")
        self.latency_seconds = latency_seconds
        self._vehicle_lock = threading.Lock()
        self._initial_landed_state = _INITIAL_LANDED_STATES[initial_landed_state]
        self._landed_state = self._initial_landed_state or LandedState.ON_GROUND
        self._armed = self._landed_state == LandedState.IN_AIR
        self._link_lock = threading.Lock()
        self._executor: Optional[ThreadPoolExecutor] = None
        self.commands_received = 0

    @property
    def is_connected(self) -> bool:
        return self._executor is not None

    @property
    def armed(self) -> bool:
        with self._vehicle_lock:
            return self._armed

    @property
    def landed_state(self) -> LandedState:
        with self._vehicle_lock:
            return self._landed_state

    def connect(self) -> None:
        with self._link_lock:
            if self._executor is not None:
                return
            LOGGER.info(
                "Connecting simulated vehicle (%s)", self.connection_string or "in-process"
            )
            self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="sim-ack")
        if self._initial_landed_state is not None:
            self.report_landed_state(self._landed_state)

    def disconnect(self) -> None:
        with self._link_lock:
            executor, self._executor = self._executor, None
            if executor is None:
                return
            # Refuse new work while the lock is held; queued acks still run.
            executor.shutdown(wait=False)
        LOGGER.info("Disconnecting simulated vehicle")
        executor.shutdown(wait=True)

    def report_landed_state(self, landed_state: int) -> None:
        """Publish an ``EXTENDED_SYS_STATE`` message as the autopilot would."""

        message = mavlink.MAVLink_extended_sys_state_message(
            mavlink.MAV_VTOL_STATE_UNDEFINED, int(landed_state)
        )
        self.router.publish(message)

    def send_command_blocking(self, command: int, params: Sequence[float]) -> CommandOutcome:
        if not self.is_connected:
            return CommandOutcome.NO_DEVICE
        return self._acknowledge(command, params)

    def send_command_async(
        self, command: int, params: Sequence[float], callback: OutcomeCallback
    ) -> None:
        with self._link_lock:
            executor = self._executor
            if executor is not None:
                try:
                    executor.submit(self._acknowledge_async, command, tuple(params), callback)
                    return
                except RuntimeError:
                    LOGGER.warning("Ack worker already stopped; command %s not sent", command)
        callback(CommandOutcome.NO_DEVICE)

    def metadata(self) -> Dict[str, str]:
        details = super().metadata()
        details.update(
            {
                "armed": "yes" if self.armed else "no",
                "landed_state": self.landed_state.name,
                "latency_seconds": f"{self.latency_seconds:.2f}",
            }
        )
        return details

    def _acknowledge_async(
        self, command: int, params: Sequence[float], callback: OutcomeCallback
    ) -> None:
        try:
            outcome = self._acknowledge(command, params)
        except Exception:  # pragma: no cover - simulated vehicle bug
            LOGGER.exception("Simulated vehicle failed on command %s", command)
            outcome = CommandOutcome.UNKNOWN_ERROR
        callback(outcome)

    def _acknowledge(self, command: int, params: Sequence[float]) -> CommandOutcome:
        if len(params) != PARAM_COUNT:
            raise ValueError(f"expected {PARAM_COUNT} parameters, got {len(params)}")
        if self.latency_seconds:
            time.sleep(self.latency_seconds)
        with self._vehicle_lock:
            self.commands_received += 1
            previous = self._landed_state
            mav_result = self._execute(command, params)
            changed = self._landed_state if self._landed_state != previous else None
        if changed is not None:
            self.report_landed_state(changed)
        outcome = outcome_from_mav_result(mav_result)
        LOGGER.debug("Simulated ack for command %s: %s", command, outcome.name)
        return outcome

    def _execute(self, command: int, params: Sequence[float]) -> int:
        """Apply ``command`` to the vehicle model and return a ``MAV_RESULT``."""

        if command == MAV_CMD_COMPONENT_ARM_DISARM:
            if params[0] == ARM:
                self._armed = True
            else:
                if self._landed_state == LandedState.IN_AIR:
                    LOGGER.warning("Motors stopped in flight; simulated vehicle drops")
                    self._landed_state = LandedState.ON_GROUND
                self._armed = False
            return mavlink.MAV_RESULT_ACCEPTED

        if command == MAV_CMD_NAV_TAKEOFF:
            if not self._armed:
                return mavlink.MAV_RESULT_DENIED
            self._landed_state = LandedState.IN_AIR
            return mavlink.MAV_RESULT_ACCEPTED

        if command == MAV_CMD_NAV_LAND:
            if self._landed_state != LandedState.IN_AIR:
                return mavlink.MAV_RESULT_TEMPORARILY_REJECTED
            self._landed_state = LandedState.ON_GROUND
            return mavlink.MAV_RESULT_ACCEPTED

        if command == MAV_CMD_DO_SET_MODE:
            return self._set_mode(params)

        return mavlink.MAV_RESULT_UNSUPPORTED

    def _set_mode(self, params: Sequence[float]) -> int:
        main_mode, sub_mode = params[1], params[2]
        if main_mode != PX4_CUSTOM_MAIN_MODE_AUTO or sub_mode != PX4_CUSTOM_SUB_MODE_AUTO_RTL:
            return mavlink.MAV_RESULT_UNSUPPORTED
        if not self._armed:
            return mavlink.MAV_RESULT_DENIED
        # Return and land complete instantly in the simulation.
        self._landed_state = LandedState.ON_GROUND
        return mavlink.MAV_RESULT_ACCEPTED

"""Mini README: High-level vehicle actions on top of a device command channel.

Structure:
    * Action - arm, disarm, kill, takeoff, land and return-to-launch, each in
      a blocking form returning ``ActionResult`` and an ``*_async`` form that
      reports through a callback.
    * ResultCallback - signature of the callbacks accepted by async actions.

Arm and disarm are refused locally with ``COMMAND_DENIED`` unless the vehicle
is known to be on the ground. Every other action is always sent and left to
the vehicle to refuse. The class adds no retries or timeouts; those belong to
the channel.
"""

from __future__ import annotations

import threading
from typing import Callable, Dict, Optional, Tuple

from ..channel.base import DeviceCommandChannel
from ..channel.router import MessageRouter
from ..logging_utils import get_logger
from ..protocol import (
    ARM,
    DISARM,
    EXTENDED_SYS_STATE,
    MAV_CMD_COMPONENT_ARM_DISARM,
    MAV_CMD_DO_SET_MODE,
    MAV_CMD_NAV_LAND,
    MAV_CMD_NAV_TAKEOFF,
    MAV_MODE_AUTO_ARMED,
    MAV_MODE_FLAG_CUSTOM_MODE_ENABLED,
    PX4_CUSTOM_MAIN_MODE_AUTO,
    PX4_CUSTOM_SUB_MODE_AUTO_RTL,
    CommandRequest,
    applicable_params,
)
from .gate import arm_allowed, disarm_allowed
from .results import ActionResult, normalize_outcome
from .state import AirborneState, VehicleStateCache

LOGGER = get_logger(__name__)

ResultCallback = Callable[[ActionResult], None]

ARM_REQUEST = CommandRequest.build(MAV_CMD_COMPONENT_ARM_DISARM, ARM)
DISARM_REQUEST = CommandRequest.build(MAV_CMD_COMPONENT_ARM_DISARM, DISARM)
# Same command as disarm; only the missing gate differs.
KILL_REQUEST = CommandRequest.build(MAV_CMD_COMPONENT_ARM_DISARM, DISARM)
TAKEOFF_REQUEST = CommandRequest.build(MAV_CMD_NAV_TAKEOFF)
LAND_REQUEST = CommandRequest.build(MAV_CMD_NAV_LAND)
RETURN_TO_LAUNCH_REQUEST = CommandRequest.build(
    MAV_CMD_DO_SET_MODE,
    MAV_MODE_AUTO_ARMED | MAV_MODE_FLAG_CUSTOM_MODE_ENABLED,
    PX4_CUSTOM_MAIN_MODE_AUTO,
    PX4_CUSTOM_SUB_MODE_AUTO_RTL,
)

ACTION_NAMES: Tuple[str, ...] = (
    "arm",
    "disarm",
    "kill",
    "takeoff",
    "land",
    "return_to_launch",
)

ACTION_DESCRIPTIONS: Dict[str, str] = {
    "arm": "Arm the motors (vehicle must be known to be on the ground).",
    "disarm": "Disarm the motors (vehicle must be known to be on the ground).",
    "kill": "Stop the motors immediately, without any state check.",
    "takeoff": "Take off to the autopilot's default takeoff altitude.",
    "land": "Land at the current position.",
    "return_to_launch": "Switch to the autopilot's return-to-launch mode.",
}


class _Completion:
    """Single-use wrapper delivering one result to a caller's callback."""

    def __init__(self, action_name: str, callback: ResultCallback) -> None:
        self._action_name = action_name
        self._callback = callback
        self._lock = threading.Lock()
        self._done = False

    def __call__(self, outcome: object) -> None:
        result = normalize_outcome(outcome)
        LOGGER.debug("%s completed: %s -> %s", self._action_name, outcome, result.name)
        self.deliver(result)

    def deliver(self, result: ActionResult) -> None:
        with self._lock:
            if self._done:
                LOGGER.warning(
                    "Dropping duplicate %s completion for %s", result.name, self._action_name
                )
                return
            self._done = True
        self._callback(result)


class Action:
    """Vehicle actions bound to one channel and one telemetry source."""

    def __init__(
        self, channel: DeviceCommandChannel, router: Optional[MessageRouter] = None
    ) -> None:
        self._channel = channel
        self._router = router if router is not None else channel.router
        self._state_cache = VehicleStateCache()

    def init(self) -> None:
        """Start tracking the vehicle's landed state."""

        self._router.register_handler(
            EXTENDED_SYS_STATE, self._state_cache.process_extended_sys_state, self
        )

    def deinit(self) -> None:
        self._router.unregister_all_handlers(self)

    def __enter__(self) -> "Action":
        self.init()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.deinit()

    @property
    def airborne_state(self) -> AirborneState:
        return self._state_cache.snapshot()

    def is_arm_allowed(self) -> bool:
        return arm_allowed(self.airborne_state)

    def is_disarm_allowed(self) -> bool:
        return disarm_allowed(self.airborne_state)

    # Blocking actions

    def arm(self) -> ActionResult:
        if not self.is_arm_allowed():
            return self._deny("arm")
        return self._send("arm", ARM_REQUEST)

    def disarm(self) -> ActionResult:
        if not self.is_disarm_allowed():
            return self._deny("disarm")
        return self._send("disarm", DISARM_REQUEST)

    def kill(self) -> ActionResult:
        return self._send("kill", KILL_REQUEST)

    def takeoff(self) -> ActionResult:
        return self._send("takeoff", TAKEOFF_REQUEST)

    def land(self) -> ActionResult:
        return self._send("land", LAND_REQUEST)

    def return_to_launch(self) -> ActionResult:
        return self._send("return_to_launch", RETURN_TO_LAUNCH_REQUEST)

    # Non-blocking actions

    def arm_async(self, callback: ResultCallback) -> None:
        if not self.is_arm_allowed():
            self._deny_async("arm", callback)
            return
        self._send_async("arm", ARM_REQUEST, callback)

    def disarm_async(self, callback: ResultCallback) -> None:
        if not self.is_disarm_allowed():
            self._deny_async("disarm", callback)
            return
        self._send_async("disarm", DISARM_REQUEST, callback)

    def kill_async(self, callback: ResultCallback) -> None:
        self._send_async("kill", KILL_REQUEST, callback)

    def takeoff_async(self, callback: ResultCallback) -> None:
        self._send_async("takeoff", TAKEOFF_REQUEST, callback)

    def land_async(self, callback: ResultCallback) -> None:
        self._send_async("land", LAND_REQUEST, callback)

    def return_to_launch_async(self, callback: ResultCallback) -> None:
        self._send_async("return_to_launch", RETURN_TO_LAUNCH_REQUEST, callback)

    # Lookup by name for the CLI and HTTP interfaces

    def perform(self, name: str) -> ActionResult:
        """Run the blocking action called ``name``."""

        return self._lookup(name, blocking=True)()

    def perform_async(self, name: str, callback: ResultCallback) -> None:
        self._lookup(name, blocking=False)(callback)

    def _lookup(self, name: str, *, blocking: bool) -> Callable:
        if name not in ACTION_NAMES:
            raise KeyError(f"Unknown action '{name}'")
        return getattr(self, name if blocking else f"{name}_async")

    def _send(self, name: str, request: CommandRequest) -> ActionResult:
        LOGGER.info(
            "Sending %s (command %s, params %s)",
            name,
            request.command,
            applicable_params(request.params),
        )
        outcome = self._channel.send_command_blocking(request.command, request.params)
        result = normalize_outcome(outcome)
        LOGGER.info("%s finished: %s", name, result.name)
        return result

    def _send_async(self, name: str, request: CommandRequest, callback: ResultCallback) -> None:
        LOGGER.info(
            "Sending %s asynchronously (command %s, params %s)",
            name,
            request.command,
            applicable_params(request.params),
        )
        self._channel.send_command_async(
            request.command, request.params, _Completion(name, callback)
        )

    @staticmethod
    def _deny(name: str) -> ActionResult:
        LOGGER.warning("%s denied: vehicle not known to be on the ground", name)
        return ActionResult.COMMAND_DENIED

    def _deny_async(self, name: str, callback: ResultCallback) -> None:
        _Completion(name, callback).deliver(self._deny(name))



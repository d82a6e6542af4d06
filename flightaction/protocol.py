"""Mini README: MAVLink vocabulary shared by actions and channels.

Structure:
    * Command identifiers and mode flags re-exported from pymavlink's common
      dialect.
    * PX4 custom mode numbers, which are autopilot specific and therefore
      not part of the MAVLink message definitions.
    * LandedState - ``MAV_LANDED_STATE`` as an ``IntEnum``.
    * CommandRequest - one command identifier plus its seven parameters.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import IntEnum
from typing import Sequence, Tuple

from pymavlink.dialects.v20 import common as mavlink

MAV_CMD_COMPONENT_ARM_DISARM = mavlink.MAV_CMD_COMPONENT_ARM_DISARM
MAV_CMD_NAV_TAKEOFF = mavlink.MAV_CMD_NAV_TAKEOFF
MAV_CMD_NAV_LAND = mavlink.MAV_CMD_NAV_LAND
MAV_CMD_DO_SET_MODE = mavlink.MAV_CMD_DO_SET_MODE

MAV_MODE_AUTO_ARMED = mavlink.MAV_MODE_AUTO_ARMED
MAV_MODE_FLAG_CUSTOM_MODE_ENABLED = mavlink.MAV_MODE_FLAG_CUSTOM_MODE_ENABLED

EXTENDED_SYS_STATE = "EXTENDED_SYS_STATE"

# PX4 src/modules/commander/px4_custom_mode.h
PX4_CUSTOM_MAIN_MODE_AUTO = 4
PX4_CUSTOM_SUB_MODE_AUTO_RTL = 5

ARM = 1.0
DISARM = 0.0

NOT_APPLICABLE = float("nan")
PARAM_COUNT = 7


class LandedState(IntEnum):
    """Vehicle landed classification reported in ``EXTENDED_SYS_STATE``."""

    UNDEFINED = mavlink.MAV_LANDED_STATE_UNDEFINED
    ON_GROUND = mavlink.MAV_LANDED_STATE_ON_GROUND
    IN_AIR = mavlink.MAV_LANDED_STATE_IN_AIR
    TAKEOFF = mavlink.MAV_LANDED_STATE_TAKEOFF
    LANDING = mavlink.MAV_LANDED_STATE_LANDING


@dataclass(frozen=True)
class CommandRequest:
    """A command identifier with exactly seven parameters.

    Parameters that do not apply to the command are NaN, which autopilots
    read as "use the current value or default".
    """

    command: int
    params: Tuple[float, ...]

    def __post_init__(self) -> None:
        if len(self.params) != PARAM_COUNT:
            raise ValueError(
                f"command {self.command} needs {PARAM_COUNT} parameters, got {len(self.params)}"
            )

    @classmethod
    def build(cls, command: int, *leading: float) -> "CommandRequest":
        """Create a request whose unspecified trailing parameters are NaN."""

        if len(leading) > PARAM_COUNT:
            raise ValueError(f"at most {PARAM_COUNT} parameters allowed")
        padding = (NOT_APPLICABLE,) * (PARAM_COUNT - len(leading))
        return cls(command, tuple(float(value) for value in leading) + padding)


def is_not_applicable(value: float) -> bool:
    return math.isnan(value)


def applicable_params(params: Sequence[float]) -> Tuple[float, ...]:
    """Strip trailing NaN parameters; used for log output."""

    values = list(params)
    while values and is_not_applicable(values[-1]):
        values.pop()
    return tuple(values)

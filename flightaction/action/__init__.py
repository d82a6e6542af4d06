"""Mini README: High-level vehicle actions.

Re-exports the dispatcher together with the result taxonomy, the airborne
state cache and the precondition checks it relies on.
"""

from .dispatcher import ACTION_DESCRIPTIONS, ACTION_NAMES, Action, ResultCallback
from .gate import arm_allowed, disarm_allowed
from .results import ActionResult, describe_result, normalize_outcome
from .state import AirborneState, VehicleStateCache

__all__ = [
    "ACTION_DESCRIPTIONS",
    "ACTION_NAMES",
    "Action",
    "ActionResult",
    "AirborneState",
    "ResultCallback",
    "VehicleStateCache",
    "arm_allowed",
    "describe_result",
    "disarm_allowed",
    "normalize_outcome",
]

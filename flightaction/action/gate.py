"""Precondition checks for gated actions.

Both checks are pure reads of an ``AirborneState`` snapshot. Missing state
information counts as unsafe.
"""

from __future__ import annotations

from ..logging_utils import get_logger
from .state import AirborneState

LOGGER = get_logger(__name__)


def arm_allowed(state: AirborneState) -> bool:
    return state.state_known and not state.in_air


def disarm_allowed(state: AirborneState) -> bool:
    if not state.state_known:
        LOGGER.debug("Disarm denied: in air state unknown")
        return False
    if state.in_air:
        LOGGER.debug("Disarm denied: still in air")
        return False
    return True

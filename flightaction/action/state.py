"""Mini README: Cached airborne state fed by telemetry.

Structure:
    * AirborneState - immutable snapshot of what is known about flight state.
    * VehicleStateCache - holds the latest snapshot and updates it from
      ``EXTENDED_SYS_STATE`` messages.

The router may call the handler on a transport thread while actions read the
snapshot from the caller's thread. The cache therefore swaps whole immutable
snapshots under a lock, and readers never see ``state_known`` and ``in_air``
from two different updates.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, replace
from typing import Any

from ..logging_utils import get_logger
from ..protocol import LandedState

LOGGER = get_logger(__name__)


@dataclass(frozen=True)
class AirborneState:
    state_known: bool = False
    in_air: bool = False


class VehicleStateCache:
    """Latest airborne state of one vehicle."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._state = AirborneState()

    def snapshot(self) -> AirborneState:
        with self._lock:
            return self._state

    def process_extended_sys_state(self, message: Any) -> None:
        """Update the cache from an ``EXTENDED_SYS_STATE`` message.

        IN_AIR and ON_GROUND set ``in_air``; any other landed state keeps the
        previous value. Every message marks the state as known.
        """

        landed_state = message.landed_state
        with self._lock:
            previous = self._state
            if landed_state == LandedState.IN_AIR:
                self._state = AirborneState(state_known=True, in_air=True)
            elif landed_state == LandedState.ON_GROUND:
                self._state = AirborneState(state_known=True, in_air=False)
            else:
                self._state = replace(previous, state_known=True)
            current = self._state
        if current != previous:
            LOGGER.debug(
                "Airborne state changed to %s (landed_state=%s)", current, landed_state
            )

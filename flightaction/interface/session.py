"""Mini README: Wiring of a channel and its action dispatcher.

Structure:
    * VehicleSession - owns one connected channel and an initialised
      ``Action`` bound to it.
    * open_session - builds a session from ``FlightActionSettings``.

Both the CLI and the HTTP interface go through this module so they agree on
how providers are chosen and configured.
"""

from __future__ import annotations

from typing import Dict, Optional

from ..action import Action
from ..channel import REGISTRY, DeviceCommandChannel
from ..configuration import FlightActionSettings, get_settings
from ..logging_utils import get_logger
from ..utils import load_entry_point_plugins

LOGGER = get_logger(__name__)


class VehicleSession:
    """A started channel plus the actions that drive it."""

    def __init__(self, channel: DeviceCommandChannel) -> None:
        self.channel = channel
        self.action = Action(channel)

    def start(self) -> "VehicleSession":
        # Handlers first so the landed state reported on connect is not missed.
        self.action.init()
        self.channel.connect()
        return self

    def stop(self) -> None:
        self.channel.disconnect()
        self.action.deinit()

    def __enter__(self) -> "VehicleSession":
        return self.start()

    def __exit__(self, *exc_info: object) -> None:
        self.stop()

    def status(self) -> Dict[str, object]:
        state = self.action.airborne_state
        return {
            "state_known": state.state_known,
            "in_air": state.in_air,
            "arm_allowed": self.action.is_arm_allowed(),
            "disarm_allowed": self.action.is_disarm_allowed(),
        }


def _provider_options(settings: FlightActionSettings) -> Dict[str, object]:
    if settings.channel_provider.lower() == "simulated":
        return {
            "latency_seconds": settings.simulated_latency_seconds,
            "initial_landed_state": settings.simulated_initial_landed_state,
        }
    return {}


def open_session(settings: Optional[FlightActionSettings] = None) -> VehicleSession:
    """Create an unstarted session for the configured channel provider.

    Raises ``KeyError`` when the provider is not registered.
    """

    settings = settings or get_settings()
    load_entry_point_plugins()
    channel = REGISTRY.create(
        settings.channel_provider,
        connection_string=settings.connection_string,
        **_provider_options(settings),
    )
    LOGGER.info("Session configured for provider '%s'", settings.channel_provider)
    return VehicleSession(channel)

"""Mini README: Discovery of third-party channel providers.

Structure:
    * load_entry_point_plugins - import every ``flightaction.channels`` entry
      point and register the channel classes they expose.

A provider package declares, for example::

    [project.entry-points."flightaction.channels"]
    serial = "flightaction_serial:SerialChannel"
"""

from __future__ import annotations

from importlib.metadata import entry_points
from typing import List, Optional

from ..channel.base import DeviceCommandChannel
from ..channel.registry import REGISTRY, ChannelRegistry
from ..logging_utils import get_logger

LOGGER = get_logger(__name__)

CHANNEL_GROUP = "flightaction.channels"


def load_entry_point_plugins(
    group: str = CHANNEL_GROUP, registry: Optional[ChannelRegistry] = None
) -> List[str]:
    """Register channel classes advertised through entry points.

    Returns the provider identifiers that were registered. Entry points that
    fail to import or do not resolve to a channel class are logged and skipped.
    """

    registry = registry or REGISTRY
    registered = []
    for entry_point in entry_points(group=group):
        try:
            plugin = entry_point.load()
        except Exception:  # pragma: no cover - third-party import failure
            LOGGER.exception("Failed to load channel plugin '%s'", entry_point.name)
            continue
        if not (isinstance(plugin, type) and issubclass(plugin, DeviceCommandChannel)):
            LOGGER.warning(
                "Entry point '%s' does not provide a DeviceCommandChannel subclass", entry_point.name
            )
            continue
        registry.register(plugin)
        registered.append(plugin.provider_name.lower())
        LOGGER.info("Loaded channel plugin '%s'", entry_point.name)
    return registered

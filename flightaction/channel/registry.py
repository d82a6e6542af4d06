"""Mini README: Provider registry for device command channels.

Structure:
    * ChannelRegistry - maps provider identifiers to ``DeviceCommandChannel``
      classes and instantiates them on demand.

Third-party transports register through ``REGISTRY.register`` at import time
or through the ``flightaction.channels`` entry point group.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, Optional, Type

from ..logging_utils import get_logger
from .base import DeviceCommandChannel

LOGGER = get_logger(__name__)


class ChannelRegistry:
    """Simple registry for mapping channel identifiers to classes."""

    def __init__(self) -> None:
        self._providers: Dict[str, Type[DeviceCommandChannel]] = {}

    def register(self, provider: Type[DeviceCommandChannel]) -> Type[DeviceCommandChannel]:
        """Register a channel class; returns it so it can be used as a decorator."""

        identifier = provider.provider_name.lower()
        LOGGER.debug("Registering channel provider '%s'", identifier)
        self._providers[identifier] = provider
        return provider

    def available_providers(self) -> Iterable[str]:
        """Return iterable of provider identifiers for display."""

        return sorted(self._providers.keys())

    def create(
        self, identifier: str, *, connection_string: Optional[str] = None, **options: Any
    ) -> DeviceCommandChannel:
        """Instantiate a channel matching the identifier."""

        provider_cls = self._providers.get(identifier.lower())
        if not provider_cls:
            raise KeyError(f"Unknown channel provider '{identifier}'")
        LOGGER.info("Creating channel provider '%s'", identifier)
        return provider_cls(connection_string=connection_string, **options)


REGISTRY = ChannelRegistry()

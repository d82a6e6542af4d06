"""Mini README: Device command channel subsystem.

``base`` defines the transport interface and its outcome enumeration,
``router`` the telemetry fan-out, ``registry`` the provider lookup and
``providers`` the concrete transports.
"""

from .base import CommandOutcome, DeviceCommandChannel, OutcomeCallback
from .registry import REGISTRY, ChannelRegistry
from .router import MessageRouter
from . import providers  # noqa: F401  # ensure built-in providers register on import

__all__ = [
    "ChannelRegistry",
    "CommandOutcome",
    "DeviceCommandChannel",
    "MessageRouter",
    "OutcomeCallback",
    "REGISTRY",
]

"""Mini README: Abstract device command channel and its outcome taxonomy.

Structure:
    * CommandOutcome - low-level result reported by a channel per command.
    * OutcomeCallback - continuation signature for asynchronous commands.
    * DeviceCommandChannel - abstract interface implemented by transports.

A channel owns everything below the action layer: encoding, transmission,
acknowledgement handling, retries and timeouts. It reports one
``CommandOutcome`` per command, either as a return value or through the
continuation it was handed. Channels also own the ``MessageRouter`` through
which vehicle telemetry reaches registered handlers.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum
from typing import Callable, Dict, Optional, Sequence

from ..logging_utils import get_logger
from .router import MessageRouter

LOGGER = get_logger(__name__)


class CommandOutcome(Enum):
    """Outcome of a single command exchange as seen by the transport."""

    SUCCESS = "success"
    NO_DEVICE = "no_device"
    CONNECTION_ERROR = "connection_error"
    BUSY = "busy"
    COMMAND_DENIED = "command_denied"
    TIMEOUT = "timeout"
    IN_PROGRESS = "in_progress"
    UNKNOWN_ERROR = "unknown_error"


OutcomeCallback = Callable[[CommandOutcome], None]


class DeviceCommandChannel(ABC):
    """Base interface for transports that execute vehicle commands."""

    provider_name: str = "generic"

    def __init__(
        self,
        connection_string: Optional[str] = None,
        *,
        router: Optional[MessageRouter] = None,
    ) -> None:
        self.connection_string = connection_string
        self.router = router or MessageRouter()
        LOGGER.debug(
            "Initialising %s channel with connection '%s'", self.provider_name, connection_string
        )

    @abstractmethod
    def connect(self) -> None:
        """Establish the link with the vehicle or simulator."""

    @abstractmethod
    def disconnect(self) -> None:
        """Terminate the link and release worker resources."""

    @abstractmethod
    def send_command_blocking(self, command: int, params: Sequence[float]) -> CommandOutcome:
        """Send ``command`` with seven parameters and wait for its outcome."""

    @abstractmethod
    def send_command_async(
        self, command: int, params: Sequence[float], callback: OutcomeCallback
    ) -> None:
        """Send ``command`` and report the outcome to ``callback`` exactly once.

        The callback may run on a transport thread rather than the caller's.
        """

    @property
    def is_connected(self) -> bool:
        return False

    def metadata(self) -> Dict[str, str]:
        """Return diagnostic metadata for UI displays."""

        return {
            "provider": self.provider_name,
            "connection": self.connection_string or "not configured",
            "connected": "yes" if self.is_connected else "no",
        }

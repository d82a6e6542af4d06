"""Mini README: In-process routing of vehicle messages to handlers.

Handlers are registered per message kind together with an owner token so a
component can drop all of its subscriptions in one call on shutdown.
Message kinds follow the pymavlink convention: ``message.get_type()``
returns names such as ``"EXTENDED_SYS_STATE"``.
"""

from __future__ import annotations

import threading
from typing import Any, Callable, Dict, Hashable, List, Tuple

from ..logging_utils import get_logger

LOGGER = get_logger(__name__)

MessageHandler = Callable[[Any], None]


class MessageRouter:
    """Thread-safe fan-out of incoming messages by kind."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._handlers: Dict[str, List[Tuple[MessageHandler, Hashable]]] = {}

    def register_handler(self, kind: str, handler: MessageHandler, owner: Hashable) -> None:
        with self._lock:
            self._handlers.setdefault(kind, []).append((handler, owner))
        LOGGER.debug("Registered handler for %s (owner=%r)", kind, owner)

    def unregister_all_handlers(self, owner: Hashable) -> None:
        """Remove every handler registered with ``owner``."""

        removed = 0
        with self._lock:
            for kind in list(self._handlers):
                remaining = [entry for entry in self._handlers[kind] if entry[1] is not owner]
                removed += len(self._handlers[kind]) - len(remaining)
                if remaining:
                    self._handlers[kind] = remaining
                else:
                    del self._handlers[kind]
        LOGGER.debug("Unregistered %s handler(s) for owner=%r", removed, owner)

    def handler_count(self, kind: str) -> int:
        with self._lock:
            return len(self._handlers.get(kind, []))

    def publish(self, message: Any) -> int:
        """Deliver ``message`` to all handlers of its kind and return how many ran.

        Handlers are invoked outside the router lock so they may register or
        unregister other handlers.
        """

        kind = message.get_type()
        with self._lock:
            handlers = [handler for handler, _owner in self._handlers.get(kind, [])]
        for handler in handlers:
            handler(message)
        return len(handlers)

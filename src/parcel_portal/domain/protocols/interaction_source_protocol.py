"""Interaction event source protocol (port).

Delivers named UI events ("click", "scroll", "beforeunload", ...) to
registered handlers. The inactivity tracker and the auth controller attach
and detach their handlers explicitly.
"""

from collections.abc import Callable
from typing import Any, Protocol

InteractionHandler = Callable[..., Any]
"""Handler called with the event's keyword payload (e.g. hidden=True)."""


class InteractionSourceProtocol(Protocol):
    """Named event source."""

    def subscribe(self, event_name: str, handler: InteractionHandler) -> None:
        """Attach a handler to an event."""
        ...

    def unsubscribe(self, event_name: str, handler: InteractionHandler) -> None:
        """Detach a handler. No-op if it was not attached."""
        ...

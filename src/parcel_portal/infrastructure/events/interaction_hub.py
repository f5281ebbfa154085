"""In-memory interaction event hub.

Implements InteractionSourceProtocol with a dictionary-based handler
registry. The host runtime (a UI bridge, a test) calls `emit()` for every
DOM-style event it observes: user interactions ("click", "scroll", ...) and
page lifecycle events ("beforeunload", "visibilitychange").

Architecture:
    - Implements InteractionSourceProtocol (hexagonal adapter pattern)
    - Dictionary-based handler registry (event name -> list of handlers)
    - Handlers may be plain callables or coroutine functions
    - Fail-open behavior (one handler failure doesn't break others)

Usage:
    hub = InteractionEventHub(logger=logger)
    hub.subscribe("click", tracker.record_activity)
    await hub.emit("click")
    await hub.emit("visibilitychange", hidden=True)
"""

import asyncio
import inspect
from collections import defaultdict
from typing import Any

from parcel_portal.domain.protocols.interaction_source_protocol import (
    InteractionHandler,
)
from parcel_portal.domain.protocols.logger_protocol import LoggerProtocol


class InteractionEventHub:
    """Named event hub with fail-open delivery.

    Thread Safety:
        - NOT thread-safe (single event loop design)

    Attributes:
        _handlers: Event name -> handlers, in subscription order.
        _logger: Logger for handler failures.
    """

    def __init__(self, logger: LoggerProtocol) -> None:
        """Initialize hub with logger."""
        self._handlers: dict[str, list[InteractionHandler]] = defaultdict(list)
        self._logger = logger

    def subscribe(self, event_name: str, handler: InteractionHandler) -> None:
        """Attach a handler. Attaching the same handler twice is a no-op."""
        if handler not in self._handlers[event_name]:
            self._handlers[event_name].append(handler)

    def unsubscribe(self, event_name: str, handler: InteractionHandler) -> None:
        """Detach a handler. No-op if it was not attached."""
        handlers = self._handlers.get(event_name)
        if handlers and handler in handlers:
            handlers.remove(handler)

    def handler_count(self, event_name: str) -> int:
        """Number of handlers attached to an event."""
        return len(self._handlers.get(event_name, ()))

    async def emit(self, event_name: str, /, **payload: Any) -> None:
        """Deliver an event to every attached handler.

        Synchronous handlers run in subscription order; coroutines they
        return are awaited together. Handler exceptions are logged, never
        propagated.

        Args:
            event_name: Event name ("click", "beforeunload", ...).
            **payload: Keyword payload passed to handlers (e.g. hidden=True).
        """
        # Copy: handlers may unsubscribe themselves while running.
        handlers = list(self._handlers.get(event_name, ()))
        if not handlers:
            return

        pending: list[tuple[InteractionHandler, Any]] = []
        for handler in handlers:
            try:
                outcome = handler(**payload)
            except Exception as e:
                self._log_failure(event_name, handler, e)
                continue
            if inspect.isawaitable(outcome):
                pending.append((handler, outcome))

        if not pending:
            return

        results = await asyncio.gather(
            *(awaitable for _, awaitable in pending),
            return_exceptions=True,
        )
        for (handler, _), result in zip(pending, results, strict=True):
            if isinstance(result, Exception):
                self._log_failure(event_name, handler, result)

    def _log_failure(
        self, event_name: str, handler: InteractionHandler, error: Exception
    ) -> None:
        self._logger.warning(
            "interaction_handler_failed",
            event_name=event_name,
            handler_name=getattr(handler, "__qualname__", repr(handler)),
            error_type=type(error).__name__,
            error_message=str(error),
        )

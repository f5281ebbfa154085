"""Auth change listener registry shared by the auth backend adapters."""

from itertools import count

from parcel_portal.domain.entities.auth import AuthSession
from parcel_portal.domain.enums import AuthChangeEvent
from parcel_portal.domain.protocols.auth_backend_protocol import AuthChangeCallback
from parcel_portal.domain.protocols.logger_protocol import LoggerProtocol


class ListenerSubscription:
    """Subscription handle returned to callers. Implements AuthSubscription."""

    def __init__(self, registry: "AuthListenerRegistry", key: int) -> None:
        self._registry = registry
        self._key = key

    def unsubscribe(self) -> None:
        self._registry.remove(self._key)


class AuthListenerRegistry:
    """Ordered set of auth change callbacks with fail-open notification."""

    def __init__(self, logger: LoggerProtocol) -> None:
        self._callbacks: dict[int, AuthChangeCallback] = {}
        self._keys = count()
        self._logger = logger

    def add(self, callback: AuthChangeCallback) -> ListenerSubscription:
        key = next(self._keys)
        self._callbacks[key] = callback
        return ListenerSubscription(self, key)

    def remove(self, key: int) -> None:
        self._callbacks.pop(key, None)

    def __len__(self) -> int:
        return len(self._callbacks)

    def notify(self, event: AuthChangeEvent, session: AuthSession | None) -> None:
        """Call every listener; a failing listener does not stop the others."""
        for callback in list(self._callbacks.values()):
            try:
                callback(event, session)
            except Exception as e:
                self._logger.warning(
                    "auth_listener_failed",
                    auth_event=event.value,
                    error_type=type(e).__name__,
                    error_message=str(e),
                )

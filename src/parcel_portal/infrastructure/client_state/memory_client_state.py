"""In-memory client state.

Implements ClientStateProtocol with one dictionary per scope. Stands in for
the browser's local and session storage when the package runs outside a
browser, and in tests.
"""

from parcel_portal.domain.protocols.client_state_protocol import StateScope


class InMemoryClientState:
    """Dictionary-backed local + session storage."""

    def __init__(self) -> None:
        self._scopes: dict[StateScope, dict[str, str]] = {
            "local": {},
            "session": {},
        }

    def get(self, key: str, *, scope: StateScope = "local") -> str | None:
        return self._scopes[scope].get(key)

    def set(self, key: str, value: str, *, scope: StateScope = "local") -> None:
        self._scopes[scope][key] = value

    def remove(self, key: str, *, scope: StateScope = "local") -> None:
        self._scopes[scope].pop(key, None)

    def clear(self) -> None:
        for values in self._scopes.values():
            values.clear()

    def snapshot(self, scope: StateScope = "local") -> dict[str, str]:
        """Copy of a scope's contents."""
        return dict(self._scopes[scope])

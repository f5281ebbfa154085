"""Client-side persisted state protocol (port).

Mirrors the browser's two storage areas: `local` survives restarts,
`session` lives for the tab. The portal keeps `lastActivity` (epoch ms) and
`sessionId` here; sign-out clears both areas in full.
"""

from typing import Literal, Protocol

StateScope = Literal["local", "session"]


class ClientStateProtocol(Protocol):
    """Key-value client state port."""

    def get(self, key: str, *, scope: StateScope = "local") -> str | None:
        """Read a value, None if absent."""
        ...

    def set(self, key: str, value: str, *, scope: StateScope = "local") -> None:
        """Write a value."""
        ...

    def remove(self, key: str, *, scope: StateScope = "local") -> None:
        """Delete a value if present."""
        ...

    def clear(self) -> None:
        """Delete everything in both scopes."""
        ...

"""Client environment protocol (port).

Supplies the details the runtime knows about the caller without a network
call: the user agent and the page referrer.
"""

from typing import Protocol


class ClientEnvironmentProtocol(Protocol):
    """Runtime-provided client details."""

    @property
    def user_agent(self) -> str:
        """Raw user agent string (empty if the runtime has none)."""
        ...

    @property
    def referrer(self) -> str | None:
        """Referrer of the current page, None if absent."""
        ...

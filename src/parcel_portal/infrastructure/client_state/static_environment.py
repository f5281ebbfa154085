"""Static client environment.

Implements ClientEnvironmentProtocol with fixed values, typically taken from
settings (`client_user_agent`, `client_referrer`). A UI bridge can update
them when navigation changes the referrer.
"""


class StaticClientEnvironment:
    """Client environment with settable values."""

    def __init__(self, *, user_agent: str = "", referrer: str | None = None) -> None:
        self._user_agent = user_agent
        self._referrer = referrer or None

    @property
    def user_agent(self) -> str:
        return self._user_agent

    @property
    def referrer(self) -> str | None:
        return self._referrer

    def update(
        self, *, user_agent: str | None = None, referrer: str | None = None
    ) -> None:
        """Replace the user agent and/or referrer."""
        if user_agent is not None:
            self._user_agent = user_agent
        if referrer is not None:
            self._referrer = referrer or None

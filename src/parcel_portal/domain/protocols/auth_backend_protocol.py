"""Hosted auth backend protocol (port).

The portal delegates identity to a hosted backend-as-a-service. This port
covers the five calls the session controller makes; adapters translate them
to the backend's REST API (RestAuthBackend) or keep everything in memory
(InMemoryAuthBackend).

Error Handling:
    Sign-in, sign-up and sign-out report failures as values
    (AuthResponse.error / returned AuthError). Adapters may still raise on
    programming errors; the controller converts those to AUTH_SYSTEM_ERROR.
"""

from collections.abc import Callable
from typing import Protocol

from parcel_portal.domain.entities.auth import AuthResponse, AuthSession
from parcel_portal.domain.enums import AuthChangeEvent
from parcel_portal.domain.errors import AuthError

AuthChangeCallback = Callable[[AuthChangeEvent, AuthSession | None], None]
"""Listener for backend-driven auth notifications."""


class AuthSubscription(Protocol):
    """Handle returned by on_auth_state_change()."""

    def unsubscribe(self) -> None:
        """Stop receiving notifications. Idempotent."""
        ...


class AuthBackendProtocol(Protocol):
    """Hosted auth backend port."""

    async def get_session(self) -> AuthSession | None:
        """Return the persisted session, or None if there is none or it expired."""
        ...

    def on_auth_state_change(self, callback: AuthChangeCallback) -> AuthSubscription:
        """Register a listener for auth notifications.

        Args:
            callback: Called with the event and the current session (None
                after sign-out).

        Returns:
            Subscription handle; call unsubscribe() on teardown.
        """
        ...

    async def sign_in_with_password(self, email: str, password: str) -> AuthResponse:
        """Authenticate with email and password.

        Returns:
            AuthResponse with data (user + session) or error, e.g.
            AuthError(message="Invalid login credentials").
        """
        ...

    async def sign_out(self) -> AuthError | None:
        """End the backend session. Returns the error, if any."""
        ...

    async def sign_up(self, email: str, password: str) -> AuthResponse:
        """Register a new account."""
        ...

    def current_access_token(self) -> str | None:
        """Bearer token of the current session, used for row-level security."""
        ...

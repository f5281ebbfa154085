"""Auth value types exchanged with the hosted auth backend.

`AuthResponse` keeps the `{data, error}` shape UI code branches on: exactly
one of the two is set for sign-in and sign-up.
"""

from dataclasses import dataclass
from datetime import UTC, datetime

from parcel_portal.domain.errors import AuthError


@dataclass(frozen=True, slots=True, kw_only=True)
class AuthUser:
    """Authenticated identity.

    Attributes:
        id: Backend user identifier.
        email: Sign-in email address.
    """

    id: str
    email: str


@dataclass(frozen=True, slots=True, kw_only=True)
class AuthSession:
    """Backend session for a signed-in user.

    Attributes:
        access_token: Bearer token for row-level-secured requests.
        refresh_token: Token used by the backend to extend the session.
        user: Session owner.
        expires_at: When the access token expires (None if unknown).
    """

    access_token: str
    refresh_token: str | None
    user: AuthUser
    expires_at: datetime | None = None

    def is_expired(self, now: datetime | None = None) -> bool:
        """Check whether the access token has expired."""
        if self.expires_at is None:
            return False
        return (now or datetime.now(UTC)) >= self.expires_at


@dataclass(frozen=True, slots=True, kw_only=True)
class AuthData:
    """Payload of a successful sign-in or sign-up.

    `session` is None after a sign-up that still requires email confirmation.
    """

    user: AuthUser | None
    session: AuthSession | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class AuthResponse:
    """Outcome of an auth call, returned instead of raising."""

    data: AuthData | None = None
    error: AuthError | None = None

    @property
    def ok(self) -> bool:
        """True when the call succeeded."""
        return self.error is None

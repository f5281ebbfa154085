"""Process-local session state holder.

Passed explicitly to the auth controller and the inactivity tracker so that
both read and write the same identity and activity clock without an ambient
singleton.
"""

from dataclasses import dataclass
from datetime import UTC, datetime

from parcel_portal.domain.entities.auth import AuthUser


@dataclass(slots=True)
class SessionState:
    """Current identity and activity clock.

    Created on load; populated on sign-in or resumed session; cleared on
    sign-out, inactivity timeout or page close.

    Attributes:
        current_user: Signed-in identity, or None.
        session_id: Audit session id generated at login or resume.
        last_activity_at: Last recorded user interaction (UTC).
    """

    current_user: AuthUser | None = None
    session_id: str | None = None
    last_activity_at: datetime | None = None

    @property
    def is_authenticated(self) -> bool:
        """True while a user is signed in."""
        return self.current_user is not None

    def begin(
        self, user: AuthUser, session_id: str, now: datetime | None = None
    ) -> None:
        """Start tracking a signed-in user."""
        self.current_user = user
        self.session_id = session_id
        self.last_activity_at = now or datetime.now(UTC)

    def touch(self, now: datetime | None = None) -> datetime:
        """Stamp user activity. Last writer wins."""
        self.last_activity_at = now or datetime.now(UTC)
        return self.last_activity_at

    def clear(self) -> None:
        """Forget the identity and session id."""
        self.current_user = None
        self.session_id = None

"""Access event types recorded in the audit trail.

Values are stored verbatim in the `event_type` column of `access_logs`.
"""

from enum import Enum


class AccessEventType(str, Enum):
    """Security-relevant session transitions."""

    LOGIN = "login"
    """Sign-in attempt. Paired with success=True/False."""

    LOGOUT = "logout"
    """Explicit or timeout-driven sign-out of a signed-in user."""

    SESSION_REFRESH = "session_refresh"
    """A persisted session was resumed on load."""

    ACCESS_DENIED = "access_denied"
    """A protected area refused the caller."""

"""Access audit DTOs.

AccessRequest carries the caller-supplied part of an access event; the audit
pipeline adds client details, location, device and timestamp.
"""

from dataclasses import dataclass

from parcel_portal.domain.enums import AccessEventType


@dataclass(frozen=True, slots=True, kw_only=True)
class AccessRequest:
    """Request to record one access event.

    Attributes:
        email: Email involved in the transition.
        event_type: Kind of transition.
        success: Whether the transition succeeded.
        user_id: Acting user, None for failed logins and denials.
        session_id: Audit session id, if known.
        access_token: Bearer token to write the row with. When None the
            table store falls back to its own token lookup.
    """

    email: str | None
    event_type: AccessEventType
    success: bool
    user_id: str | None = None
    session_id: str | None = None
    access_token: str | None = None

"""Application services."""

from parcel_portal.application.services.access_audit_logger import (
    AccessAuditLogger,
    generate_session_id,
)
from parcel_portal.application.services.auth_session_controller import (
    AuthSessionController,
)
from parcel_portal.application.services.session_activity_tracker import (
    SessionActivityTracker,
)

__all__ = [
    "AccessAuditLogger",
    "AuthSessionController",
    "SessionActivityTracker",
    "generate_session_id",
]

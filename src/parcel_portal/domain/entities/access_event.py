"""Access event entity - one immutable audit record.

Reference:
    - parcel_portal.application.services.access_audit_logger
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any

from parcel_portal.domain.entities.device_info import DeviceInfo
from parcel_portal.domain.entities.location import GeoLocation
from parcel_portal.domain.enums import AccessEventType


@dataclass(frozen=True, slots=True, kw_only=True)
class AccessEvent:
    """Audit record of a single session transition.

    Business Rules:
        - Append-only: written once, never updated or deleted.
        - Exactly one record per login attempt, logout, session refresh or
          denied access.
        - Owned by the audit store; the client never reads it back.

    Attributes:
        user_id: Acting user, None for failed logins and denials.
        email: Email involved in the transition.
        ip_address: Public IP or the "unknown"/"localhost" sentinel.
        user_agent: Raw user agent string.
        event_type: Kind of transition.
        success: Whether the transition succeeded.
        location: Location resolved from the IP.
        session_id: `<kind>_<timestamp>_<random-or-reason>`.
        referrer: Referrer of the page, if any.
        device_info: Parsed device details.
        created_at: When the record was assembled (UTC).
    """

    user_id: str | None
    email: str | None
    ip_address: str
    user_agent: str
    event_type: AccessEventType
    success: bool
    location: GeoLocation
    session_id: str | None
    referrer: str | None
    device_info: DeviceInfo
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    def to_record(self) -> dict[str, Any]:
        """Row for the `access_logs` table.

        Location is flattened into `location_*` columns; coordinates are
        stored as a "(lat,lng)" point literal.
        """
        coords = self.location.coords
        return {
            "user_id": self.user_id,
            "email": self.email,
            "ip_address": self.ip_address,
            "user_agent": self.user_agent,
            "event_type": self.event_type.value,
            "success": self.success,
            "location_country": self.location.country,
            "location_region": self.location.region,
            "location_city": self.location.city,
            "location_coords": str(coords) if coords else None,
            "session_id": self.session_id,
            "referrer": self.referrer,
            "device_info": self.device_info.to_dict(),
            "created_at": self.created_at.isoformat(),
        }

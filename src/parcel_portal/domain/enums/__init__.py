"""Domain enums package.

Usage:
    from parcel_portal.domain.enums import AccessEventType, AuthState
"""

from parcel_portal.domain.enums.access_event_type import AccessEventType
from parcel_portal.domain.enums.activity_state import ActivityState
from parcel_portal.domain.enums.auth_change_event import AuthChangeEvent
from parcel_portal.domain.enums.auth_state import AuthState

__all__ = [
    "AccessEventType",
    "ActivityState",
    "AuthChangeEvent",
    "AuthState",
]

"""Domain entities package.

Usage:
    from parcel_portal.domain.entities import AccessEvent, SessionState
"""

from parcel_portal.domain.entities.access_event import AccessEvent
from parcel_portal.domain.entities.auth import (
    AuthData,
    AuthResponse,
    AuthSession,
    AuthUser,
)
from parcel_portal.domain.entities.client_info import ClientInfo
from parcel_portal.domain.entities.device_info import DeviceInfo
from parcel_portal.domain.entities.location import Coordinates, GeoLocation
from parcel_portal.domain.entities.session_state import SessionState

__all__ = [
    "AccessEvent",
    "AuthData",
    "AuthResponse",
    "AuthSession",
    "AuthUser",
    "ClientInfo",
    "Coordinates",
    "DeviceInfo",
    "GeoLocation",
    "SessionState",
]

"""Unit tests for domain entities.

Tests cover:
- AccessEvent row layout for the access_logs table
- GeoLocation factories and coordinate formatting
- SessionState transitions
- AuthSession expiry
"""

from datetime import UTC, datetime, timedelta

import pytest

from parcel_portal.domain.entities import (
    AccessEvent,
    AuthSession,
    AuthUser,
    Coordinates,
    DeviceInfo,
    GeoLocation,
    SessionState,
)
from parcel_portal.domain.enums import AccessEventType


@pytest.mark.unit
class TestAccessEventRecord:
    """Test AccessEvent.to_record()."""

    def test_flattens_location_and_device(self):
        created = datetime(2024, 3, 1, 9, 30, tzinfo=UTC)
        event = AccessEvent(
            user_id="user-1",
            email="surveyor@example.com",
            ip_address="203.0.113.7",
            user_agent="UA",
            event_type=AccessEventType.LOGIN,
            success=True,
            location=GeoLocation(
                country="United States",
                region="Texas",
                city="Austin",
                coords=Coordinates(lat=30.2672, lng=-97.7431),
            ),
            session_id="session_1_abc",
            referrer=None,
            device_info=DeviceInfo(browser="Chrome", browser_version="120.0"),
            created_at=created,
        )

        record = event.to_record()

        assert record["event_type"] == "login"
        assert record["location_country"] == "United States"
        assert record["location_region"] == "Texas"
        assert record["location_city"] == "Austin"
        assert record["location_coords"] == "(30.2672,-97.7431)"
        assert record["device_info"]["browserVersion"] == "120.0"
        assert record["device_info"]["mobile"] is False
        assert record["referrer"] is None
        assert record["created_at"] == "2024-03-01T09:30:00+00:00"

    def test_missing_coords_stored_as_null(self):
        event = AccessEvent(
            user_id=None,
            email="x@example.com",
            ip_address="localhost",
            user_agent="",
            event_type=AccessEventType.ACCESS_DENIED,
            success=False,
            location=GeoLocation.local(),
            session_id="denied_1_unauthorized",
            referrer=None,
            device_info=DeviceInfo(),
        )

        record = event.to_record()

        assert record["location_coords"] is None
        assert record["location_country"] == "Local/Development"
        assert record["user_id"] is None
        assert set(record) == {
            "user_id",
            "email",
            "ip_address",
            "user_agent",
            "event_type",
            "success",
            "location_country",
            "location_region",
            "location_city",
            "location_coords",
            "session_id",
            "referrer",
            "device_info",
            "created_at",
        }


@pytest.mark.unit
class TestGeoLocation:
    def test_factories(self):
        assert GeoLocation.local().country == "Local/Development"
        assert GeoLocation.unknown().country == "Unknown"
        assert GeoLocation.unknown().coords is None


@pytest.mark.unit
class TestSessionState:
    """Test SessionState transitions."""

    def test_begin_touch_clear(self):
        state = SessionState()
        user = AuthUser(id="u1", email="a@example.com")
        start = datetime(2024, 1, 1, tzinfo=UTC)

        state.begin(user, "session_1_x", start)
        assert state.is_authenticated
        assert state.last_activity_at == start

        later = start + timedelta(minutes=3)
        assert state.touch(later) == later

        state.clear()
        assert not state.is_authenticated
        assert state.session_id is None


@pytest.mark.unit
class TestAuthSession:
    def test_expiry(self):
        user = AuthUser(id="u1", email="a@example.com")
        now = datetime(2024, 1, 1, tzinfo=UTC)
        session = AuthSession(
            access_token="t", refresh_token=None, user=user, expires_at=now
        )

        assert session.is_expired(now)
        assert not session.is_expired(now - timedelta(seconds=1))
        assert not AuthSession(access_token="t", refresh_token=None, user=user).is_expired()

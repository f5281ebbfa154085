"""Unit tests for AccessAuditLogger.

Tests cover:
- Pipeline order and assembled row
- Wrapper conventions (event type, success, session id formats)
- Best-effort boundary: rejected inserts and raising enrichers yield False
"""

import re
from unittest.mock import AsyncMock

import pytest
from freezegun import freeze_time

from parcel_portal.application.dtos import AccessRequest
from parcel_portal.application.services import generate_session_id
from parcel_portal.core.enums import ErrorCode
from parcel_portal.core.result import Failure, Success
from parcel_portal.domain.enums import AccessEventType

SESSION_ID_PATTERN = re.compile(r"^session_\d+_[0-9a-z]{9}$")


def rows(table_store):
    return table_store.rows["access_logs"]


@pytest.mark.unit
class TestGenerateSessionId:
    """Test session id format."""

    def test_format(self):
        assert SESSION_ID_PATTERN.match(generate_session_id())

    @freeze_time("2024-01-01 12:00:00")
    def test_uses_epoch_milliseconds(self):
        assert generate_session_id().startswith("session_1704110400000_")

    def test_ids_are_unique(self):
        assert len({generate_session_id() for _ in range(50)}) == 50


@pytest.mark.unit
class TestRecordAccess:
    """Test the audit pipeline."""

    async def test_success_writes_enriched_row(
        self, audit_logger, table_store, mock_location_enricher, mock_device_enricher
    ):
        result = await audit_logger.record_access(
            AccessRequest(
                email="surveyor@example.com",
                event_type=AccessEventType.LOGIN,
                success=True,
                user_id="user-1",
                session_id="session_1_abcdefghi",
            )
        )

        assert isinstance(result, Success)
        mock_location_enricher.enrich.assert_awaited_once_with("203.0.113.7")
        mock_device_enricher.enrich.assert_awaited_once()

        [row] = rows(table_store)
        assert row["user_id"] == "user-1"
        assert row["ip_address"] == "203.0.113.7"
        assert row["event_type"] == "login"
        assert row["success"] is True
        assert row["location_city"] == "Austin"
        assert row["device_info"]["browser"] == "Chrome"
        assert row["referrer"] == "https://portal.example.com/"
        assert row["session_id"] == "session_1_abcdefghi"

    async def test_rejected_insert_is_failure(self, audit_logger, table_store):
        table_store.reject_with = "permission denied for table access_logs"

        result = await audit_logger.record_access(
            AccessRequest(email="a@example.com", event_type=AccessEventType.LOGOUT, success=True)
        )

        match result:
            case Failure(error=error):
                assert error.code is ErrorCode.AUDIT_RECORD_FAILED
                assert "permission denied" in error.message
            case _:
                pytest.fail("expected Failure")

    async def test_raising_probe_is_failure(self, audit_logger, mock_probe, table_store):
        mock_probe.probe = AsyncMock(side_effect=RuntimeError("network down"))

        result = await audit_logger.record_access(
            AccessRequest(email="a@example.com", event_type=AccessEventType.LOGIN, success=True)
        )

        assert isinstance(result, Failure)
        assert result.error.code is ErrorCode.AUDIT_PIPELINE_FAILED
        assert rows(table_store) == []


@pytest.mark.unit
class TestLogAccessBoundary:
    """Test that the public boundary never raises."""

    async def test_true_on_success(self, audit_logger):
        assert await audit_logger.log_access(
            email="a@example.com", event_type=AccessEventType.LOGIN, success=True
        )

    async def test_rejecting_store_returns_false(self, audit_logger, table_store, mock_logger):
        table_store.reject_with = "insert rejected"

        assert await audit_logger.log_login("user-1", "a@example.com") is False
        mock_logger.warning.assert_called_once()

    async def test_raising_enricher_returns_false(self, audit_logger, mock_device_enricher):
        mock_device_enricher.enrich = AsyncMock(side_effect=ValueError("bad agent"))

        assert await audit_logger.log_logout("user-1", "a@example.com") is False


@pytest.mark.unit
class TestWrappers:
    """Test wrapper conventions."""

    async def test_log_login_generates_session_id(self, audit_logger, table_store):
        await audit_logger.log_login("user-1", "a@example.com")

        [row] = rows(table_store)
        assert row["event_type"] == "login"
        assert row["success"] is True
        assert SESSION_ID_PATTERN.match(row["session_id"])

    async def test_log_login_keeps_given_session_id(self, audit_logger, table_store):
        await audit_logger.log_login("user-1", "a@example.com", "session_5_given1234")

        assert rows(table_store)[0]["session_id"] == "session_5_given1234"

    async def test_log_failed_login(self, audit_logger, table_store):
        await audit_logger.log_failed_login("a@example.com")

        [row] = rows(table_store)
        assert row["user_id"] is None
        assert row["success"] is False
        assert row["event_type"] == "login"
        assert re.match(r"^failed_\d+_invalid_credentials$", row["session_id"])

    async def test_log_logout_without_session_id(self, audit_logger, table_store):
        await audit_logger.log_logout("user-1", "a@example.com")

        [row] = rows(table_store)
        assert row["event_type"] == "logout"
        assert row["session_id"] is None

    async def test_log_session_refresh(self, audit_logger, table_store):
        await audit_logger.log_session_refresh("user-1", "a@example.com", "session_1_x")

        [row] = rows(table_store)
        assert row["event_type"] == "session_refresh"
        assert row["success"] is True

    async def test_log_access_denied(self, audit_logger, table_store):
        await audit_logger.log_access_denied(reason="not_admin")

        [row] = rows(table_store)
        assert row["event_type"] == "access_denied"
        assert row["success"] is False
        assert row["email"] is None
        assert re.match(r"^denied_\d+_not_admin$", row["session_id"])

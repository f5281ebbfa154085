"""Unit tests for RestTableStore (hosted table REST API)."""

import json

import httpx
import pytest

from parcel_portal.core.enums import ErrorCode
from parcel_portal.core.result import Failure, Success
from parcel_portal.infrastructure.backend import RestTableStore

INSERT_URL = "https://project.example.co/rest/v1/access_logs"


def make_store(mock_logger, token=None):
    return RestTableStore(
        base_url="https://project.example.co",
        api_key="anon-key",
        timeout=10.0,
        logger=mock_logger,
        access_token_provider=lambda: token,
    )


@pytest.mark.unit
class TestRestTableStore:
    """Test row inserts."""

    async def test_insert_posts_row_with_user_token(self, mock_logger, httpx_mock):
        httpx_mock.add_response(method="POST", url=INSERT_URL, status_code=201)
        store = make_store(mock_logger, token="user-token")

        result = await store.insert("access_logs", {"event_type": "login"})

        assert isinstance(result, Success)
        request = httpx_mock.get_requests()[0]
        assert request.headers["Authorization"] == "Bearer user-token"
        assert request.headers["apikey"] == "anon-key"
        assert request.headers["Prefer"] == "return=minimal"
        assert json.loads(request.content) == {"event_type": "login"}

    async def test_anonymous_insert_uses_api_key(self, mock_logger, httpx_mock):
        httpx_mock.add_response(method="POST", url=INSERT_URL, status_code=201)

        await make_store(mock_logger).insert("access_logs", {"event_type": "login"})

        assert httpx_mock.get_requests()[0].headers["Authorization"] == "Bearer anon-key"

    async def test_rejection_becomes_storage_error(self, mock_logger, httpx_mock):
        httpx_mock.add_response(
            method="POST",
            url=INSERT_URL,
            status_code=403,
            json={"message": "new row violates row-level security policy"},
        )

        result = await make_store(mock_logger).insert("access_logs", {})

        match result:
            case Failure(error=error):
                assert error.code is ErrorCode.STORAGE_INSERT_FAILED
                assert error.table == "access_logs"
                assert "row-level security" in error.message
            case _:
                pytest.fail("expected Failure")

    async def test_unreachable_backend(self, mock_logger, httpx_mock):
        httpx_mock.add_exception(httpx.ConnectError("refused"), url=INSERT_URL)

        result = await make_store(mock_logger).insert("access_logs", {})

        assert isinstance(result, Failure)
        assert result.error.code is ErrorCode.STORAGE_UNAVAILABLE

    async def test_explicit_token_wins_over_provider(self, mock_logger, httpx_mock):
        httpx_mock.add_response(method="POST", url=INSERT_URL, status_code=201)
        store = make_store(mock_logger, token=None)

        await store.insert("access_logs", {}, access_token="captured-token")

        request = httpx_mock.get_requests()[0]
        assert request.headers["Authorization"] == "Bearer captured-token"

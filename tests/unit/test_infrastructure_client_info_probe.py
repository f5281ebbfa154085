"""Unit tests for ClientInfoProbe (public IP + user agent).

Tests cover:
- IP echo success, missing field and failure fallbacks
- User agent taken from the client environment
"""

import httpx
import pytest

from parcel_portal.infrastructure.client_state import StaticClientEnvironment
from parcel_portal.infrastructure.enrichers import ClientInfoProbe

ECHO_URL = "https://api.ipify.org?format=json"


@pytest.fixture
def probe(mock_logger):
    return ClientInfoProbe(
        environment=StaticClientEnvironment(user_agent="TestAgent/1.0"),
        url="https://api.ipify.org",
        timeout=3.0,
        logger=mock_logger,
    )


@pytest.mark.unit
class TestClientInfoProbe:
    """Test IP discovery and fallbacks."""

    async def test_returns_echoed_ip_and_user_agent(self, probe, httpx_mock):
        httpx_mock.add_response(url=ECHO_URL, json={"ip": "203.0.113.7"})

        info = await probe.probe()

        assert info.ip == "203.0.113.7"
        assert info.user_agent == "TestAgent/1.0"

    async def test_missing_ip_field_is_unknown(self, probe, httpx_mock):
        httpx_mock.add_response(url=ECHO_URL, json={})

        assert (await probe.probe()).ip == "unknown"

    async def test_timeout_falls_back_to_localhost(self, probe, httpx_mock, mock_logger):
        httpx_mock.add_exception(httpx.ConnectTimeout("timed out"), url=ECHO_URL)

        info = await probe.probe()

        assert info.ip == "localhost"
        assert info.user_agent == "TestAgent/1.0"
        mock_logger.warning.assert_called()

    async def test_connection_error_falls_back_to_localhost(self, probe, httpx_mock):
        httpx_mock.add_exception(httpx.ConnectError("refused"), url=ECHO_URL)

        assert (await probe.probe()).ip == "localhost"

    async def test_server_error_falls_back_to_localhost(self, probe, httpx_mock):
        httpx_mock.add_response(url=ECHO_URL, status_code=500)

        assert (await probe.probe()).ip == "localhost"

"""Unit tests for IPLocationEnricher (ipapi.co geolocation).

Tests cover:
- Local, private and sentinel addresses answered without a request
- Field mapping from the provider response
- Degradation to "Unknown" on errors, timeouts and error payloads
"""

import httpx
import pytest

from parcel_portal.domain.entities import Coordinates, GeoLocation
from parcel_portal.infrastructure.enrichers import IPLocationEnricher

LOOKUP_URL = "https://ipapi.co/203.0.113.7/json/"


@pytest.fixture
def enricher(mock_logger):
    return IPLocationEnricher(
        url_template="https://ipapi.co/{ip}/json/",
        timeout=3.0,
        lookup_user_agent="FLDP-GIS-Portal/1.0",
        logger=mock_logger,
    )


@pytest.mark.unit
class TestLocalAddresses:
    """Test addresses that never reach the service."""

    @pytest.mark.parametrize(
        "ip_address",
        ["unknown", "localhost", "127.0.0.1", "192.168.1.20", "10.0.0.5"],
    )
    async def test_local_address_skips_lookup(self, enricher, httpx_mock, ip_address):
        location = await enricher.enrich(ip_address)

        assert location == GeoLocation.local()
        assert httpx_mock.get_requests() == []


@pytest.mark.unit
class TestLookup:
    """Test provider lookups."""

    async def test_maps_provider_fields(self, enricher, httpx_mock):
        httpx_mock.add_response(
            url=LOOKUP_URL,
            json={
                "ip": "203.0.113.7",
                "city": "Austin",
                "region": "Texas",
                "country_name": "United States",
                "latitude": 30.2672,
                "longitude": -97.7431,
            },
        )

        location = await enricher.enrich("203.0.113.7")

        assert location.country == "United States"
        assert location.region == "Texas"
        assert location.city == "Austin"
        assert location.coords == Coordinates(lat=30.2672, lng=-97.7431)

    async def test_sends_portal_user_agent(self, enricher, httpx_mock):
        httpx_mock.add_response(url=LOOKUP_URL, json={"country_name": "Canada"})

        await enricher.enrich("203.0.113.7")

        request = httpx_mock.get_requests()[0]
        assert request.headers["User-Agent"] == "FLDP-GIS-Portal/1.0"
        assert request.headers["Accept"] == "application/json"

    async def test_missing_fields_default(self, enricher, httpx_mock):
        httpx_mock.add_response(url=LOOKUP_URL, json={"latitude": 30.1})

        location = await enricher.enrich("203.0.113.7")

        assert location.country == "Unknown"
        assert location.region is None
        assert location.coords is None

    async def test_error_payload_is_unknown(self, enricher, httpx_mock):
        httpx_mock.add_response(
            url=LOOKUP_URL, json={"error": True, "reason": "RateLimited"}
        )

        assert await enricher.enrich("203.0.113.7") == GeoLocation.unknown()

    async def test_http_error_is_unknown(self, enricher, httpx_mock):
        httpx_mock.add_response(url=LOOKUP_URL, status_code=429)

        assert await enricher.enrich("203.0.113.7") == GeoLocation.unknown()

    async def test_timeout_is_unknown(self, enricher, httpx_mock, mock_logger):
        httpx_mock.add_exception(httpx.ReadTimeout("timed out"), url=LOOKUP_URL)

        assert await enricher.enrich("203.0.113.7") == GeoLocation.unknown()
        mock_logger.warning.assert_called()

    async def test_non_json_body_is_unknown(self, enricher, httpx_mock):
        httpx_mock.add_response(url=LOOKUP_URL, text="<html>busy</html>")

        assert await enricher.enrich("203.0.113.7") == GeoLocation.unknown()

"""IP geolocation enricher implementation.

Resolves public IP addresses to country/region/city/coordinates through the
ipapi.co JSON API. Loopback, private and sentinel addresses are answered
locally without a network call.

Implements LocationEnricher protocol with fail-open behavior.
"""

from typing import Any

from parcel_portal.core.constants import LOCAL_IP_VALUES, PRIVATE_IP_PREFIXES
from parcel_portal.core.result import Failure, Success
from parcel_portal.domain.entities.location import Coordinates, GeoLocation
from parcel_portal.domain.protocols.logger_protocol import LoggerProtocol
from parcel_portal.infrastructure.http.base_json_client import BaseJSONClient


def is_local_address(ip_address: str) -> bool:
    """True for sentinel, loopback and private addresses."""
    return ip_address in LOCAL_IP_VALUES or ip_address.startswith(
        PRIVATE_IP_PREFIXES
    )


class IPLocationEnricher(BaseJSONClient):
    """Location enricher backed by an HTTP geolocation service.

    Implements LocationEnricher protocol (structural typing).

    Behavior:
        - Local addresses: GeoLocation.local(), no lookup
        - Fail-open: GeoLocation.unknown() on any lookup failure
        - Bounded: every lookup carries the configured timeout
    """

    def __init__(
        self,
        *,
        url_template: str,
        timeout: float,
        lookup_user_agent: str,
        logger: LoggerProtocol,
    ) -> None:
        """Initialize enricher.

        Args:
            url_template: Lookup URL with an `{ip}` placeholder,
                e.g. "https://ipapi.co/{ip}/json/".
            timeout: Request timeout in seconds.
            lookup_user_agent: User-Agent header sent to the service.
            logger: Logger for lookup failures.
        """
        super().__init__(
            base_url="",
            service_name="geolocation",
            timeout=timeout,
            logger=logger,
            default_headers={"User-Agent": lookup_user_agent},
        )
        self._url_template = url_template

    async def enrich(self, ip_address: str) -> GeoLocation:
        """Resolve IP address to a location.

        Args:
            ip_address: Client IP (IPv4 or IPv6) or a sentinel value.

        Returns:
            GeoLocation; never raises.
        """
        if not ip_address or is_local_address(ip_address):
            return GeoLocation.local()

        try:
            result = await self._get_json(
                path=self._url_template.format(ip=ip_address),
                operation="geolocate",
            )
        except Exception as e:
            self._logger.warning(
                "Could not get location from IP",
                ip_address=ip_address,
                error=str(e),
            )
            return GeoLocation.unknown()

        match result:
            case Failure(error=error):
                self._logger.warning(
                    "Could not get location from IP",
                    ip_address=ip_address,
                    error=error.message,
                )
                return GeoLocation.unknown()
            case Success(value=data):
                if data.get("error"):
                    self._logger.warning(
                        "Geolocation lookup rejected",
                        ip_address=ip_address,
                        reason=str(data.get("reason", "")),
                    )
                    return GeoLocation.unknown()
                return self._to_location(data)

    @staticmethod
    def _to_location(data: dict[str, Any]) -> GeoLocation:
        lat = data.get("latitude")
        lng = data.get("longitude")
        return GeoLocation(
            country=data.get("country_name") or GeoLocation.unknown().country,
            region=data.get("region") or None,
            city=data.get("city") or None,
            # Zero coordinates are treated as missing.
            coords=Coordinates(lat=float(lat), lng=float(lng)) if lat and lng else None,
        )

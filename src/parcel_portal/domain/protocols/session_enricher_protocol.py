"""Access event enricher protocols (ports).

Enrichers gather the client details attached to every access event: the
public IP and user agent, the IP's location, and the parsed device.

Behavior (all enrichers):
    - Fail-open: return a safe default value, never raise
    - Bounded: network lookups carry an explicit timeout
"""

from typing import Protocol

from parcel_portal.domain.entities.client_info import ClientInfo
from parcel_portal.domain.entities.device_info import DeviceInfo
from parcel_portal.domain.entities.location import GeoLocation


class ClientInfoProbeProtocol(Protocol):
    """Probe for the caller's public IP and user agent."""

    async def probe(self) -> ClientInfo:
        """Return the client's IP ("localhost" on failure) and user agent."""
        ...


class LocationEnricher(Protocol):
    """IP geolocation port."""

    async def enrich(self, ip_address: str) -> GeoLocation:
        """Resolve an IP to a coarse location.

        Returns:
            GeoLocation.local() for sentinel/private IPs without a lookup,
            GeoLocation.unknown() on any lookup failure.
        """
        ...


class DeviceEnricher(Protocol):
    """User agent parsing port."""

    async def enrich(self, user_agent: str) -> DeviceInfo:
        """Parse a user agent. Empty or unparseable input yields defaults."""
        ...

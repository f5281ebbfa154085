"""Access event enrichers.

Implementations of the enricher ports:
- ClientInfoProbe: public IP (IP echo service) and user agent
- IPLocationEnricher: IP geolocation (ipapi.co)
- UserAgentDeviceEnricher: device, browser and OS from the user agent
"""

from parcel_portal.infrastructure.enrichers.client_info_probe import ClientInfoProbe
from parcel_portal.infrastructure.enrichers.device_enricher import (
    UserAgentDeviceEnricher,
    parse_user_agent,
)
from parcel_portal.infrastructure.enrichers.location_enricher import (
    IPLocationEnricher,
    is_local_address,
)

__all__ = [
    "ClientInfoProbe",
    "IPLocationEnricher",
    "UserAgentDeviceEnricher",
    "is_local_address",
    "parse_user_agent",
]

"""Client info probe implementation.

Discovers the caller's public IP through an IP echo service and pairs it with
the user agent supplied by the client environment.

Implements ClientInfoProbeProtocol with fail-open behavior.
"""

from parcel_portal.core.constants import LOCALHOST_IP, UNKNOWN_IP
from parcel_portal.core.result import Failure, Success
from parcel_portal.domain.entities.client_info import ClientInfo
from parcel_portal.domain.protocols.client_environment_protocol import (
    ClientEnvironmentProtocol,
)
from parcel_portal.domain.protocols.logger_protocol import LoggerProtocol
from parcel_portal.infrastructure.http.base_json_client import BaseJSONClient


class ClientInfoProbe(BaseJSONClient):
    """IP echo probe.

    Behavior:
        - Reachable service, `ip` present: that address
        - Reachable service, `ip` missing: "unknown"
        - Timeout, network error, non-2xx or malformed body: "localhost"
    """

    def __init__(
        self,
        *,
        environment: ClientEnvironmentProtocol,
        url: str,
        timeout: float,
        logger: LoggerProtocol,
    ) -> None:
        """Initialize probe.

        Args:
            environment: Source of the user agent.
            url: IP echo service URL, e.g. "https://api.ipify.org".
            timeout: Request timeout in seconds.
            logger: Logger for lookup failures.
        """
        super().__init__(
            base_url=url,
            service_name="ip_echo",
            timeout=timeout,
            logger=logger,
        )
        self._environment = environment

    async def probe(self) -> ClientInfo:
        """Return the client's public IP and user agent. Never raises."""
        return ClientInfo(ip=await self._fetch_ip(), user_agent=self._user_agent())

    def _user_agent(self) -> str:
        try:
            return self._environment.user_agent or ""
        except Exception as e:
            self._logger.warning("Could not read user agent", error=str(e))
            return ""

    async def _fetch_ip(self) -> str:
        try:
            result = await self._get_json(
                params={"format": "json"},
                operation="fetch_public_ip",
            )
        except Exception as e:
            self._logger.warning("Could not fetch real IP address", error=str(e))
            return LOCALHOST_IP

        match result:
            case Failure(error=error):
                self._logger.warning(
                    "Could not fetch real IP address", error=error.message
                )
                return LOCALHOST_IP
            case Success(value=data):
                ip = data.get("ip")
                return str(ip) if ip else UNKNOWN_IP

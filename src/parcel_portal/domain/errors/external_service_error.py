"""External HTTP service error type.

Used by the shared HTTP client for IP echo, geolocation and hosted backend
calls.
"""

from dataclasses import dataclass

from parcel_portal.core.errors import DomainError


@dataclass(frozen=True, slots=True, kw_only=True)
class ExternalServiceError(DomainError):
    """External service call failure.

    Attributes:
        code: EXTERNAL_SERVICE_TIMEOUT, EXTERNAL_SERVICE_UNAVAILABLE or
            EXTERNAL_SERVICE_BAD_RESPONSE.
        message: Human-readable message.
        service_name: Service identifier ("ip_echo", "geolocation", ...).
        status_code: HTTP status code when a response was received.
        details: Additional context.
    """

    service_name: str
    status_code: int | None = None

"""Base JSON client for external HTTP services.

Provides the request execution and JSON parsing shared by the IP echo probe,
the geolocation enricher and the hosted backend adapters:
- Request execution with timeout/connection error handling
- Status code interpretation
- JSON parsing with type validation
- Structured logging with service context

Subclasses decide what a failure means for them (fall back to a sentinel,
return an AuthError, ...).

Architecture:
    - Infrastructure layer (adapter for external APIs)
    - Uses httpx for async HTTP
    - Returns Result types (no exceptions for service errors)
"""

from typing import Any

import httpx

from parcel_portal.core.enums import ErrorCode
from parcel_portal.core.result import Failure, Result, Success
from parcel_portal.domain.errors import ExternalServiceError
from parcel_portal.domain.protocols.logger_protocol import LoggerProtocol

RESPONSE_BODY_MAX_LENGTH = 500


class BaseJSONClient:
    """Base class for JSON-over-HTTP service clients.

    Attributes:
        _base_url: Service base URL (without trailing slash).
        _service_name: Service identifier for logging and error values.
        _timeout: HTTP request timeout in seconds.
        _logger: Structured logger bound with the service name.
    """

    def __init__(
        self,
        *,
        base_url: str,
        service_name: str,
        timeout: float,
        logger: LoggerProtocol,
        default_headers: dict[str, str] | None = None,
    ) -> None:
        """Initialize base client.

        Args:
            base_url: Service base URL (e.g., "https://api.ipify.org").
            service_name: Service identifier (e.g., "ip_echo").
            timeout: Request timeout in seconds (connect + read).
            logger: Logger for request failures.
            default_headers: Headers sent with every request.
        """
        self._base_url = base_url.rstrip("/")
        self._service_name = service_name
        self._timeout = timeout
        self._logger = logger.bind(service=service_name)
        self._default_headers = {"Accept": "application/json"}
        if default_headers:
            self._default_headers.update(default_headers)

    async def _execute_request(
        self,
        *,
        method: str,
        path: str = "",
        headers: dict[str, str] | None = None,
        params: dict[str, str] | None = None,
        json_data: dict[str, Any] | None = None,
        operation: str,
    ) -> Result[httpx.Response, ExternalServiceError]:
        """Execute HTTP request with error handling.

        Args:
            method: HTTP method (GET, POST, etc.).
            path: URL path relative to base_url, or an absolute URL.
            headers: Extra headers for this request.
            params: Optional query parameters.
            json_data: Optional JSON body.
            operation: Operation name for logging.

        Returns:
            Success(httpx.Response): Raw response (any status) on success.
            Failure(ExternalServiceError): On timeout or connection error.
        """
        url = path if path.startswith("http") else f"{self._base_url}{path}"
        request_headers = {**self._default_headers, **(headers or {})}

        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                response = await client.request(
                    method=method,
                    url=url,
                    headers=request_headers,
                    params=params,
                    json=json_data,
                )
            return Success(value=response)

        except httpx.TimeoutException as e:
            self._logger.warning(
                "external_service_timeout",
                operation=operation,
                timeout=self._timeout,
                error=str(e),
            )
            return Failure(
                error=ExternalServiceError(
                    code=ErrorCode.EXTERNAL_SERVICE_TIMEOUT,
                    message=f"{self._service_name} request timed out",
                    service_name=self._service_name,
                )
            )

        except httpx.HTTPError as e:
            self._logger.warning(
                "external_service_connection_error",
                operation=operation,
                error=str(e),
            )
            return Failure(
                error=ExternalServiceError(
                    code=ErrorCode.EXTERNAL_SERVICE_UNAVAILABLE,
                    message=f"Could not reach {self._service_name}: {e}",
                    service_name=self._service_name,
                )
            )

    def _parse_json_object(
        self, response: httpx.Response, operation: str
    ) -> Result[dict[str, Any], ExternalServiceError]:
        """Parse a response body that must be a JSON object.

        Args:
            response: Response to parse (status is not checked here).
            operation: Operation name for logging.

        Returns:
            Success(dict) or Failure(ExternalServiceError) for invalid JSON or
            a non-object body.
        """
        try:
            data = response.json()
        except ValueError as e:
            self._logger.warning(
                "external_service_invalid_json",
                operation=operation,
                status_code=response.status_code,
                error=str(e),
            )
            return Failure(
                error=ExternalServiceError(
                    code=ErrorCode.EXTERNAL_SERVICE_BAD_RESPONSE,
                    message=f"{self._service_name} returned invalid JSON",
                    service_name=self._service_name,
                    status_code=response.status_code,
                    details={"body": response.text[:RESPONSE_BODY_MAX_LENGTH]},
                )
            )

        if not isinstance(data, dict):
            return Failure(
                error=ExternalServiceError(
                    code=ErrorCode.EXTERNAL_SERVICE_BAD_RESPONSE,
                    message=f"{self._service_name} returned unexpected JSON type",
                    service_name=self._service_name,
                    status_code=response.status_code,
                )
            )

        return Success(value=data)

    async def _get_json(
        self,
        *,
        path: str = "",
        params: dict[str, str] | None = None,
        headers: dict[str, str] | None = None,
        operation: str,
    ) -> Result[dict[str, Any], ExternalServiceError]:
        """GET a JSON object, treating any non-2xx status as a failure."""
        result = await self._execute_request(
            method="GET",
            path=path,
            params=params,
            headers=headers,
            operation=operation,
        )
        match result:
            case Failure(error=error):
                return Failure(error=error)
            case Success(value=response):
                pass

        if not response.is_success:
            self._logger.warning(
                "external_service_error_status",
                operation=operation,
                status_code=response.status_code,
            )
            return Failure(
                error=ExternalServiceError(
                    code=ErrorCode.EXTERNAL_SERVICE_BAD_RESPONSE,
                    message=f"{self._service_name} returned HTTP {response.status_code}",
                    service_name=self._service_name,
                    status_code=response.status_code,
                )
            )

        return self._parse_json_object(response, operation)

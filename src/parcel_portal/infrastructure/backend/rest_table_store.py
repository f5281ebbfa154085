"""Hosted table REST adapter.

Inserts rows through the hosted backend's table API:

    POST {url}/rest/v1/{table}
    Prefer: return=minimal

Requests carry the public API key and, when a user is signed in, the user's
access token so row-level security policies apply to the insert.
"""

from collections.abc import Callable
from typing import Any

import httpx

from parcel_portal.core.enums import ErrorCode
from parcel_portal.core.result import Failure, Result, Success
from parcel_portal.domain.errors import StorageError
from parcel_portal.domain.protocols.logger_protocol import LoggerProtocol
from parcel_portal.infrastructure.http.base_json_client import BaseJSONClient

TABLE_PATH = "/rest/v1/{table}"


class RestTableStore(BaseJSONClient):
    """Table store over the hosted REST API.

    Implements TableStoreProtocol (structural typing).
    """

    def __init__(
        self,
        *,
        base_url: str,
        api_key: str,
        timeout: float,
        logger: LoggerProtocol,
        access_token_provider: Callable[[], str | None] | None = None,
    ) -> None:
        """Initialize adapter.

        Args:
            base_url: Project URL.
            api_key: Public (anon) API key.
            timeout: Request timeout in seconds.
            logger: Logger for rejected inserts.
            access_token_provider: Returns the signed-in user's token, or None
                to authenticate with the API key alone.
        """
        super().__init__(
            base_url=base_url,
            service_name="table_store",
            timeout=timeout,
            logger=logger,
            default_headers={"apikey": api_key, "Prefer": "return=minimal"},
        )
        self._api_key = api_key
        self._access_token_provider = access_token_provider

    async def insert(
        self,
        table: str,
        record: dict[str, Any],
        *,
        access_token: str | None = None,
    ) -> Result[None, StorageError]:
        """Insert one row. Never raises for backend rejections.

        An explicit `access_token` wins over the provider, whose session may
        already be gone by the time a background audit write gets here.
        """
        token = access_token
        if token is None and self._access_token_provider is not None:
            token = self._access_token_provider()
        result = await self._execute_request(
            method="POST",
            path=TABLE_PATH.format(table=table),
            headers={"Authorization": f"Bearer {token or self._api_key}"},
            json_data=record,
            operation="insert",
        )
        match result:
            case Failure(error=error):
                return Failure(
                    error=StorageError(
                        code=ErrorCode.STORAGE_UNAVAILABLE,
                        message=error.message,
                        table=table,
                    )
                )
            case Success(value=response):
                pass

        if response.is_success:
            return Success(value=None)

        message = _rejection_message(response) or (
            f"Insert into {table} rejected with HTTP {response.status_code}"
        )
        self._logger.warning(
            "table_insert_rejected",
            table=table,
            status_code=response.status_code,
        )
        return Failure(
            error=StorageError(
                code=ErrorCode.STORAGE_INSERT_FAILED,
                message=message,
                table=table,
                details={"status_code": str(response.status_code)},
            )
        )


def _rejection_message(response: httpx.Response) -> str | None:
    try:
        data = response.json()
    except ValueError:
        return None
    if isinstance(data, dict) and data.get("message"):
        return str(data["message"])
    return None

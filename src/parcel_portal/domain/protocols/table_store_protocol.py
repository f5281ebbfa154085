"""Table store protocol (port).

Used solely by the access audit logger to append one row per event to the
`access_logs` table. Row-level security on the backend allows inserts only.
"""

from typing import Any, Protocol

from parcel_portal.core.result import Result
from parcel_portal.domain.errors import StorageError


class TableStoreProtocol(Protocol):
    """Append-only table store port."""

    async def insert(
        self,
        table: str,
        record: dict[str, Any],
        *,
        access_token: str | None = None,
    ) -> Result[None, StorageError]:
        """Insert a single row.

        Args:
            table: Target table name.
            record: Column -> value mapping (JSON-serializable).
            access_token: User token captured when the event happened. Takes
                precedence over whatever session is current at insert time.

        Returns:
            Success(None) when the row was accepted, Failure(StorageError)
            otherwise. Implementations NEVER raise for backend rejections.
        """
        ...

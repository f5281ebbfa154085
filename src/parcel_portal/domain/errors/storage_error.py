"""Table store error type."""

from dataclasses import dataclass

from parcel_portal.core.errors import DomainError


@dataclass(frozen=True, slots=True, kw_only=True)
class StorageError(DomainError):
    """Table store failure (insert rejected, backend unreachable).

    Attributes:
        code: STORAGE_INSERT_FAILED or STORAGE_UNAVAILABLE.
        message: Human-readable message.
        table: Table the operation targeted.
        details: Additional context.
    """

    table: str | None = None

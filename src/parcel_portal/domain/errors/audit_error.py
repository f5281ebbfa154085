"""Audit trail error type.

Produced by the access audit pipeline when an event could not be written.
Never escapes the public logging boundary, which collapses it to `False`.

Usage:
    from parcel_portal.domain.errors import AuditError
    from parcel_portal.core.enums import ErrorCode
    from parcel_portal.core.result import Failure

    return Failure(error=AuditError(
        code=ErrorCode.AUDIT_RECORD_FAILED,
        message="Failed to record access event: insert rejected",
    ))
"""

from dataclasses import dataclass

from parcel_portal.core.errors import DomainError


@dataclass(frozen=True, slots=True, kw_only=True)
class AuditError(DomainError):
    """Audit system failure.

    Attributes:
        code: AUDIT_RECORD_FAILED or AUDIT_PIPELINE_FAILED.
        message: Human-readable message.
        details: Additional context.
    """

    pass

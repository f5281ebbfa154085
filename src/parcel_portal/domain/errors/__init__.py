"""Domain errors package.

Usage:
    from parcel_portal.domain.errors import AuditError, AuthError
"""

from parcel_portal.domain.errors.audit_error import AuditError
from parcel_portal.domain.errors.auth_error import AuthError
from parcel_portal.domain.errors.external_service_error import ExternalServiceError
from parcel_portal.domain.errors.storage_error import StorageError

__all__ = [
    "AuditError",
    "AuthError",
    "ExternalServiceError",
    "StorageError",
]

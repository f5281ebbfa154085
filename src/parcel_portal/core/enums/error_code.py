"""Machine-readable error codes.

Error codes follow ENTITY_ACTION_REASON naming convention and travel inside
DomainError instances (Result failures and AuthResponse errors).

Categories:
- Authentication errors (INVALID_CREDENTIALS, AUTH_*)
- Audit trail errors (AUDIT_*)
- Storage errors (STORAGE_*)
- External service errors (EXTERNAL_SERVICE_*)
"""

from enum import Enum


class ErrorCode(Enum):
    """Machine-readable error codes."""

    # Authentication errors
    INVALID_CREDENTIALS = "invalid_credentials"
    AUTHENTICATION_FAILED = "authentication_failed"
    AUTH_SIGN_UP_FAILED = "auth_sign_up_failed"
    AUTH_SIGN_OUT_FAILED = "auth_sign_out_failed"
    AUTH_BACKEND_UNAVAILABLE = "auth_backend_unavailable"
    AUTH_SYSTEM_ERROR = "auth_system_error"
    USER_ALREADY_EXISTS = "user_already_exists"

    # Audit trail errors
    AUDIT_RECORD_FAILED = "audit_record_failed"
    AUDIT_PIPELINE_FAILED = "audit_pipeline_failed"

    # Storage errors
    STORAGE_INSERT_FAILED = "storage_insert_failed"
    STORAGE_UNAVAILABLE = "storage_unavailable"

    # External service errors
    EXTERNAL_SERVICE_TIMEOUT = "external_service_timeout"
    EXTERNAL_SERVICE_UNAVAILABLE = "external_service_unavailable"
    EXTERNAL_SERVICE_BAD_RESPONSE = "external_service_bad_response"

"""Authentication error type.

Returned to UI callers inside `AuthResponse.error` for display. Sign-in,
sign-up and sign-out never raise.
"""

from dataclasses import dataclass

from parcel_portal.core.errors import DomainError


@dataclass(frozen=True, slots=True, kw_only=True)
class AuthError(DomainError):
    """Authentication failure (bad credentials, backend error).

    Attributes:
        code: ErrorCode enum.
        message: Message as reported by the backend, e.g.
            "Invalid login credentials".
        status: HTTP status reported by the backend, if any.
        details: Additional context.
    """

    status: int | None = None

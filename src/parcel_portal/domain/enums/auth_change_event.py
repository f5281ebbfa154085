"""Auth state change notifications emitted by the hosted backend."""

from enum import Enum


class AuthChangeEvent(str, Enum):
    """Backend-driven auth notifications."""

    INITIAL_SESSION = "INITIAL_SESSION"
    SIGNED_IN = "SIGNED_IN"
    SIGNED_OUT = "SIGNED_OUT"
    TOKEN_REFRESHED = "TOKEN_REFRESHED"
    USER_UPDATED = "USER_UPDATED"

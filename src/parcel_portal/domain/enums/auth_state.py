"""Authentication controller states."""

from enum import Enum


class AuthState(str, Enum):
    """States of the auth session controller.

    LOADING is left exactly once, towards ANONYMOUS or AUTHENTICATED.
    """

    LOADING = "loading"
    ANONYMOUS = "anonymous"
    AUTHENTICATED = "authenticated"

"""Infrastructure dependency factories.

Application-scoped singletons (lru_cache) for adapters that live as long as
the process. Adapter selection is centralized here (composition root).

Reference:
    - parcel_portal.core.config.Settings
"""

from functools import lru_cache
from typing import TYPE_CHECKING

from parcel_portal.core.config import get_settings
from parcel_portal.core.enums import Environment

if TYPE_CHECKING:
    from parcel_portal.domain.protocols import (
        AuthBackendProtocol,
        ClientEnvironmentProtocol,
        ClientStateProtocol,
        LoggerProtocol,
        TableStoreProtocol,
    )
    from parcel_portal.infrastructure.events import InteractionEventHub


# ============================================================================
# Logging (Application-Scoped)
# ============================================================================


@lru_cache()
def get_logger() -> "LoggerProtocol":
    """Return the application-scoped logger singleton.

    - development/production: ConsoleAdapter (human-readable in development,
      JSON otherwise)
    - testing/ci: ConsoleAdapter (JSON)

    Returns:
        LoggerProtocol: Logger instance implementing the protocol.
    """
    from parcel_portal.infrastructure.logging import ConsoleAdapter

    settings = get_settings()
    level = "DEBUG" if settings.debug else settings.log_level
    use_json = settings.environment is not Environment.DEVELOPMENT
    return ConsoleAdapter(use_json=use_json, level=level).bind(
        app=settings.app_name, environment=settings.environment.value
    )


# ============================================================================
# Client side (Application-Scoped)
# ============================================================================


@lru_cache()
def get_interaction_hub() -> "InteractionEventHub":
    """Return the interaction/lifecycle event hub singleton."""
    from parcel_portal.infrastructure.events import InteractionEventHub

    return InteractionEventHub(logger=get_logger())


@lru_cache()
def get_client_state() -> "ClientStateProtocol":
    """Return the client state singleton."""
    from parcel_portal.infrastructure.client_state import InMemoryClientState

    return InMemoryClientState()


@lru_cache()
def get_client_environment() -> "ClientEnvironmentProtocol":
    """Return the client environment configured from settings."""
    from parcel_portal.infrastructure.client_state import StaticClientEnvironment

    settings = get_settings()
    return StaticClientEnvironment(
        user_agent=settings.client_user_agent,
        referrer=settings.client_referrer,
    )


# ============================================================================
# Hosted backend (Application-Scoped)
# ============================================================================


def _require_backend_credentials() -> tuple[str, str]:
    settings = get_settings()
    if not settings.backend_url or not settings.backend_api_key:
        raise ValueError(
            "backend_url and backend_api_key are required when backend_type='rest'"
        )
    return settings.backend_url, settings.backend_api_key


@lru_cache()
def get_auth_backend() -> "AuthBackendProtocol":
    """Return the auth backend adapter selected by `backend_type`.

    Raises:
        ValueError: If the backend type is unsupported or REST credentials
            are missing.
    """
    settings = get_settings()

    if settings.backend_type == "memory":
        from parcel_portal.infrastructure.backend import InMemoryAuthBackend

        return InMemoryAuthBackend(logger=get_logger())

    if settings.backend_type == "rest":
        from parcel_portal.infrastructure.backend import RestAuthBackend

        base_url, api_key = _require_backend_credentials()
        return RestAuthBackend(
            base_url=base_url,
            api_key=api_key,
            timeout=settings.backend_timeout_seconds,
            logger=get_logger(),
        )

    raise ValueError(f"Unsupported backend type: {settings.backend_type}")


@lru_cache()
def get_table_store() -> "TableStoreProtocol":
    """Return the table store adapter selected by `backend_type`.

    The REST store authenticates inserts with the auth backend's current
    access token.
    """
    settings = get_settings()

    if settings.backend_type == "memory":
        from parcel_portal.infrastructure.backend import InMemoryTableStore

        return InMemoryTableStore()

    if settings.backend_type == "rest":
        from parcel_portal.infrastructure.backend import RestTableStore

        base_url, api_key = _require_backend_credentials()
        return RestTableStore(
            base_url=base_url,
            api_key=api_key,
            timeout=settings.backend_timeout_seconds,
            logger=get_logger(),
            access_token_provider=get_auth_backend().current_access_token,
        )

    raise ValueError(f"Unsupported backend type: {settings.backend_type}")

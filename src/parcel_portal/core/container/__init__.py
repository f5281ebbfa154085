"""Container module - Centralized dependency injection.

The container is organized into modules:
- infrastructure: Application-scoped adapters (logging, client state,
  interaction hub, auth backend, table store, enrichers)
- services: Per-session service graph (tracker, audit logger, controller)

Usage:
    from parcel_portal.core.container import build_auth_session_controller

    controller = build_auth_session_controller()
    await controller.initialize()
"""

from parcel_portal.core.container.infrastructure import (
    get_auth_backend,
    get_client_environment,
    get_client_state,
    get_interaction_hub,
    get_logger,
    get_table_store,
)
from parcel_portal.core.container.services import (
    build_access_audit_logger,
    build_auth_session_controller,
)

__all__ = [
    "build_access_audit_logger",
    "build_auth_session_controller",
    "get_auth_backend",
    "get_client_environment",
    "get_client_state",
    "get_interaction_hub",
    "get_logger",
    "get_table_store",
]

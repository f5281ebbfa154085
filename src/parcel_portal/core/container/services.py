"""Service factories.

Not cached: every call assembles a fresh SessionState and service graph, so
there is no ambient auth singleton. Infrastructure comes from the cached
factories unless overridden.
"""

from typing import TYPE_CHECKING

from parcel_portal.core.config import Settings, get_settings
from parcel_portal.core.container.infrastructure import (
    get_auth_backend,
    get_client_environment,
    get_client_state,
    get_interaction_hub,
    get_logger,
    get_table_store,
)

if TYPE_CHECKING:
    from parcel_portal.application.services import (
        AccessAuditLogger,
        AuthSessionController,
    )
    from parcel_portal.domain.protocols import (
        AuthBackendProtocol,
        ClientEnvironmentProtocol,
        ClientStateProtocol,
        InteractionSourceProtocol,
        LoggerProtocol,
        TableStoreProtocol,
    )


def build_access_audit_logger(
    *,
    settings: Settings | None = None,
    environment: "ClientEnvironmentProtocol | None" = None,
    store: "TableStoreProtocol | None" = None,
    logger: "LoggerProtocol | None" = None,
) -> "AccessAuditLogger":
    """Assemble the audit logger with its enrichers."""
    from parcel_portal.application.services import AccessAuditLogger
    from parcel_portal.infrastructure.enrichers import (
        ClientInfoProbe,
        IPLocationEnricher,
        UserAgentDeviceEnricher,
    )

    settings = settings or get_settings()
    environment = environment or get_client_environment()
    logger = logger or get_logger()

    return AccessAuditLogger(
        probe=ClientInfoProbe(
            environment=environment,
            url=settings.ip_echo_url,
            timeout=settings.client_probe_timeout_seconds,
            logger=logger,
        ),
        location_enricher=IPLocationEnricher(
            url_template=settings.geolocation_url_template,
            timeout=settings.client_probe_timeout_seconds,
            lookup_user_agent=settings.lookup_user_agent,
            logger=logger,
        ),
        device_enricher=UserAgentDeviceEnricher(logger=logger),
        environment=environment,
        store=store or get_table_store(),
        logger=logger,
        table=settings.access_logs_table,
    )


def build_auth_session_controller(
    *,
    settings: Settings | None = None,
    backend: "AuthBackendProtocol | None" = None,
    store: "TableStoreProtocol | None" = None,
    client_state: "ClientStateProtocol | None" = None,
    environment: "ClientEnvironmentProtocol | None" = None,
    interactions: "InteractionSourceProtocol | None" = None,
    logger: "LoggerProtocol | None" = None,
) -> "AuthSessionController":
    """Assemble a controller with a fresh SessionState and tracker.

    Lifecycle events (page close/hide) are attached to the same interaction
    source the tracker listens on.
    """
    from parcel_portal.application.services import (
        AuthSessionController,
        SessionActivityTracker,
    )
    from parcel_portal.domain.entities import SessionState

    settings = settings or get_settings()
    logger = logger or get_logger()
    client_state = client_state or get_client_state()
    interactions = interactions or get_interaction_hub()

    session_state = SessionState()
    tracker = SessionActivityTracker(
        session_state=session_state,
        client_state=client_state,
        interactions=interactions,
        logger=logger,
        timeout=settings.session_timeout,
        warning_time=settings.session_warning,
        warning_interval=settings.warning_poll_seconds,
        expiry_interval=settings.expiry_poll_seconds,
    )
    controller = AuthSessionController(
        backend=backend or get_auth_backend(),
        audit=build_access_audit_logger(
            settings=settings,
            environment=environment,
            store=store,
            logger=logger,
        ),
        tracker=tracker,
        session_state=session_state,
        client_state=client_state,
        logger=logger,
        sign_out_on_hidden=settings.sign_out_on_hidden,
    )
    controller.attach_lifecycle(interactions)
    return controller

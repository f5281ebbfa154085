"""Domain protocols (ports).

Infrastructure adapters implement these structurally (PEP 544); nothing
inherits from them.

Usage:
    from parcel_portal.domain.protocols import AuthBackendProtocol, LoggerProtocol
"""

from parcel_portal.domain.protocols.auth_backend_protocol import (
    AuthChangeCallback,
    AuthBackendProtocol,
    AuthSubscription,
)
from parcel_portal.domain.protocols.client_environment_protocol import (
    ClientEnvironmentProtocol,
)
from parcel_portal.domain.protocols.client_state_protocol import (
    ClientStateProtocol,
    StateScope,
)
from parcel_portal.domain.protocols.interaction_source_protocol import (
    InteractionHandler,
    InteractionSourceProtocol,
)
from parcel_portal.domain.protocols.logger_protocol import LoggerProtocol
from parcel_portal.domain.protocols.session_enricher_protocol import (
    ClientInfoProbeProtocol,
    DeviceEnricher,
    LocationEnricher,
)
from parcel_portal.domain.protocols.table_store_protocol import TableStoreProtocol

__all__ = [
    "AuthBackendProtocol",
    "AuthChangeCallback",
    "AuthSubscription",
    "ClientEnvironmentProtocol",
    "ClientInfoProbeProtocol",
    "ClientStateProtocol",
    "DeviceEnricher",
    "InteractionHandler",
    "InteractionSourceProtocol",
    "LocationEnricher",
    "LoggerProtocol",
    "StateScope",
    "TableStoreProtocol",
]

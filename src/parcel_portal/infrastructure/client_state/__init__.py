"""Client-side state and environment adapters."""

from parcel_portal.infrastructure.client_state.memory_client_state import (
    InMemoryClientState,
)
from parcel_portal.infrastructure.client_state.static_environment import (
    StaticClientEnvironment,
)

__all__ = ["InMemoryClientState", "StaticClientEnvironment"]

"""Hosted backend adapters.

- RestAuthBackend / RestTableStore: the hosted backend's REST API over httpx
- InMemoryAuthBackend / InMemoryTableStore: development and testing
"""

from parcel_portal.infrastructure.backend.memory_backend import (
    InMemoryAuthBackend,
    InMemoryTableStore,
)
from parcel_portal.infrastructure.backend.rest_auth_backend import RestAuthBackend
from parcel_portal.infrastructure.backend.rest_table_store import RestTableStore

__all__ = [
    "InMemoryAuthBackend",
    "InMemoryTableStore",
    "RestAuthBackend",
    "RestTableStore",
]

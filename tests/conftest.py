"""Pytest configuration and shared fixtures.

Fixtures build the service graph from in-memory adapters and mocked
enrichers so no test touches the network unless it uses `httpx_mock`.
"""

import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest

from parcel_portal.application.services import (
    AccessAuditLogger,
    AuthSessionController,
    SessionActivityTracker,
)
from parcel_portal.core.config import get_settings
from parcel_portal.domain.entities import (
    ClientInfo,
    DeviceInfo,
    GeoLocation,
    SessionState,
)
from parcel_portal.infrastructure.backend import InMemoryAuthBackend, InMemoryTableStore
from parcel_portal.infrastructure.client_state import (
    InMemoryClientState,
    StaticClientEnvironment,
)
from parcel_portal.infrastructure.events import InteractionEventHub

TEST_EMAIL = "surveyor@example.com"
TEST_PASSWORD = "correct-horse-battery"
CHROME_UA = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.6099.109 Safari/537.36"
)


# Pytest markers for different test types
def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests with mocked dependencies")
    config.addinivalue_line(
        "markers", "integration: Tests wiring several real adapters together"
    )


def pytest_collection_modifyitems(config, items):
    """Automatically add asyncio marker to async test functions.

    This ensures all async tests are properly marked even if
    the developer forgets to add @pytest.mark.asyncio.
    """
    for item in items:
        if asyncio.iscoroutinefunction(item.function):
            item.add_marker(pytest.mark.asyncio)


@pytest.fixture(autouse=True)
def _clear_settings_cache():
    """Settings are lru_cached; isolate environment overrides per test."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def mock_logger():
    """Logger double; bind() returns the same mock so calls stay inspectable."""
    logger = MagicMock()
    logger.bind.return_value = logger
    logger.with_context.return_value = logger
    return logger


@pytest.fixture
def client_state():
    return InMemoryClientState()


@pytest.fixture
def environment():
    return StaticClientEnvironment(user_agent=CHROME_UA, referrer="https://portal.example.com/")


@pytest.fixture
def interaction_hub(mock_logger):
    return InteractionEventHub(logger=mock_logger)


@pytest.fixture
def table_store():
    return InMemoryTableStore()


@pytest.fixture
def auth_backend(mock_logger):
    backend = InMemoryAuthBackend(logger=mock_logger)
    backend.add_user(TEST_EMAIL, TEST_PASSWORD, user_id="user-1")
    return backend


@pytest.fixture
def mock_probe():
    probe = MagicMock()
    probe.probe = AsyncMock(
        return_value=ClientInfo(ip="203.0.113.7", user_agent=CHROME_UA)
    )
    return probe


@pytest.fixture
def mock_location_enricher():
    enricher = MagicMock()
    enricher.enrich = AsyncMock(
        return_value=GeoLocation(country="United States", region="Texas", city="Austin")
    )
    return enricher


@pytest.fixture
def mock_device_enricher():
    enricher = MagicMock()
    enricher.enrich = AsyncMock(
        return_value=DeviceInfo(
            browser="Chrome",
            browser_version="120.0.6099.109",
            os="Windows 10.0",
            device="Desktop",
        )
    )
    return enricher


@pytest.fixture
def audit_logger(
    mock_probe,
    mock_location_enricher,
    mock_device_enricher,
    environment,
    table_store,
    mock_logger,
):
    return AccessAuditLogger(
        probe=mock_probe,
        location_enricher=mock_location_enricher,
        device_enricher=mock_device_enricher,
        environment=environment,
        store=table_store,
        logger=mock_logger,
    )


@pytest.fixture
def session_state():
    return SessionState()


@pytest.fixture
def tracker(session_state, client_state, interaction_hub, mock_logger):
    return SessionActivityTracker(
        session_state=session_state,
        client_state=client_state,
        interactions=interaction_hub,
        logger=mock_logger,
    )


@pytest.fixture
async def controller(
    auth_backend,
    audit_logger,
    tracker,
    session_state,
    client_state,
    interaction_hub,
    mock_logger,
):
    controller = AuthSessionController(
        backend=auth_backend,
        audit=audit_logger,
        tracker=tracker,
        session_state=session_state,
        client_state=client_state,
        logger=mock_logger,
    )
    controller.attach_lifecycle(interaction_hub)
    yield controller
    await controller.aclose()

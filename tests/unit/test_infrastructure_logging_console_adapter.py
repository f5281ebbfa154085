"""Unit tests for ConsoleAdapter (structured console logging).

Tests cover:
- LoggerProtocol methods and structured context
- Exception details on error/critical
- Context binding
- Renderer and level selection

Architecture:
- Unit tests with mocked structlog
"""

import logging
from unittest.mock import MagicMock, patch

import pytest

from parcel_portal.infrastructure.logging import ConsoleAdapter

STRUCTLOG = "parcel_portal.infrastructure.logging.console_adapter.structlog"


@pytest.mark.unit
class TestConsoleAdapterLogging:
    """Test ConsoleAdapter logging methods."""

    def test_warning_logs_message_with_context(self):
        with patch(STRUCTLOG) as mock_structlog:
            mock_logger = MagicMock()
            mock_structlog.get_logger.return_value = mock_logger

            adapter = ConsoleAdapter()
            adapter.warning("Access logging failed (non-critical)", event_type="login")

            mock_logger.warning.assert_called_once_with(
                "Access logging failed (non-critical)",
                event_type="login",
            )

    def test_error_includes_exception_details(self):
        with patch(STRUCTLOG) as mock_structlog:
            mock_logger = MagicMock()
            mock_structlog.get_logger.return_value = mock_logger

            adapter = ConsoleAdapter()
            adapter.error("Sign-in failed unexpectedly", error=RuntimeError("boom"))

            mock_logger.error.assert_called_once_with(
                "Sign-in failed unexpectedly",
                error_type="RuntimeError",
                error_message="boom",
            )

    def test_critical_without_error(self):
        with patch(STRUCTLOG) as mock_structlog:
            mock_logger = MagicMock()
            mock_structlog.get_logger.return_value = mock_logger

            ConsoleAdapter().critical("Shutting down", reason="test")

            mock_logger.critical.assert_called_once_with("Shutting down", reason="test")


@pytest.mark.unit
class TestConsoleAdapterBinding:
    """Test context binding."""

    def test_bind_returns_new_adapter_with_bound_logger(self):
        with patch(STRUCTLOG) as mock_structlog:
            mock_logger = MagicMock()
            bound_logger = MagicMock()
            mock_logger.bind.return_value = bound_logger
            mock_structlog.get_logger.return_value = mock_logger

            adapter = ConsoleAdapter()
            bound = adapter.with_context(session_id="session_1_abc")
            bound.info("Session resumed")

            assert bound is not adapter
            mock_logger.bind.assert_called_once_with(session_id="session_1_abc")
            bound_logger.info.assert_called_once_with("Session resumed")
            mock_logger.info.assert_not_called()


@pytest.mark.unit
class TestConsoleAdapterConfiguration:
    """Test structlog configuration."""

    def test_json_renderer_when_requested(self):
        with patch(STRUCTLOG) as mock_structlog:
            ConsoleAdapter(use_json=True)

            mock_structlog.processors.JSONRenderer.assert_called_once()
            mock_structlog.dev.ConsoleRenderer.assert_not_called()

    def test_console_renderer_by_default(self):
        with patch(STRUCTLOG) as mock_structlog:
            ConsoleAdapter()

            mock_structlog.dev.ConsoleRenderer.assert_called_once_with(colors=True)

    @pytest.mark.parametrize(
        ("level", "expected"),
        [("debug", logging.DEBUG), ("WARNING", logging.WARNING), ("bogus", logging.INFO)],
    )
    def test_level_filter(self, level, expected):
        with patch(STRUCTLOG) as mock_structlog:
            ConsoleAdapter(level=level)

            mock_structlog.make_filtering_bound_logger.assert_called_once_with(expected)

"""Unit tests for ConsoleAdapter (structured console logging).

Tests cover:
- All LoggerProtocol methods (debug, info, warning, error, critical)
- Exception details on error/critical
- Context binding
- Renderer and level selection at configuration time

Architecture:
- Unit tests with mocked structlog
- NO real logging output
"""

import logging
from unittest.mock import MagicMock, patch

import pytest

from src.infrastructure.logging.console_adapter import ConsoleAdapter

STRUCTLOG = "src.infrastructure.logging.console_adapter.structlog"


@pytest.mark.unit
class TestConsoleAdapterLogging:
    """Test ConsoleAdapter logging methods."""

    def test_debug_logs_message_with_context(self):
        """Test debug() logs message with structured context."""
        with patch(STRUCTLOG) as mock_structlog:
            mock_logger = MagicMock()
            mock_structlog.get_logger.return_value = mock_logger

            adapter = ConsoleAdapter()
            adapter.debug("csv_row_rejected", line_number=3, reason="bad date")

            mock_logger.debug.assert_called_once_with(
                "csv_row_rejected",
                line_number=3,
                reason="bad date",
            )

    def test_info_logs_message_with_context(self):
        """Test info() logs message with structured context."""
        with patch(STRUCTLOG) as mock_structlog:
            mock_logger = MagicMock()
            mock_structlog.get_logger.return_value = mock_logger

            adapter = ConsoleAdapter()
            adapter.info("statement_import_completed", total_entries=12, issue_count=1)

            mock_logger.info.assert_called_once_with(
                "statement_import_completed",
                total_entries=12,
                issue_count=1,
            )

    def test_warning_logs_message_with_context(self):
        """Test warning() logs message with structured context."""
        with patch(STRUCTLOG) as mock_structlog:
            mock_logger = MagicMock()
            mock_structlog.get_logger.return_value = mock_logger

            adapter = ConsoleAdapter()
            adapter.warning("statement_import_rejected", error_code="invalid_timezone")

            mock_logger.warning.assert_called_once_with(
                "statement_import_rejected",
                error_code="invalid_timezone",
            )

    def test_error_adds_exception_details(self):
        """Test error() adds error_type and error_message for exceptions."""
        with patch(STRUCTLOG) as mock_structlog:
            mock_logger = MagicMock()
            mock_structlog.get_logger.return_value = mock_logger

            adapter = ConsoleAdapter()
            adapter.error(
                "statement_entry_create_failed",
                error=RuntimeError("connection lost"),
                line_number=7,
            )

            mock_logger.error.assert_called_once_with(
                "statement_entry_create_failed",
                line_number=7,
                error_type="RuntimeError",
                error_message="connection lost",
            )

    def test_error_without_exception(self):
        """Test error() without an exception passes context through."""
        with patch(STRUCTLOG) as mock_structlog:
            mock_logger = MagicMock()
            mock_structlog.get_logger.return_value = mock_logger

            adapter = ConsoleAdapter()
            adapter.error("import_failed", code="E001")

            mock_logger.error.assert_called_once_with("import_failed", code="E001")

    def test_critical_adds_exception_details(self):
        """Test critical() adds exception details."""
        with patch(STRUCTLOG) as mock_structlog:
            mock_logger = MagicMock()
            mock_structlog.get_logger.return_value = mock_logger

            adapter = ConsoleAdapter()
            adapter.critical("store_unavailable", error=ValueError("boom"))

            mock_logger.critical.assert_called_once_with(
                "store_unavailable",
                error_type="ValueError",
                error_message="boom",
            )

    def test_logs_with_no_context(self):
        """Test logging with no additional context."""
        with patch(STRUCTLOG) as mock_structlog:
            mock_logger = MagicMock()
            mock_structlog.get_logger.return_value = mock_logger

            adapter = ConsoleAdapter()
            adapter.info("Simple message")

            mock_logger.info.assert_called_once_with("Simple message")


@pytest.mark.unit
class TestConsoleAdapterContextBinding:
    """Test ConsoleAdapter context binding methods."""

    def test_bind_returns_new_adapter_with_bound_context(self):
        """Test bind() returns new adapter with additional context."""
        with patch(STRUCTLOG) as mock_structlog:
            mock_logger = MagicMock()
            mock_bound_logger = MagicMock()
            mock_structlog.get_logger.return_value = mock_logger
            mock_logger.bind.return_value = mock_bound_logger

            adapter = ConsoleAdapter()
            bound_adapter = adapter.bind(user_id="user-456", file_name="extrato.csv")

            mock_logger.bind.assert_called_once_with(
                user_id="user-456",
                file_name="extrato.csv",
            )
            assert bound_adapter is not adapter
            assert bound_adapter._logger == mock_bound_logger

    def test_with_context_is_alias_for_bind(self):
        """Test with_context() returns new adapter (alias for bind)."""
        with patch(STRUCTLOG) as mock_structlog:
            mock_logger = MagicMock()
            mock_bound_logger = MagicMock()
            mock_structlog.get_logger.return_value = mock_logger
            mock_logger.bind.return_value = mock_bound_logger

            adapter = ConsoleAdapter()
            context_adapter = adapter.with_context(dry_run=True)

            mock_logger.bind.assert_called_once_with(dry_run=True)
            assert context_adapter._logger == mock_bound_logger

    def test_bound_context_persists_across_logs(self):
        """Test logs made through a bound adapter use the bound logger."""
        with patch(STRUCTLOG) as mock_structlog:
            mock_logger = MagicMock()
            mock_bound_logger = MagicMock()
            mock_structlog.get_logger.return_value = mock_logger
            mock_logger.bind.return_value = mock_bound_logger

            bound_adapter = ConsoleAdapter().bind(user_id="u1")
            bound_adapter.info("statement_import_started", format="csv")
            bound_adapter.info("statement_import_completed", format="csv")

            assert mock_bound_logger.info.call_count == 2
            mock_logger.info.assert_not_called()


@pytest.mark.unit
class TestConsoleAdapterConfiguration:
    """Test structlog configuration performed by ConsoleAdapter."""

    def test_json_renderer_when_use_json(self):
        """Test JSON output is selected for testing/CI."""
        with patch(STRUCTLOG) as mock_structlog:
            ConsoleAdapter(use_json=True)

            processors = mock_structlog.configure.call_args.kwargs["processors"]
            assert mock_structlog.processors.JSONRenderer.return_value in processors
            mock_structlog.dev.ConsoleRenderer.assert_not_called()

    def test_console_renderer_by_default(self):
        """Test human-readable output is the default."""
        with patch(STRUCTLOG) as mock_structlog:
            ConsoleAdapter()

            processors = mock_structlog.configure.call_args.kwargs["processors"]
            assert mock_structlog.dev.ConsoleRenderer.return_value in processors
            mock_structlog.processors.JSONRenderer.assert_not_called()

    @pytest.mark.parametrize(
        ("level", "expected"),
        [
            ("DEBUG", logging.DEBUG),
            ("warning", logging.WARNING),
            ("not-a-level", logging.INFO),
        ],
    )
    def test_filtering_level_follows_setting(self, level, expected):
        """Test minimum level comes from the level argument."""
        with patch(STRUCTLOG) as mock_structlog:
            ConsoleAdapter(level=level)

            mock_structlog.make_filtering_bound_logger.assert_called_once_with(expected)

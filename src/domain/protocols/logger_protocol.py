"""LoggerProtocol definition for structured logging.

Backend-agnostic logging port. Implementations MUST emit structured logs
(event name + key-value context) and MUST NOT log statement contents beyond
what is needed to locate a problem (line numbers, external references).

Log Levels:
    - DEBUG: Row-level parse/resolution failures
    - INFO: Import started / completed with counts
    - WARNING: Whole-batch failures caused by the request or document
    - ERROR: Unexpected collaborator failures
    - CRITICAL: Not used by the importer

Usage:
    from src.core.container import get_logger

    logger = get_logger()
    import_logger = logger.bind(user_id=str(user_id), file_name=file_name)
    import_logger.info("statement_import_started", format="csv")
"""

from __future__ import annotations

from typing import Any, Protocol


class LoggerProtocol(Protocol):
    """Protocol for structured logging adapters."""

    def debug(self, message: str, /, **context: Any) -> None:
        """Log a debug-level message.

        Args:
            message: Event name or short message (avoid f-strings; use context).
            **context: Structured key-value context fields.
        """
        ...

    def info(self, message: str, /, **context: Any) -> None:
        """Log an info-level message."""
        ...

    def warning(self, message: str, /, **context: Any) -> None:
        """Log a warning-level message."""
        ...

    def error(
        self, message: str, /, *, error: Exception | None = None, **context: Any
    ) -> None:
        """Log an error-level message with optional exception details.

        Args:
            message: Event name or short message.
            error: Optional exception instance; implementations add
                error_type and error_message fields.
            **context: Structured key-value context fields.
        """
        ...

    def critical(
        self, message: str, /, *, error: Exception | None = None, **context: Any
    ) -> None:
        """Log a critical-level message with optional exception details."""
        ...

    def bind(self, **context: Any) -> LoggerProtocol:
        """Return new logger with permanently bound context.

        The original logger is unchanged.

        Args:
            **context: Context to bind to all future logs.

        Returns:
            New logger instance with bound context.
        """
        ...

    def with_context(self, **context: Any) -> LoggerProtocol:
        """Alias for bind()."""
        ...

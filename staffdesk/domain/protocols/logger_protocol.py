"""LoggerProtocol definition for structured logging.

Every log call is a short event name plus key-value context, so logs stay
machine-searchable. Never log passwords, access tokens or API keys.

Usage:
    from staffdesk.core.container import get_logger

    logger = get_logger()
    logger.info("client.created", client_id=str(client.id))

    action_logger = logger.bind(action="delete_client")
    action_logger.warning("action.failed", error_code="HAS_DEPENDENCIES")
"""

from __future__ import annotations

from typing import Any, Protocol


class LoggerProtocol(Protocol):
    """Protocol for structured logging adapters."""

    def debug(self, message: str, /, **context: Any) -> None:
        """Log a debug-level event."""
        ...

    def info(self, message: str, /, **context: Any) -> None:
        """Log an info-level event."""
        ...

    def warning(self, message: str, /, **context: Any) -> None:
        """Log a warning-level event."""
        ...

    def error(
        self, message: str, /, *, error: BaseException | None = None, **context: Any
    ) -> None:
        """Log an error-level event.

        Args:
            message: Event name (avoid f-strings; use context).
            error: Optional exception; implementations add ``error_type`` and
                ``error_message`` fields.
            **context: Structured key-value context fields.
        """
        ...

    def bind(self, **context: Any) -> LoggerProtocol:
        """Return a new logger with ``context`` included in every event.

        The original logger is unchanged.
        """
        ...

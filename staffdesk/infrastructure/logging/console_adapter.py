"""Console logging adapter.

Outputs structured logs to stdout using structlog.
- Development: human-readable console renderer with colors
- Testing/CI/Production: JSON renderer for machine parsing

Does not inherit from LoggerProtocol (PEP 544 structural subtyping).
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog


class ConsoleAdapter:
    """structlog-backed logger satisfying LoggerProtocol.

    Args:
        use_json: JSON output when True, human-readable when False.
        level: Minimum level name (``DEBUG``, ``INFO``, ...).
    """

    def __init__(self, *, use_json: bool = False, level: str = "INFO") -> None:
        processors: list[structlog.types.Processor] = [
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
        ]

        if use_json:
            processors.append(structlog.processors.JSONRenderer())
        else:
            processors.append(structlog.dev.ConsoleRenderer(colors=True))

        min_level = logging.getLevelNamesMapping().get(level.upper(), logging.INFO)

        structlog.configure(
            processors=processors,
            wrapper_class=structlog.make_filtering_bound_logger(min_level),
            context_class=dict,
            logger_factory=structlog.PrintLoggerFactory(file=sys.stdout),
            cache_logger_on_first_use=True,
        )

        self._logger = structlog.get_logger()

    def debug(self, message: str, /, **context: Any) -> None:
        self._logger.debug(message, **context)

    def info(self, message: str, /, **context: Any) -> None:
        self._logger.info(message, **context)

    def warning(self, message: str, /, **context: Any) -> None:
        self._logger.warning(message, **context)

    def error(
        self, message: str, /, *, error: BaseException | None = None, **context: Any
    ) -> None:
        """Log an error, adding ``error_type``/``error_message`` when given one."""
        if error is not None:
            context["error_type"] = type(error).__name__
            context["error_message"] = str(error)
        self._logger.error(message, **context)

    def bind(self, **context: Any) -> ConsoleAdapter:
        """Return new adapter with bound context."""
        bound_adapter = ConsoleAdapter.__new__(ConsoleAdapter)
        bound_adapter._logger = self._logger.bind(**context)
        return bound_adapter

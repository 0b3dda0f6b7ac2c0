"""Logging adapters."""

from staffdesk.infrastructure.logging.console_adapter import ConsoleAdapter

__all__ = ["ConsoleAdapter"]

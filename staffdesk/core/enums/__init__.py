"""Core enums package.

Exports all core-level enums for convenient importing.

Usage:
    from staffdesk.core.enums import ErrorCode, Environment
"""

from staffdesk.core.enums.environment import Environment
from staffdesk.core.enums.error_code import ErrorCode

__all__ = ["ErrorCode", "Environment"]

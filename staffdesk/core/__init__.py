"""Core shared kernel.

This module provides foundational utilities used across all architectural layers:
- Result types returned by every action
- The closed error taxonomy and its backend error mappers
- Pagination metadata

The core module has NO dependencies on other application layers.
"""

from staffdesk.core.enums import ErrorCode
from staffdesk.core.errors import ActionError, create_error
from staffdesk.core.result import (
    ActionResult,
    Failure,
    Result,
    Success,
    failure,
    is_failure,
    is_success,
    success,
)

__all__ = [
    "ActionError",
    "ActionResult",
    "ErrorCode",
    "Failure",
    "Result",
    "Success",
    "create_error",
    "failure",
    "is_failure",
    "is_success",
    "success",
]

"""ActionError - structured error payload of a failed action.

ActionError is the only error type that crosses the action boundary.
It flows through the system as data (inside ``Failure``), never as an
exception, and its ``code`` is always an ``ErrorCode`` member so callers
can switch on it exhaustively.

Usage:
    from staffdesk.core.errors import create_error
    from staffdesk.core.enums import ErrorCode

    error = create_error(ErrorCode.NOT_FOUND, "Worker not found", {"id": worker_id})
"""

from dataclasses import dataclass
from typing import Any

from staffdesk.core.enums import ErrorCode


@dataclass(frozen=True, slots=True, kw_only=True)
class ActionError:
    """Structured error returned inside a failed ActionResult.

    Attributes:
        code: Machine-readable taxonomy code.
        message: Human-readable message for UI display.
        details: Optional context (field errors, constraint names, ...).
    """

    code: ErrorCode
    message: str
    details: dict[str, Any] | None = None

    def __str__(self) -> str:
        """String representation of error."""
        return f"{self.code.value}: {self.message}"

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a JSON-friendly dict (``details`` omitted when empty)."""
        data: dict[str, Any] = {"code": self.code.value, "message": self.message}
        if self.details:
            data["details"] = self.details
        return data


def create_error(
    code: ErrorCode,
    message: str,
    details: dict[str, Any] | None = None,
) -> ActionError:
    """Create a structured ActionError.

    Args:
        code: Machine-readable error code.
        message: Human-readable message for UI.
        details: Optional additional context.

    Returns:
        ActionError instance.
    """
    return ActionError(code=code, message=message, details=details or None)

"""Result types for railway-oriented programming.

This module implements the Result pattern used by every action: operations
that can fail return a value instead of raising, which makes failure handling
explicit and testable.

ActionResult is the concrete envelope returned by wrapped actions: either a
``Success`` carrying the handler's data or a ``Failure`` carrying an
``ActionError`` whose code comes from the closed ``ErrorCode`` taxonomy.

Usage:
    result = await create_client({"name": "Acme", ...}, access_token=token)
    match result:
        case Success(value=client):
            print(client.id)
        case Failure(error=error):
            print(error.code, error.message)

    # Or with the narrowing helpers
    if is_failure(result):
        log(result.error.code)
"""

from dataclasses import dataclass
from typing import Any, Generic, TypeGuard, TypeVar

from staffdesk.core.enums import ErrorCode
from staffdesk.core.errors.action_error import ActionError, create_error

T = TypeVar("T")  # Success type
E = TypeVar("E")  # Error type


@dataclass(frozen=True, slots=True, kw_only=True)
class Success(Generic[T]):
    """Represents a successful operation result.

    Attributes:
        value: The successful result value.
    """

    value: T


@dataclass(frozen=True, slots=True, kw_only=True)
class Failure(Generic[E]):
    """Represents a failed operation result.

    Attributes:
        error: The error that occurred.
    """

    error: E


# Type alias for Result union
type Result[T, E] = Success[T] | Failure[E]

# Envelope returned by every wrapped action
type ActionResult[T] = Success[T] | Failure[ActionError]


def success(data: T) -> Success[T]:
    """Create a successful ActionResult.

    Args:
        data: The data to return on success.

    Returns:
        Success wrapping ``data``.
    """
    return Success(value=data)


def failure(
    code: ErrorCode,
    message: str,
    details: dict[str, Any] | None = None,
) -> Failure[ActionError]:
    """Create a failed ActionResult.

    Args:
        code: Taxonomy error code.
        message: Human-readable message for UI display.
        details: Optional structured context (field errors, constraint, ...).

    Returns:
        Failure wrapping an ActionError.

    Example:
        >>> failure(ErrorCode.NOT_FOUND, "Client not found")
        Failure(error=ActionError(code=<ErrorCode.NOT_FOUND: 'NOT_FOUND'>, ...))
    """
    return Failure(error=create_error(code, message, details))


def is_success(result: Success[T] | Failure[Any]) -> TypeGuard[Success[T]]:
    """Check whether a result is successful.

    Args:
        result: Result to check.

    Returns:
        True if ``result`` is a Success.
    """
    return isinstance(result, Success)


def is_failure(
    result: Success[Any] | Failure[ActionError],
) -> TypeGuard[Failure[ActionError]]:
    """Check whether a result is a failure.

    Args:
        result: Result to check.

    Returns:
        True if ``result`` is a Failure.
    """
    return isinstance(result, Failure)

"""Exception classification for the action wrapper.

An ordered chain of guards, each returning a tagged variant or None. The
first guard that matches decides how an exception raised by a handler is
reported:

    ControlSignal       -> re-raised (framework redirects / not-found)
    AuthRequired        -> its own code and message
    DatabaseFailure     -> map_database_error
    AuthProviderFailure -> map_auth_error
    InvalidInput        -> map_validation_error
    UnexpectedError     -> INTERNAL_ERROR

Order matters: pydantic's ValidationError subclasses ValueError, so the
validation guard must run before the generic fallback.
"""

from collections.abc import Callable
from dataclasses import dataclass

from pydantic import ValidationError
from sqlalchemy.exc import DBAPIError, NoResultFound
from starlette.exceptions import HTTPException

from staffdesk.core.enums import ErrorCode
from staffdesk.core.errors import (
    ActionError,
    AuthenticationRequiredError,
    AuthProviderError,
    BackendQueryError,
    DatabaseErrorInfo,
    create_error,
    map_auth_error,
    map_database_error,
    map_validation_error,
)
from staffdesk.infrastructure.persistence.errors import database_error_from_exception

GENERIC_ERROR_MESSAGE = "An unexpected error occurred. Please try again."


# =============================================================================
# Variants
# =============================================================================


@dataclass(frozen=True, slots=True)
class ControlSignal:
    """Framework control flow that must propagate unchanged."""

    exc: HTTPException


@dataclass(frozen=True, slots=True)
class AuthRequired:
    code: ErrorCode
    message: str


@dataclass(frozen=True, slots=True)
class DatabaseFailure:
    info: DatabaseErrorInfo


@dataclass(frozen=True, slots=True)
class AuthProviderFailure:
    error: AuthProviderError


@dataclass(frozen=True, slots=True)
class InvalidInput:
    error: ValidationError


@dataclass(frozen=True, slots=True)
class UnexpectedError:
    """Anything else. ``message`` is None when the exception had none."""

    exc_type: str
    message: str | None


type ClassifiedError = (
    ControlSignal
    | AuthRequired
    | DatabaseFailure
    | AuthProviderFailure
    | InvalidInput
    | UnexpectedError
)


# =============================================================================
# Guards
# =============================================================================


def is_framework_control_signal(exc: Exception) -> ControlSignal | None:
    if isinstance(exc, HTTPException):
        return ControlSignal(exc)
    return None


def is_authentication_error(exc: Exception) -> AuthRequired | None:
    if isinstance(exc, AuthenticationRequiredError):
        return AuthRequired(code=exc.code, message=exc.message)
    return None


def is_constraint_error(exc: Exception) -> DatabaseFailure | None:
    if isinstance(exc, BackendQueryError):
        return DatabaseFailure(exc.info)
    if isinstance(exc, (DBAPIError, NoResultFound)):
        return DatabaseFailure(database_error_from_exception(exc))
    return None


def is_auth_provider_error(exc: Exception) -> AuthProviderFailure | None:
    if isinstance(exc, AuthProviderError):
        return AuthProviderFailure(exc)
    return None


def is_validation_error(exc: Exception) -> InvalidInput | None:
    if isinstance(exc, ValidationError):
        return InvalidInput(exc)
    return None


GUARDS: tuple[Callable[[Exception], ClassifiedError | None], ...] = (
    is_framework_control_signal,
    is_authentication_error,
    is_constraint_error,
    is_auth_provider_error,
    is_validation_error,
)


def classify_exception(exc: Exception) -> ClassifiedError:
    """Return the variant of the first matching guard.

    Args:
        exc: Exception raised while running an action.

    Returns:
        Tagged variant; UnexpectedError when no guard matches.
    """
    for guard in GUARDS:
        variant = guard(exc)
        if variant is not None:
            return variant
    message = str(exc).strip()
    return UnexpectedError(exc_type=type(exc).__name__, message=message or None)


def to_action_error(variant: ClassifiedError) -> ActionError:
    """Translate a variant into the taxonomy.

    Raises:
        ValueError: For ControlSignal, which is never translated.
    """
    match variant:
        case AuthRequired(code=code, message=message):
            return create_error(code, message)
        case DatabaseFailure(info=info):
            return map_database_error(info)
        case AuthProviderFailure(error=error):
            return map_auth_error(error)
        case InvalidInput(error=error):
            return map_validation_error(error)
        case UnexpectedError(message=message) if message:
            return create_error(ErrorCode.INTERNAL_ERROR, message)
        case UnexpectedError():
            return create_error(ErrorCode.INTERNAL_ERROR, GENERIC_ERROR_MESSAGE)
        case ControlSignal():
            raise ValueError("Framework control signals are re-raised, not translated")

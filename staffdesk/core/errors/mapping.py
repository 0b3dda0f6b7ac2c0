"""Backend error mapping onto the ErrorCode taxonomy.

Every action returns a predictable, switchable error code regardless of which
backend subsystem failed. This module holds the three translation tables:

- map_database_error: Postgres SQLSTATE / query-gateway codes
- map_auth_error: identity provider error codes
- map_validation_error: pydantic validation failures

References:
    - https://www.postgresql.org/docs/current/errcodes-appendix.html
    - https://postgrest.org/en/stable/references/errors.html
    - https://supabase.com/docs/guides/auth/debugging/error-codes
"""

import re
from typing import Any

from pydantic import ValidationError

from staffdesk.core.enums import ErrorCode
from staffdesk.core.errors.action_error import ActionError, create_error
from staffdesk.core.errors.exceptions import AuthProviderError, DatabaseErrorInfo

# PostgreSQL error codes handled specifically
UNIQUE_VIOLATION = "23505"
FOREIGN_KEY_VIOLATION = "23503"
NOT_NULL_VIOLATION = "23502"
CHECK_VIOLATION = "23514"
INSUFFICIENT_PRIVILEGE = "42501"

# Query-gateway error codes
NO_ROWS_RETURNED = "PGRST116"
JWT_EXPIRED = "PGRST301"
JWT_INVALID = "PGRST302"

# Key used in fieldErrors for issues without a field path
ROOT_FIELD_KEY = "_root"

_DUPLICATE_KEY_PATTERN = re.compile(r"Key \((?P<field>[^)]+)\)=\((?P<value>.*)\) already exists")
_COLUMN_PATTERN = re.compile(r'column "(?P<column>[^"]+)"')

# Display names for columns whose name reads poorly in a message
_FIELD_LABELS = {"phone": "phone number"}

_SESSION_EXPIRED_MESSAGE = "Your session has expired. Please log in again."


def map_database_error(error: DatabaseErrorInfo) -> ActionError:
    """Map a backend database error to an ActionError.

    Args:
        error: Structured backend error.

    Returns:
        ActionError with the taxonomy code and a user-facing message.

    Example:
        >>> map_database_error(DatabaseErrorInfo(
        ...     code="23505",
        ...     message="duplicate key value violates unique constraint",
        ...     details="Key (email)=(a@b.com) already exists.",
        ... )).message
        'A record with this email already exists'
    """
    match error.code:
        case "23505":
            field = _extract_duplicate_field(error.details)
            details: dict[str, Any] = {"constraint": error.details, "hint": error.hint}
            if field is None:
                return create_error(
                    ErrorCode.DUPLICATE_ENTRY,
                    "A record with this value already exists",
                    details,
                )
            details["field"] = field
            label = _FIELD_LABELS.get(field, field.replace("_", " "))
            return create_error(
                ErrorCode.DUPLICATE_ENTRY,
                f"A record with this {label} already exists",
                details,
            )

        case "23503":
            return create_error(
                ErrorCode.HAS_DEPENDENCIES,
                "This record cannot be deleted because other records depend on it",
                {"constraint": error.details},
            )

        case "23502":
            return create_error(
                ErrorCode.VALIDATION_ERROR,
                "A required field is missing",
                {"field": _extract_column(error.message)},
            )

        case "23514":
            return create_error(
                ErrorCode.VALIDATION_ERROR,
                "The provided value does not meet requirements",
                {"constraint": error.details},
            )

        case "42501":
            return create_error(
                ErrorCode.FORBIDDEN,
                "You do not have permission to perform this action",
            )

        case "PGRST116":
            return create_error(
                ErrorCode.NOT_FOUND,
                "The requested resource was not found",
            )

        case "PGRST301" | "PGRST302":
            return create_error(ErrorCode.SESSION_EXPIRED, _SESSION_EXPIRED_MESSAGE)

    return create_error(
        ErrorCode.DATABASE_ERROR,
        "An unexpected database error occurred. Please try again.",
        {"originalCode": error.code, "originalMessage": error.message},
    )


# Provider code -> (taxonomy code, message, keep provider message in details)
_AUTH_ERROR_TABLE: dict[str, tuple[ErrorCode, str, bool]] = {
    # Credential errors
    "invalid_credentials": (
        ErrorCode.INVALID_CREDENTIALS,
        "Invalid email or password",
        False,
    ),
    # Email/phone confirmation
    "email_not_confirmed": (
        ErrorCode.FORBIDDEN,
        "Please confirm your email address before logging in",
        False,
    ),
    "phone_not_confirmed": (
        ErrorCode.FORBIDDEN,
        "Please confirm your phone number before logging in",
        False,
    ),
    # Session/JWT errors
    "session_expired": (ErrorCode.SESSION_EXPIRED, _SESSION_EXPIRED_MESSAGE, False),
    "session_not_found": (ErrorCode.SESSION_EXPIRED, _SESSION_EXPIRED_MESSAGE, False),
    "refresh_token_not_found": (
        ErrorCode.SESSION_EXPIRED,
        _SESSION_EXPIRED_MESSAGE,
        False,
    ),
    "refresh_token_already_used": (
        ErrorCode.SESSION_EXPIRED,
        _SESSION_EXPIRED_MESSAGE,
        False,
    ),
    "bad_jwt": (ErrorCode.SESSION_EXPIRED, _SESSION_EXPIRED_MESSAGE, False),
    # OTP errors
    "otp_expired": (
        ErrorCode.SESSION_EXPIRED,
        "The verification code has expired. Please request a new one.",
        False,
    ),
    "otp_disabled": (
        ErrorCode.FORBIDDEN,
        "This sign-in method is not available",
        False,
    ),
    # Password errors
    "weak_password": (
        ErrorCode.VALIDATION_ERROR,
        "Password does not meet security requirements",
        True,
    ),
    "same_password": (
        ErrorCode.VALIDATION_ERROR,
        "New password must be different from current password",
        False,
    ),
    # Rate limiting
    "over_request_rate_limit": (
        ErrorCode.FORBIDDEN,
        "Too many requests. Please wait a moment and try again.",
        False,
    ),
    "over_email_send_rate_limit": (
        ErrorCode.FORBIDDEN,
        "Too many requests. Please wait a moment and try again.",
        False,
    ),
    "over_sms_send_rate_limit": (
        ErrorCode.FORBIDDEN,
        "Too many requests. Please wait a moment and try again.",
        False,
    ),
    # User existence
    "user_not_found": (
        ErrorCode.NOT_FOUND,
        "No account found with this email address",
        False,
    ),
    "user_already_exists": (
        ErrorCode.DUPLICATE_ENTRY,
        "An account with this email already exists",
        False,
    ),
    "email_exists": (
        ErrorCode.DUPLICATE_ENTRY,
        "An account with this email already exists",
        False,
    ),
    # Validation
    "validation_failed": (ErrorCode.VALIDATION_ERROR, "Invalid input provided", True),
    # Provider disabled
    "signup_disabled": (
        ErrorCode.FORBIDDEN,
        "This sign-in method is currently disabled",
        False,
    ),
    "email_provider_disabled": (
        ErrorCode.FORBIDDEN,
        "This sign-in method is currently disabled",
        False,
    ),
    "phone_provider_disabled": (
        ErrorCode.FORBIDDEN,
        "This sign-in method is currently disabled",
        False,
    ),
    "provider_disabled": (
        ErrorCode.FORBIDDEN,
        "This sign-in method is currently disabled",
        False,
    ),
    # User banned
    "user_banned": (ErrorCode.FORBIDDEN, "This account has been suspended", False),
}


def map_auth_error(error: AuthProviderError) -> ActionError:
    """Map an identity provider error to an ActionError.

    Uses the provider's error code (not its message) for identification.

    Args:
        error: Error raised by the identity provider adapter.

    Returns:
        ActionError with the taxonomy code. Unknown codes map to
        NOT_AUTHENTICATED with the original code preserved in ``details.code``.
    """
    entry = _AUTH_ERROR_TABLE.get(error.code or "")
    if entry is None:
        return create_error(
            ErrorCode.NOT_AUTHENTICATED,
            "An authentication error occurred. Please try again.",
            {"code": error.code, "originalMessage": error.message},
        )

    code, message, keep_original = entry
    details = {"originalMessage": error.message} if keep_original else None
    return create_error(code, message, details)


def map_validation_error(error: ValidationError) -> ActionError:
    """Map a pydantic validation failure to a VALIDATION_ERROR.

    Messages are grouped by dotted field path in ``details.fieldErrors``;
    issues without a path use the ``_root`` key. Raw issues are kept in
    ``details.issues``.

    Args:
        error: pydantic ValidationError.

    Returns:
        ActionError with code VALIDATION_ERROR.

    Example:
        >>> result = map_validation_error(exc)
        >>> result.details["fieldErrors"]
        {'email': ['value is not a valid email address: ...']}
    """
    field_errors: dict[str, list[str]] = {}
    issues: list[dict[str, Any]] = []

    for issue in error.errors(include_url=False, include_input=False):
        path = [str(part) for part in issue.get("loc", ())]
        key = ".".join(path) or ROOT_FIELD_KEY
        message = issue.get("msg", "Invalid value")
        field_errors.setdefault(key, []).append(message)
        issues.append({"path": path, "message": message, "type": issue.get("type")})

    fields = [key for key in field_errors if key != ROOT_FIELD_KEY]
    if fields:
        message = f"Invalid input: {', '.join(fields)}"
    elif issues:
        message = f"Invalid input: {issues[0]['message']}"
    else:
        message = "Invalid input data"

    return create_error(
        ErrorCode.VALIDATION_ERROR,
        message,
        {"fieldErrors": field_errors, "issues": issues},
    )


def _extract_duplicate_field(details: str | None) -> str | None:
    """Pull the offending column out of a unique-violation detail string."""
    if not details:
        return None
    match = _DUPLICATE_KEY_PATTERN.search(details)
    return match.group("field") if match else None


def _extract_column(message: str) -> str | None:
    """Pull the column name out of a not-null violation message."""
    match = _COLUMN_PATTERN.search(message)
    return match.group("column") if match else None

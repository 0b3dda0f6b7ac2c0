"""Client error presentation helpers.

User-facing messages for client operations and the rules deciding how a
failure is shown: blocking errors keep the dialog open and are displayed
inline, everything else closes it and shows a toast.
"""

from staffdesk.core.enums import ErrorCode
from staffdesk.core.errors import ActionError

CLIENT_ERROR_MESSAGES: dict[ErrorCode, str] = {
    ErrorCode.DUPLICATE_ENTRY: "A client with this email already exists",
    ErrorCode.HAS_DEPENDENCIES: (
        "This client cannot be deleted because it has associated work locations. "
        "Please remove or reassign them first."
    ),
    ErrorCode.NOT_FOUND: "Client not found. It may have already been deleted.",
    ErrorCode.FORBIDDEN: "You do not have permission to delete this client.",
    ErrorCode.VALIDATION_ERROR: "Please check the form for errors.",
    ErrorCode.DATABASE_ERROR: "A database error occurred. Please try again.",
    ErrorCode.INTERNAL_ERROR: "An unexpected error occurred. Please try again.",
}

BLOCKING_ERROR_CODES: frozenset[ErrorCode] = frozenset({ErrorCode.HAS_DEPENDENCIES})

DEFAULT_DUPLICATE_FIELD = "email"


def is_blocking_error(code: ErrorCode | str) -> bool:
    """True if the error should keep the dialog open."""
    return code in BLOCKING_ERROR_CODES


def get_client_error_message(error: ActionError) -> str:
    """User-facing message for ``error``, falling back to its own message."""
    return CLIENT_ERROR_MESSAGES.get(error.code, error.message)


def get_duplicate_field(error: ActionError) -> str:
    """Form field to flag for a DUPLICATE_ENTRY error (defaults to email)."""
    if error.details and error.details.get("field"):
        return str(error.details["field"])
    return DEFAULT_DUPLICATE_FIELD

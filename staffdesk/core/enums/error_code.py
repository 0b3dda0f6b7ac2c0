"""Application error codes (machine-readable).

Closed set of codes returned in every failed ActionResult. Callers switch on
these to choose how a failure is presented (field error, toast, redirect to
login), so no other string may ever appear in ActionError.code.

Categories:
- Authentication (NOT_AUTHENTICATED, INVALID_CREDENTIALS, SESSION_EXPIRED)
- Authorization (FORBIDDEN)
- Validation (VALIDATION_ERROR)
- Resource (NOT_FOUND, DUPLICATE_ENTRY, HAS_DEPENDENCIES)
- Business rules (INVALID_DATE_RANGE)
- System (INTERNAL_ERROR, DATABASE_ERROR)
"""

from enum import Enum


class ErrorCode(str, Enum):
    """Application error codes.

    Values equal member names so the wire format matches the enum.
    """

    # Authentication errors (user identity)
    NOT_AUTHENTICATED = "NOT_AUTHENTICATED"
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
    SESSION_EXPIRED = "SESSION_EXPIRED"

    # Authorization errors (user permissions)
    FORBIDDEN = "FORBIDDEN"

    # Validation errors (input data)
    VALIDATION_ERROR = "VALIDATION_ERROR"

    # Resource errors (database entities)
    NOT_FOUND = "NOT_FOUND"
    DUPLICATE_ENTRY = "DUPLICATE_ENTRY"
    HAS_DEPENDENCIES = "HAS_DEPENDENCIES"

    # Business rule violations
    INVALID_DATE_RANGE = "INVALID_DATE_RANGE"

    # System errors
    INTERNAL_ERROR = "INTERNAL_ERROR"
    DATABASE_ERROR = "DATABASE_ERROR"

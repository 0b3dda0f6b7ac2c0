"""Infrastructure layer error types.

Infrastructure errors represent failures in external systems that are
reported as values (inside ``Failure``) rather than raised, for operations
whose failure must never affect the caller's result (cache invalidation).

Architecture:
- Adapters catch library exceptions and return Failure(InfrastructureError)
- ``code`` is always a taxonomy ErrorCode
- InfrastructureErrorCode is for internal tracking and logs only
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any

from staffdesk.core.enums import ErrorCode


class InfrastructureErrorCode(Enum):
    """Infrastructure-specific error codes (internal tracking only)."""

    # Cache errors
    CACHE_CONNECTION_ERROR = "cache_connection_error"
    CACHE_TIMEOUT = "cache_timeout"
    CACHE_DELETE_ERROR = "cache_delete_error"


@dataclass(frozen=True, slots=True, kw_only=True)
class InfrastructureError:
    """Base infrastructure error.

    Attributes:
        code: Taxonomy ErrorCode.
        message: Human-readable message.
        infrastructure_code: Original infrastructure error code.
        details: Additional context.
    """

    code: ErrorCode = ErrorCode.INTERNAL_ERROR
    message: str
    infrastructure_code: InfrastructureErrorCode | None = None
    details: dict[str, Any] | None = None

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


@dataclass(frozen=True, slots=True, kw_only=True)
class CacheError(InfrastructureError):
    """Cache-specific errors.

    Attributes:
        details: Additional context (key, path, original error).
    """

    pass

"""Data Transfer Objects returned by actions.

Usage:
    from staffdesk.application.dtos import ClientResult, CurrentUserResult
"""

from staffdesk.application.dtos.auth_dtos import (
    CurrentUserResult,
    OperationResult,
    ProfileResult,
)
from staffdesk.application.dtos.client_dtos import ClientResult

__all__ = ["ClientResult", "CurrentUserResult", "OperationResult", "ProfileResult"]

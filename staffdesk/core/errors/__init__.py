"""Core errors package.

Exports the error taxonomy types, the edge exceptions and the backend error
mappers for convenient importing.

Usage:
    from staffdesk.core.errors import ActionError, create_error, map_database_error
"""

from staffdesk.core.errors.action_error import ActionError, create_error
from staffdesk.core.errors.exceptions import (
    AuthenticationRequiredError,
    AuthProviderError,
    BackendQueryError,
    DatabaseErrorInfo,
)
from staffdesk.core.errors.mapping import (
    ROOT_FIELD_KEY,
    map_auth_error,
    map_database_error,
    map_validation_error,
)

__all__ = [
    "ActionError",
    "create_error",
    "AuthenticationRequiredError",
    "AuthProviderError",
    "BackendQueryError",
    "DatabaseErrorInfo",
    "ROOT_FIELD_KEY",
    "map_auth_error",
    "map_database_error",
    "map_validation_error",
]

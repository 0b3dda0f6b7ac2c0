"""Domain entities."""

from staffdesk.domain.entities.auth_user import (
    AuthResponse,
    AuthSession,
    AuthUser,
    IdentityUser,
)

__all__ = ["AuthResponse", "AuthSession", "AuthUser", "IdentityUser"]

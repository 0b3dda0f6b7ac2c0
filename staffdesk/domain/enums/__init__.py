"""Domain enums."""

from staffdesk.domain.enums.user_role import UserRole

__all__ = ["UserRole"]

"""Staff roles stored on a user's profile.

Role Hierarchy:
    - admin: Manages the organization (clients, workers, coordinators)
    - coordinator: Schedules assignments

Usage:
    from staffdesk.domain.enums import UserRole

    if user.role == UserRole.ADMIN:
        # Admin-only logic
"""

from enum import Enum


class UserRole(str, Enum):
    """Profile role, matching the ``user_role`` database enum."""

    ADMIN = "admin"
    COORDINATOR = "coordinator"

"""Authentication DTOs (Data Transfer Objects).

DTOs:
    - ProfileResult: Profile row joined with its organization name
    - CurrentUserResult: Result of get_current_user
    - OperationResult: Acknowledgement for actions with nothing to return
"""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from staffdesk.domain.entities import AuthUser
from staffdesk.domain.enums import UserRole
from staffdesk.infrastructure.persistence.models import ProfileModel


@dataclass(frozen=True, slots=True, kw_only=True)
class ProfileResult:
    """Staff profile.

    Attributes:
        id: User id.
        first_name: First name.
        last_name: Last name.
        role: Profile role.
        organization_id: Tenant id.
        organization_name: Tenant display name.
        created_at: Creation timestamp.
        updated_at: Last modification timestamp.
    """

    id: UUID
    first_name: str
    last_name: str
    role: UserRole
    organization_id: UUID
    organization_name: str
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_model(cls, model: ProfileModel, organization_name: str) -> "ProfileResult":
        """Build from a loaded ProfileModel."""
        return cls(
            id=model.id,
            first_name=model.first_name,
            last_name=model.last_name,
            role=model.role,
            organization_id=model.organization_id,
            organization_name=organization_name,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )


@dataclass(frozen=True, slots=True, kw_only=True)
class CurrentUserResult:
    """Authenticated user plus profile."""

    user: AuthUser
    profile: ProfileResult


@dataclass(frozen=True, slots=True, kw_only=True)
class OperationResult:
    """Acknowledgement returned by sign-out and password actions."""

    success: bool = True

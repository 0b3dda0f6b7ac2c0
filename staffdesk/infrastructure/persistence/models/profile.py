"""Profile model: one row per identity-provider user."""

from uuid import UUID

from sqlalchemy import Enum as SAEnum, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from staffdesk.domain.enums import UserRole
from staffdesk.infrastructure.persistence.base import BaseMutableModel
from staffdesk.infrastructure.persistence.models.organization import (
    OrganizationModel,
)


class ProfileModel(BaseMutableModel):
    """Staff profile.

    ``id`` is the identity provider's user id (not generated here), so a
    profile lookup by ``user.id`` is a primary-key lookup.

    Fields:
        first_name / last_name: Display names
        role: ``admin`` or ``coordinator``
        organization_id: Tenant the user belongs to
    """

    __tablename__ = "profiles"

    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False)
    role: Mapped[UserRole] = mapped_column(
        SAEnum(
            UserRole,
            name="user_role",
            values_callable=lambda enum: [member.value for member in enum],
        ),
        nullable=False,
        default=UserRole.COORDINATOR,
    )
    organization_id: Mapped[UUID] = mapped_column(
        ForeignKey("organizations.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )

    organization: Mapped[OrganizationModel] = relationship(lazy="raise")

"""Organization (tenant) model."""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from staffdesk.infrastructure.persistence.base import BaseMutableModel


class OrganizationModel(BaseMutableModel):
    """Tenant. Created by the sign-up flow from the ``organization_name`` metadata.

    Fields:
        id: UUID primary key (from BaseModel)
        name: Display name
        created_at / updated_at: Timestamps (from BaseMutableModel)
    """

    __tablename__ = "organizations"

    name: Mapped[str] = mapped_column(String(255), nullable=False)

"""Client model: a customer organization that staff are scheduled for."""

from uuid import UUID

from sqlalchemy import ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column

from staffdesk.infrastructure.persistence.base import (
    BaseMutableModel,
    SoftDeleteMixin,
)

# Columns searched by the clients list
CLIENT_SEARCHABLE_COLUMNS: tuple[str, ...] = ("name", "email", "phone", "address")


class ClientModel(SoftDeleteMixin, BaseMutableModel):
    """Client record, scoped to one organization.

    Fields:
        organization_id: Owning tenant
        name: Client name
        email: Contact email (unique)
        phone: Contact phone
        address: Postal address
        deleted_at: Soft-delete marker (from SoftDeleteMixin)
    """

    __tablename__ = "clients"

    organization_id: Mapped[UUID] = mapped_column(
        ForeignKey("organizations.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    phone: Mapped[str] = mapped_column(String(20), nullable=False)
    address: Mapped[str] = mapped_column(String(500), nullable=False)

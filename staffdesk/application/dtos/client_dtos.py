"""Client DTOs (Data Transfer Objects).

Result dataclasses returned by client actions. Actions never hand ORM
instances to callers; they convert them here.
"""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from staffdesk.infrastructure.persistence.models import ClientModel


@dataclass(frozen=True, slots=True, kw_only=True)
class ClientResult:
    """A client record.

    Attributes:
        id: Client identifier.
        organization_id: Owning tenant.
        name: Client name.
        email: Contact email.
        phone: Contact phone.
        address: Postal address.
        created_at: Creation timestamp.
        updated_at: Last modification timestamp.
        deleted_at: Soft-delete timestamp (None while active).
    """

    id: UUID
    organization_id: UUID
    name: str
    email: str
    phone: str
    address: str
    created_at: datetime
    updated_at: datetime
    deleted_at: datetime | None = None

    @classmethod
    def from_model(cls, model: ClientModel) -> "ClientResult":
        """Build from a loaded ClientModel."""
        return cls(
            id=model.id,
            organization_id=model.organization_id,
            name=model.name,
            email=model.email,
            phone=model.phone,
            address=model.address,
            created_at=model.created_at,
            updated_at=model.updated_at,
            deleted_at=model.deleted_at,
        )

"""Client request and response schemas.

Input models double as action schemas (``create_action(schema=...)``) and
HTTP request bodies. Response models convert client DTOs for the API.
"""

from datetime import datetime
from typing import Annotated, Literal
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field, StringConstraints

from staffdesk.application.dtos import ClientResult
from staffdesk.core.pagination import PaginatedResult
from staffdesk.schemas.common_schemas import (
    BaseFilterInput,
    IdInput,
    PaginationResponse,
    Phone,
    SortOrder,
)

ClientName = Annotated[
    str, StringConstraints(strip_whitespace=True, min_length=1, max_length=255)
]
ClientAddress = Annotated[
    str, StringConstraints(strip_whitespace=True, min_length=1, max_length=500)
]

ClientSortBy = Literal["name", "created_at"]


# =============================================================================
# Inputs
# =============================================================================


class CreateClientInput(BaseModel):
    """Input for create_client.

    POST /api/v1/clients
    """

    name: ClientName = Field(..., description="Client name", examples=["Acme Corp"])
    email: EmailStr = Field(..., description="Contact email", examples=["contact@acme.com"])
    phone: Phone = Field(..., description="Contact phone", examples=["+48 123 456 789"])
    address: ClientAddress = Field(
        ..., description="Postal address", examples=["ul. Glowna 1, 00-001 Warszawa"]
    )


class UpdateClientInput(IdInput):
    """Input for update_client. Only fields that are set are updated.

    PATCH /api/v1/clients/{id}
    """

    name: ClientName | None = None
    email: EmailStr | None = None
    phone: Phone | None = None
    address: ClientAddress | None = None


class ClientIdInput(IdInput):
    """Input for get_client and delete_client."""


class ClientFilterInput(BaseFilterInput):
    """Input for get_clients.

    GET /api/v1/clients?page=1&page_size=20&search=acme&sort_by=name
    """

    sort_by: ClientSortBy = Field("created_at", description="Sort column")
    sort_order: SortOrder = Field("asc", description="Sort direction")
    include_deleted: bool = Field(False, description="Include soft-deleted clients")


# =============================================================================
# Responses
# =============================================================================


class ClientResponse(BaseModel):
    """Single client response."""

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
    def from_dto(cls, dto: ClientResult) -> "ClientResponse":
        """Convert ClientResult to response schema."""
        return cls(
            id=dto.id,
            organization_id=dto.organization_id,
            name=dto.name,
            email=dto.email,
            phone=dto.phone,
            address=dto.address,
            created_at=dto.created_at,
            updated_at=dto.updated_at,
            deleted_at=dto.deleted_at,
        )


class ClientListResponse(BaseModel):
    """Paginated client list response."""

    data: list[ClientResponse] = Field(default_factory=list)
    pagination: PaginationResponse

    @classmethod
    def from_dto(cls, result: PaginatedResult[ClientResult]) -> "ClientListResponse":
        """Convert a paginated result to response schema."""
        return cls(
            data=[ClientResponse.from_dto(client) for client in result.data],
            pagination=PaginationResponse.from_meta(result.pagination),
        )

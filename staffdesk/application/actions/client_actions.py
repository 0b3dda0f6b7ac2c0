"""Client actions.

All actions are scoped to the caller's organization and require
authentication. Mutations revalidate the ``/clients`` page.

Actions:
    create_client: Insert a client
    get_client: Fetch one active client
    get_clients: Paginated, searchable, sortable list
    update_client: Partial update (only fields that are set)
    delete_client: Soft delete (sets ``deleted_at``)
"""

from datetime import UTC, datetime

from sqlalchemy import Select, select

from staffdesk.application.actions.wrapper import (
    ActionContext,
    RevalidatePath,
    create_action,
)
from staffdesk.application.dtos import ClientResult
from staffdesk.core.pagination import PaginatedResult, paginate_result
from staffdesk.infrastructure.persistence.models import ClientModel
from staffdesk.infrastructure.persistence.models.client import (
    CLIENT_SEARCHABLE_COLUMNS,
)
from staffdesk.infrastructure.persistence.query_helpers import (
    ListFilterConfig,
    apply_list_filters,
)
from staffdesk.schemas.client_schemas import (
    ClientFilterInput,
    ClientIdInput,
    CreateClientInput,
    UpdateClientInput,
)

CLIENTS_PATH = RevalidatePath("/clients")


def _active_client(ctx: ActionContext, client_id: object) -> Select[tuple[ClientModel]]:
    """Select a non-deleted client of the caller's organization."""
    user = ctx.require_user()
    return select(ClientModel).where(
        ClientModel.id == client_id,
        ClientModel.organization_id == user.organization_id,
        ClientModel.deleted_at.is_(None),
    )


async def _create_client(data: CreateClientInput, ctx: ActionContext) -> ClientResult:
    """Create a client in the caller's organization.

    Example:
        >>> result = await create_client(
        ...     {
        ...         "name": "Acme Corp",
        ...         "email": "contact@acme.com",
        ...         "phone": "+48 123 456 789",
        ...         "address": "ul. Glowna 1, 00-001 Warszawa",
        ...     },
        ...     access_token=token,
        ... )
    """
    user = ctx.require_user()
    async with ctx.client.transaction() as session:
        model = ClientModel(organization_id=user.organization_id, **data.model_dump())
        session.add(model)
        await session.flush()
        await session.refresh(model)
    return ClientResult.from_model(model)


async def _get_client(data: ClientIdInput, ctx: ActionContext) -> ClientResult:
    """Fetch one active client (NOT_FOUND when missing or deleted)."""
    model = await ctx.client.fetch_one(_active_client(ctx, data.id))
    return ClientResult.from_model(model)


async def _get_clients(
    data: ClientFilterInput, ctx: ActionContext
) -> PaginatedResult[ClientResult]:
    """List clients with search, sort and pagination.

    The count and the page are queried concurrently over the same filters.
    """
    user = ctx.require_user()
    stmt = select(ClientModel).where(ClientModel.organization_id == user.organization_id)
    stmt = apply_list_filters(
        stmt,
        ListFilterConfig(
            search=data.search,
            search_columns=CLIENT_SEARCHABLE_COLUMNS,
            include_deleted=data.include_deleted,
            sort_by=data.sort_by,
            sort_order=data.sort_order,
        ),
    )
    # Tie-breaker keeps pages stable when sort values repeat
    stmt = stmt.order_by(ClientModel.id)

    rows, total = await ctx.client.fetch_page(
        stmt, page=data.page, page_size=data.page_size
    )
    return paginate_result(
        [ClientResult.from_model(row) for row in rows],
        total,
        data.page,
        data.page_size,
    )


async def _update_client(data: UpdateClientInput, ctx: ActionContext) -> ClientResult:
    """Update the fields of an active client that are set in ``data``."""
    updates = data.model_dump(exclude_unset=True, exclude_none=True, exclude={"id"})
    async with ctx.client.transaction() as session:
        model = (await session.execute(_active_client(ctx, data.id))).scalar_one()
        for field, value in updates.items():
            setattr(model, field, value)
        await session.flush()
        await session.refresh(model)
    return ClientResult.from_model(model)


async def _delete_client(data: ClientIdInput, ctx: ActionContext) -> ClientResult:
    """Soft delete an active client. The row stays, hidden from default lists."""
    async with ctx.client.transaction() as session:
        model = (await session.execute(_active_client(ctx, data.id))).scalar_one()
        model.deleted_at = datetime.now(UTC)
        await session.flush()
        await session.refresh(model)
    return ClientResult.from_model(model)


create_client = create_action(
    _create_client,
    schema=CreateClientInput,
    revalidate_paths=[CLIENTS_PATH],
)

get_client = create_action(_get_client, schema=ClientIdInput)

get_clients = create_action(_get_clients, schema=ClientFilterInput)

update_client = create_action(
    _update_client,
    schema=UpdateClientInput,
    revalidate_paths=[CLIENTS_PATH],
)

delete_client = create_action(
    _delete_client,
    schema=ClientIdInput,
    revalidate_paths=[CLIENTS_PATH],
)

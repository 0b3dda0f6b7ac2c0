"""Clients resource handlers.

Endpoints:
    GET    /api/v1/clients        - Paginated list (page, page_size, search, sort_by, sort_order, include_deleted)
    POST   /api/v1/clients        - Create client
    GET    /api/v1/clients/{id}   - Get client
    PATCH  /api/v1/clients/{id}   - Partial update
    DELETE /api/v1/clients/{id}   - Soft delete

Handlers pass raw input to the actions; validation, auth and error mapping
happen there. Failures are rendered as RFC 9457 problem details.
"""

from typing import Annotated, Any

from fastapi import APIRouter, Body, Request, status
from fastapi.responses import JSONResponse

from staffdesk.application.actions import (
    create_client,
    delete_client,
    get_client,
    get_clients,
    update_client,
)
from staffdesk.core.result import Failure, Success
from staffdesk.presentation.routers.api.middleware import AccessToken, get_trace_id
from staffdesk.presentation.routers.api.v1.errors import ErrorResponseBuilder
from staffdesk.schemas.client_schemas import ClientListResponse, ClientResponse

router = APIRouter(prefix="/clients", tags=["clients"])

JsonBody = Annotated[dict[str, Any], Body()]


@router.get("", response_model=ClientListResponse)
async def list_clients(
    request: Request,
    access_token: AccessToken,
) -> ClientListResponse | JSONResponse:
    """List the organization's clients.

    GET /api/v1/clients?page=3&page_size=20&search=acme → 200 OK
    """
    result = await get_clients(dict(request.query_params), access_token=access_token)

    match result:
        case Success(value=page):
            return ClientListResponse.from_dto(page)
        case Failure(error=error):
            return ErrorResponseBuilder.from_action_error(error, request, get_trace_id())


@router.post("", response_model=ClientResponse, status_code=status.HTTP_201_CREATED)
async def create_client_route(
    request: Request,
    payload: JsonBody,
    access_token: AccessToken,
) -> ClientResponse | JSONResponse:
    """Create a client.

    POST /api/v1/clients → 201 Created, 409 on duplicate email.
    """
    result = await create_client(payload, access_token=access_token)

    match result:
        case Success(value=client):
            return ClientResponse.from_dto(client)
        case Failure(error=error):
            return ErrorResponseBuilder.from_action_error(error, request, get_trace_id())


@router.get("/{client_id}", response_model=ClientResponse)
async def get_client_route(
    request: Request,
    client_id: str,
    access_token: AccessToken,
) -> ClientResponse | JSONResponse:
    """GET /api/v1/clients/{id} → 200 OK, 404 when missing or deleted."""
    result = await get_client({"id": client_id}, access_token=access_token)

    match result:
        case Success(value=client):
            return ClientResponse.from_dto(client)
        case Failure(error=error):
            return ErrorResponseBuilder.from_action_error(error, request, get_trace_id())


@router.patch("/{client_id}", response_model=ClientResponse)
async def update_client_route(
    request: Request,
    client_id: str,
    payload: JsonBody,
    access_token: AccessToken,
) -> ClientResponse | JSONResponse:
    """PATCH /api/v1/clients/{id} → 200 OK. Only fields present are updated."""
    result = await update_client({**payload, "id": client_id}, access_token=access_token)

    match result:
        case Success(value=client):
            return ClientResponse.from_dto(client)
        case Failure(error=error):
            return ErrorResponseBuilder.from_action_error(error, request, get_trace_id())


@router.delete("/{client_id}", response_model=ClientResponse)
async def delete_client_route(
    request: Request,
    client_id: str,
    access_token: AccessToken,
) -> ClientResponse | JSONResponse:
    """DELETE /api/v1/clients/{id} → 200 OK with the soft-deleted client."""
    result = await delete_client({"id": client_id}, access_token=access_token)

    match result:
        case Success(value=client):
            return ClientResponse.from_dto(client)
        case Failure(error=error):
            return ErrorResponseBuilder.from_action_error(error, request, get_trace_id())

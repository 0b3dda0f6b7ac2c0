"""Authentication resource handlers.

Endpoints:
    POST   /api/v1/auth/sign-in         - Sign in with email and password
    POST   /api/v1/auth/sign-up         - Register (organization + profile)
    POST   /api/v1/auth/sign-out        - Revoke the current session
    POST   /api/v1/auth/password-reset  - Request a recovery email
    PUT    /api/v1/auth/password        - Set a new password
    GET    /api/v1/auth/me              - Current user with profile
    PATCH  /api/v1/auth/profile         - Update first/last name
"""

from typing import Annotated, Any

from fastapi import APIRouter, Body, Request, status
from fastapi.responses import JSONResponse

from staffdesk.application.actions import (
    get_current_user,
    reset_password,
    sign_in,
    sign_out,
    sign_up,
    update_password,
    update_profile,
)
from staffdesk.core.result import Failure, Success
from staffdesk.presentation.routers.api.middleware import AccessToken, get_trace_id
from staffdesk.presentation.routers.api.v1.errors import ErrorResponseBuilder
from staffdesk.schemas.auth_schemas import (
    AuthResponseSchema,
    CurrentUserResponse,
    ProfileResponse,
)
from staffdesk.schemas.common_schemas import SuccessResponse

router = APIRouter(prefix="/auth", tags=["auth"])

JsonBody = Annotated[dict[str, Any], Body()]


@router.post("/sign-in", response_model=AuthResponseSchema)
async def sign_in_route(request: Request, payload: JsonBody) -> AuthResponseSchema | JSONResponse:
    """POST /api/v1/auth/sign-in → 200 OK with session, 401 on bad credentials."""
    match await sign_in(payload):
        case Success(value=response):
            return AuthResponseSchema.from_entity(response)
        case Failure(error=error):
            return ErrorResponseBuilder.from_action_error(error, request, get_trace_id())


@router.post("/sign-up", response_model=AuthResponseSchema, status_code=status.HTTP_201_CREATED)
async def sign_up_route(request: Request, payload: JsonBody) -> AuthResponseSchema | JSONResponse:
    """POST /api/v1/auth/sign-up → 201 Created.

    The session is absent until the email address is confirmed.
    """
    match await sign_up(payload):
        case Success(value=response):
            return AuthResponseSchema.from_entity(response)
        case Failure(error=error):
            return ErrorResponseBuilder.from_action_error(error, request, get_trace_id())


@router.post("/sign-out", response_model=SuccessResponse)
async def sign_out_route(request: Request, access_token: AccessToken) -> SuccessResponse | JSONResponse:
    match await sign_out(access_token=access_token):
        case Success():
            return SuccessResponse()
        case Failure(error=error):
            return ErrorResponseBuilder.from_action_error(error, request, get_trace_id())


@router.post("/password-reset", response_model=SuccessResponse, status_code=status.HTTP_202_ACCEPTED)
async def password_reset_route(request: Request, payload: JsonBody) -> SuccessResponse | JSONResponse:
    """POST /api/v1/auth/password-reset → 202 Accepted, whether or not the email exists."""
    match await reset_password(payload):
        case Success():
            return SuccessResponse()
        case Failure(error=error):
            return ErrorResponseBuilder.from_action_error(error, request, get_trace_id())


@router.put("/password", response_model=SuccessResponse)
async def update_password_route(
    request: Request, payload: JsonBody, access_token: AccessToken
) -> SuccessResponse | JSONResponse:
    match await update_password(payload, access_token=access_token):
        case Success():
            return SuccessResponse()
        case Failure(error=error):
            return ErrorResponseBuilder.from_action_error(error, request, get_trace_id())


@router.get("/me", response_model=CurrentUserResponse)
async def me_route(request: Request, access_token: AccessToken) -> CurrentUserResponse | JSONResponse:
    """GET /api/v1/auth/me → 200 OK, 401 without a valid token."""
    match await get_current_user(access_token=access_token):
        case Success(value=current):
            return CurrentUserResponse.from_dto(current)
        case Failure(error=error):
            return ErrorResponseBuilder.from_action_error(error, request, get_trace_id())


@router.patch("/profile", response_model=ProfileResponse)
async def update_profile_route(
    request: Request, payload: JsonBody, access_token: AccessToken
) -> ProfileResponse | JSONResponse:
    match await update_profile(payload, access_token=access_token):
        case Success(value=profile):
            return ProfileResponse.from_dto(profile)
        case Failure(error=error):
            return ErrorResponseBuilder.from_action_error(error, request, get_trace_id())

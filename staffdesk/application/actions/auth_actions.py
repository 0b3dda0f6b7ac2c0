"""Authentication actions.

Thin actions over the identity provider plus the profile table. Sign-in,
sign-up and password reset run without a signed-in user; everything else
requires one.

Sign-up provisions the tenant: when the provider returns the new user, an
organization named ``organization_name`` is created with the user's
profile as its admin, in one transaction. A user that already has a
profile is not provisioned again, and neither is the placeholder user the
provider returns for an address that is already registered.
"""

from sqlalchemy import select
from sqlalchemy.orm import joinedload

from staffdesk.application.actions.wrapper import (
    ActionContext,
    RevalidatePath,
    create_action,
)
from staffdesk.application.dtos import (
    CurrentUserResult,
    OperationResult,
    ProfileResult,
)
from staffdesk.core.container import get_logger, get_settings
from staffdesk.core.errors import AuthProviderError
from staffdesk.domain.entities import AuthResponse
from staffdesk.domain.enums import UserRole
from staffdesk.infrastructure.persistence.models import (
    OrganizationModel,
    ProfileModel,
)
from staffdesk.schemas.auth_schemas import (
    ResetPasswordInput,
    SignInInput,
    SignUpInput,
    UpdatePasswordInput,
    UpdateProfileInput,
)

AUTH_CALLBACK_PATH = "/auth/callback"


def _callback_url(flow: str) -> str:
    return f"{get_settings().site_url}{AUTH_CALLBACK_PATH}?type={flow}"


async def _sign_in(data: SignInInput, ctx: ActionContext) -> AuthResponse:
    """Exchange email and password for a session."""
    return await ctx.client.auth.sign_in_with_password(data.email, data.password)


async def _sign_up(data: SignUpInput, ctx: ActionContext) -> AuthResponse:
    """Register a user and create their organization and admin profile.

    ``session`` is None on the response while the email is unconfirmed.
    """
    response = await ctx.client.auth.sign_up(
        data.email,
        data.password,
        redirect_to=_callback_url("signup"),
        data={
            "first_name": data.first_name,
            "last_name": data.last_name,
            "organization_name": data.organization_name,
        },
    )
    user = response.user
    if user is None or user.is_obfuscated:
        return response

    async with ctx.client.transaction() as session:
        # A repeated sign-up of an unconfirmed email returns the same user
        if await session.get(ProfileModel, user.id) is not None:
            get_logger().info("auth.sign_up_already_provisioned", user_id=str(user.id))
            return response
        organization = OrganizationModel(name=data.organization_name)
        session.add(organization)
        await session.flush()
        session.add(
            ProfileModel(
                id=user.id,
                first_name=data.first_name,
                last_name=data.last_name,
                role=UserRole.ADMIN,
                organization_id=organization.id,
            )
        )
    return response


async def _sign_out(_: None, ctx: ActionContext) -> OperationResult:
    """Revoke the caller's session."""
    await ctx.client.auth.sign_out(ctx.client.access_token)
    return OperationResult()


async def _reset_password(data: ResetPasswordInput, ctx: ActionContext) -> OperationResult:
    """Send a recovery email.

    Always succeeds so the response does not reveal whether the address is
    registered. Provider failures are logged.
    """
    try:
        await ctx.client.auth.reset_password_for_email(
            data.email, redirect_to=_callback_url("recovery")
        )
    except AuthProviderError as e:
        get_logger().warning(
            "auth.reset_password_failed",
            error_code=e.code,
            status_code=e.status,
        )
    return OperationResult()


async def _update_password(data: UpdatePasswordInput, ctx: ActionContext) -> OperationResult:
    """Set a new password for the signed-in user."""
    await ctx.client.auth.update_user(ctx.client.access_token, password=data.new_password)
    return OperationResult()


async def _get_current_user(_: None, ctx: ActionContext) -> CurrentUserResult:
    user = ctx.require_user()
    stmt = (
        select(ProfileModel)
        .options(joinedload(ProfileModel.organization))
        .where(ProfileModel.id == user.id)
    )
    profile = await ctx.client.fetch_one(stmt)
    return CurrentUserResult(
        user=user,
        profile=ProfileResult.from_model(profile, profile.organization.name),
    )


async def _update_profile(data: UpdateProfileInput, ctx: ActionContext) -> ProfileResult:
    """Update the signed-in user's first and last name."""
    user = ctx.require_user()
    stmt = (
        select(ProfileModel)
        .options(joinedload(ProfileModel.organization))
        .where(ProfileModel.id == user.id)
    )
    async with ctx.client.transaction() as session:
        profile = (await session.execute(stmt)).scalar_one()
        organization_name = profile.organization.name
        profile.first_name = data.first_name
        profile.last_name = data.last_name
        await session.flush()
        await session.refresh(profile, attribute_names=["updated_at"])
    return ProfileResult.from_model(profile, organization_name)


sign_in = create_action(_sign_in, schema=SignInInput, require_auth=False)

sign_up = create_action(_sign_up, schema=SignUpInput, require_auth=False)

sign_out = create_action(_sign_out)

reset_password = create_action(
    _reset_password, schema=ResetPasswordInput, require_auth=False
)

update_password = create_action(_update_password, schema=UpdatePasswordInput)

get_current_user = create_action(_get_current_user)

update_profile = create_action(
    _update_profile,
    schema=UpdateProfileInput,
    revalidate_paths=[RevalidatePath("/", "layout")],
)

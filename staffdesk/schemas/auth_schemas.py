"""Authentication request/response schemas.

Endpoints:
    POST   /api/v1/auth/sign-in         - Sign in with email and password
    POST   /api/v1/auth/sign-up         - Register (organization + profile)
    POST   /api/v1/auth/sign-out        - Revoke the current session
    POST   /api/v1/auth/password-reset  - Request a recovery email
    PUT    /api/v1/auth/password        - Set a new password
    GET    /api/v1/auth/me              - Current user with profile
    PATCH  /api/v1/auth/profile         - Update first/last name
"""

from typing import Annotated
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field, StringConstraints

from staffdesk.application.dtos import CurrentUserResult, ProfileResult
from staffdesk.core.constants import PASSWORD_MIN_LENGTH
from staffdesk.domain.entities import AuthResponse
from staffdesk.domain.enums import UserRole
from staffdesk.schemas.common_schemas import PersonName

OrganizationName = Annotated[
    str, StringConstraints(strip_whitespace=True, min_length=1, max_length=255)
]


# =============================================================================
# Inputs
# =============================================================================


class SignInInput(BaseModel):
    """Input for sign_in."""

    email: EmailStr = Field(..., examples=["user@example.com"])
    password: str = Field(..., min_length=PASSWORD_MIN_LENGTH)


class SignUpInput(BaseModel):
    """Input for sign_up.

    ``first_name``, ``last_name`` and ``organization_name`` are stored as user
    metadata; sign_up also provisions the organization and an admin profile.
    """

    email: EmailStr = Field(..., examples=["newuser@example.com"])
    password: str = Field(..., min_length=PASSWORD_MIN_LENGTH)
    first_name: PersonName = Field(..., examples=["John"])
    last_name: PersonName = Field(..., examples=["Doe"])
    organization_name: OrganizationName = Field(..., examples=["My Company"])


class UpdateProfileInput(BaseModel):
    """Input for update_profile."""

    first_name: PersonName
    last_name: PersonName


class ResetPasswordInput(BaseModel):
    """Input for reset_password."""

    email: EmailStr


class UpdatePasswordInput(BaseModel):
    """Input for update_password."""

    new_password: str = Field(..., min_length=PASSWORD_MIN_LENGTH)


# =============================================================================
# Responses
# =============================================================================


class SessionResponse(BaseModel):
    """Tokens issued on sign-in."""

    access_token: str
    refresh_token: str
    token_type: str = "bearer"
    expires_in: int


class AuthResponseSchema(BaseModel):
    """Sign-in / sign-up response. ``session`` is None until email is confirmed."""

    user_id: UUID | None = None
    email: str | None = None
    session: SessionResponse | None = None

    @classmethod
    def from_entity(cls, response: AuthResponse) -> "AuthResponseSchema":
        """Convert AuthResponse to response schema."""
        session = None
        if response.session is not None:
            session = SessionResponse(
                access_token=response.session.access_token,
                refresh_token=response.session.refresh_token,
                token_type=response.session.token_type,
                expires_in=response.session.expires_in,
            )
        return cls(
            user_id=response.user.id if response.user else None,
            email=response.user.email if response.user else None,
            session=session,
        )


class ProfileResponse(BaseModel):
    """Staff profile response."""

    id: UUID
    first_name: str
    last_name: str
    role: UserRole
    organization_id: UUID
    organization_name: str

    @classmethod
    def from_dto(cls, dto: ProfileResult) -> "ProfileResponse":
        """Convert ProfileResult to response schema."""
        return cls(
            id=dto.id,
            first_name=dto.first_name,
            last_name=dto.last_name,
            role=dto.role,
            organization_id=dto.organization_id,
            organization_name=dto.organization_name,
        )


class CurrentUserResponse(BaseModel):
    """Current user with profile."""

    id: UUID
    email: str | None
    profile: ProfileResponse

    @classmethod
    def from_dto(cls, dto: CurrentUserResult) -> "CurrentUserResponse":
        """Convert CurrentUserResult to response schema."""
        return cls(
            id=dto.user.id,
            email=dto.user.email,
            profile=ProfileResponse.from_dto(dto.profile),
        )

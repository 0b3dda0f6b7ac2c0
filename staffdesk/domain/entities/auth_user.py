"""Authentication entities.

Pure data, no framework dependencies.

- IdentityUser: user record as held by the identity provider
- AuthSession: tokens issued on sign-in
- AuthResponse: what sign-in / sign-up return (session is None while email
  confirmation is pending)
- AuthUser: identity user joined with its profile and organization; this is
  what actions see as ``context.user``
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any
from uuid import UUID

from staffdesk.domain.enums import UserRole


@dataclass(frozen=True, slots=True, kw_only=True)
class IdentityUser:
    """User as returned by the identity provider.

    Attributes:
        id: Provider user id (also the profile primary key).
        email: Email address, if any.
        user_metadata: Free-form metadata set at sign-up
            (first_name, last_name, organization_name).
        email_confirmed_at: When the email was confirmed, None if pending.
        created_at: When the provider created the user.
        identities: Linked identities, None when the provider omitted them.
    """

    id: UUID
    email: str | None = None
    user_metadata: dict[str, Any] = field(default_factory=dict)
    email_confirmed_at: datetime | None = None
    created_at: datetime | None = None
    identities: list[dict[str, Any]] | None = None

    @property
    def is_obfuscated(self) -> bool:
        """True for the placeholder user returned when signing up an existing email.

        The provider hides whether the address is registered by answering with
        a fake user that has no identities.
        """
        return self.identities is not None and not self.identities


@dataclass(frozen=True, slots=True, kw_only=True)
class AuthSession:
    """Tokens issued by the identity provider."""

    access_token: str
    refresh_token: str
    expires_in: int
    token_type: str = "bearer"
    expires_at: int | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class AuthResponse:
    """Result of a sign-in or sign-up call."""

    user: IdentityUser | None
    session: AuthSession | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class AuthUser:
    """Authenticated staff member.

    Built by ``BackendClient.get_user()`` from the identity user plus its
    profile row. A user without a profile is not an AuthUser.

    Attributes:
        id: User id (identity provider id == profile id).
        email: Email address.
        role: Profile role.
        first_name: Profile first name.
        last_name: Profile last name.
        organization_id: Tenant the user belongs to.
        organization_name: Tenant display name.
    """

    id: UUID
    email: str | None
    role: UserRole
    first_name: str
    last_name: str
    organization_id: UUID
    organization_name: str

    @property
    def full_name(self) -> str:
        """First and last name joined by a space."""
        return f"{self.first_name} {self.last_name}".strip()

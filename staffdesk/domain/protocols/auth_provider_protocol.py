"""Identity provider port.

The identity provider owns credentials, sessions and email delivery. Actions
only forward to it and translate its errors.

Implementations raise ``AuthProviderError`` for every rejected request; the
action wrapper maps it onto the error taxonomy.
"""

from typing import Any, Protocol

from staffdesk.domain.entities import AuthResponse, IdentityUser


class AuthProviderProtocol(Protocol):
    """What the application needs from an identity provider."""

    async def sign_in_with_password(self, email: str, password: str) -> AuthResponse:
        """Exchange email/password for a session.

        Raises:
            AuthProviderError: e.g. ``invalid_credentials``, ``email_not_confirmed``.
        """
        ...

    async def sign_up(
        self,
        email: str,
        password: str,
        *,
        redirect_to: str | None = None,
        data: dict[str, Any] | None = None,
    ) -> AuthResponse:
        """Register a user. ``data`` becomes the user's metadata.

        Raises:
            AuthProviderError: e.g. ``user_already_exists``, ``weak_password``.
        """
        ...

    async def sign_out(self, access_token: str) -> None:
        """Revoke the session behind ``access_token``."""
        ...

    async def reset_password_for_email(
        self, email: str, *, redirect_to: str | None = None
    ) -> None:
        """Send a password recovery email."""
        ...

    async def update_user(
        self,
        access_token: str,
        *,
        password: str | None = None,
        data: dict[str, Any] | None = None,
    ) -> IdentityUser:
        """Update the user behind ``access_token``."""
        ...

    async def get_user(self, access_token: str) -> IdentityUser:
        """Resolve the user behind ``access_token``.

        Raises:
            AuthProviderError: If the token is missing, expired or revoked.
        """
        ...

    async def aclose(self) -> None:
        """Release connections held by the provider client."""
        ...

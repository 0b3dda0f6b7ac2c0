"""GoTrue identity provider adapter.

Implements AuthProviderProtocol against a GoTrue-compatible REST API (the
auth server behind Supabase) using httpx.

Error handling:
    Every non-2xx response raises ``AuthProviderError`` carrying the
    provider's machine code (``error_code``, falling back to ``code`` /
    ``error``), its message and the HTTP status. Timeouts and connection
    failures raise ``AuthProviderError`` with code ``provider_unavailable``.

Reference:
    - https://github.com/supabase/auth (REST endpoints)
"""

from datetime import datetime
from typing import Any
from uuid import UUID

import httpx

from staffdesk.core.errors import AuthProviderError
from staffdesk.domain.entities import AuthResponse, AuthSession, IdentityUser
from staffdesk.domain.protocols import LoggerProtocol

UNAVAILABLE_CODE = "provider_unavailable"


class GoTrueAuthAdapter:
    """GoTrue implementation of AuthProviderProtocol.

    Note: Does NOT inherit from AuthProviderProtocol (structural typing).

    Attributes:
        _http: Shared async HTTP client (base URL = auth server URL).
        _api_key: Project API key sent as ``apikey`` on every request.
        _logger: Logger for request outcomes.
    """

    def __init__(
        self,
        *,
        http_client: httpx.AsyncClient,
        api_key: str,
        logger: LoggerProtocol,
    ) -> None:
        """Initialize adapter.

        Args:
            http_client: httpx client whose ``base_url`` is the auth server.
            api_key: Project API key.
            logger: Application logger.
        """
        self._http = http_client
        self._api_key = api_key
        self._logger = logger.bind(component="gotrue")

    async def sign_in_with_password(self, email: str, password: str) -> AuthResponse:
        """POST /token?grant_type=password."""
        body = await self._request(
            "POST",
            "/token",
            params={"grant_type": "password"},
            json_data={"email": email, "password": password},
            operation="sign_in_with_password",
        )
        return _parse_auth_response(body)

    async def sign_up(
        self,
        email: str,
        password: str,
        *,
        redirect_to: str | None = None,
        data: dict[str, Any] | None = None,
    ) -> AuthResponse:
        """POST /signup.

        When email confirmation is required the provider returns the bare
        user and no session.
        """
        body = await self._request(
            "POST",
            "/signup",
            params={"redirect_to": redirect_to} if redirect_to else None,
            json_data={"email": email, "password": password, "data": data or {}},
            operation="sign_up",
        )
        return _parse_auth_response(body)

    async def sign_out(self, access_token: str) -> None:
        """POST /logout (revokes the session's refresh tokens)."""
        await self._request(
            "POST",
            "/logout",
            access_token=access_token,
            operation="sign_out",
        )

    async def reset_password_for_email(
        self, email: str, *, redirect_to: str | None = None
    ) -> None:
        """POST /recover."""
        await self._request(
            "POST",
            "/recover",
            params={"redirect_to": redirect_to} if redirect_to else None,
            json_data={"email": email},
            operation="reset_password_for_email",
        )

    async def update_user(
        self,
        access_token: str,
        *,
        password: str | None = None,
        data: dict[str, Any] | None = None,
    ) -> IdentityUser:
        """PUT /user."""
        payload: dict[str, Any] = {}
        if password is not None:
            payload["password"] = password
        if data is not None:
            payload["data"] = data
        body = await self._request(
            "PUT",
            "/user",
            access_token=access_token,
            json_data=payload,
            operation="update_user",
        )
        return _parse_user(body)

    async def get_user(self, access_token: str) -> IdentityUser:
        """GET /user."""
        body = await self._request(
            "GET",
            "/user",
            access_token=access_token,
            operation="get_user",
        )
        return _parse_user(body)

    async def _request(
        self,
        method: str,
        path: str,
        *,
        operation: str,
        access_token: str | None = None,
        params: dict[str, str] | None = None,
        json_data: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Execute a request and return the decoded JSON body ({} when empty).

        Raises:
            AuthProviderError: On non-2xx responses, timeouts and connection errors.
        """
        headers = {
            "apikey": self._api_key,
            "Authorization": f"Bearer {access_token or self._api_key}",
        }
        try:
            response = await self._http.request(
                method,
                path,
                headers=headers,
                params=params,
                json=json_data,
            )
        except httpx.TimeoutException as e:
            self._logger.warning("gotrue_timeout", operation=operation, error=str(e))
            raise AuthProviderError(
                "Identity provider request timed out", code=UNAVAILABLE_CODE
            ) from e
        except httpx.RequestError as e:
            self._logger.warning(
                "gotrue_connection_error", operation=operation, error=str(e)
            )
            raise AuthProviderError(
                "Failed to connect to identity provider", code=UNAVAILABLE_CODE
            ) from e

        if response.is_success:
            if not response.content:
                return {}
            return response.json()

        error = _error_from_response(response)
        self._logger.info(
            "gotrue_request_rejected",
            operation=operation,
            status_code=response.status_code,
            error_code=error.code,
        )
        raise error

    async def aclose(self) -> None:
        """Close the underlying HTTP client."""
        await self._http.aclose()


def _error_from_response(response: httpx.Response) -> AuthProviderError:
    try:
        body = response.json()
    except ValueError:
        body = {}
    if not isinstance(body, dict):
        body = {}

    # Newer servers send the HTTP status as a numeric ``code``
    code = next(
        (
            body[key]
            for key in ("error_code", "code", "error")
            if isinstance(body.get(key), str) and body[key]
        ),
        None,
    )
    message = (
        body.get("msg")
        or body.get("message")
        or body.get("error_description")
        or response.reason_phrase
        or "Identity provider error"
    )
    return AuthProviderError(str(message), code=code, status=response.status_code)


def _parse_datetime(value: str | None) -> datetime | None:
    if not value:
        return None
    return datetime.fromisoformat(value)


def _parse_user(body: dict[str, Any]) -> IdentityUser:
    return IdentityUser(
        id=UUID(body["id"]),
        email=body.get("email"),
        user_metadata=body.get("user_metadata") or {},
        email_confirmed_at=_parse_datetime(body.get("email_confirmed_at")),
        created_at=_parse_datetime(body.get("created_at")),
        identities=body.get("identities"),
    )


def _parse_auth_response(body: dict[str, Any]) -> AuthResponse:
    """Parse a token response, or a bare user when no session was issued."""
    if "access_token" not in body:
        return AuthResponse(user=_parse_user(body) if body.get("id") else None)

    session = AuthSession(
        access_token=body["access_token"],
        refresh_token=body.get("refresh_token", ""),
        expires_in=int(body.get("expires_in", 0)),
        token_type=body.get("token_type", "bearer"),
        expires_at=body.get("expires_at"),
    )
    user = body.get("user")
    return AuthResponse(user=_parse_user(user) if user else None, session=session)

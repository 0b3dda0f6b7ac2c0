"""API tests for the auth endpoints."""

from uuid import uuid4

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from staffdesk.core.errors import AuthProviderError
from staffdesk.domain.entities import AuthResponse, AuthSession, IdentityUser
from staffdesk.main import create_app

pytestmark = [pytest.mark.api, pytest.mark.usefixtures("app_services")]

AUTH_URL = "/api/v1/auth"


@pytest_asyncio.fixture
async def http_client():
    transport = ASGITransport(app=create_app())
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


class TestSignIn:
    async def test_returns_tokens(self, http_client, auth_provider):
        user_id = uuid4()
        auth_provider.sign_in_with_password.return_value = AuthResponse(
            user=IdentityUser(id=user_id, email="jane@acme.com"),
            session=AuthSession(access_token="at", refresh_token="rt", expires_in=3600),
        )

        response = await http_client.post(
            f"{AUTH_URL}/sign-in",
            json={"email": "jane@acme.com", "password": "secret-password"},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["user_id"] == str(user_id)
        assert body["session"]["access_token"] == "at"

    async def test_invalid_credentials_is_401(self, http_client, auth_provider):
        auth_provider.sign_in_with_password.side_effect = AuthProviderError(
            "Invalid login credentials", code="invalid_credentials", status=400
        )

        response = await http_client.post(
            f"{AUTH_URL}/sign-in",
            json={"email": "jane@acme.com", "password": "wrong-password"},
        )

        assert response.status_code == 401
        assert response.json()["code"] == "INVALID_CREDENTIALS"


class TestPasswordReset:
    async def test_accepted_even_when_provider_fails(self, http_client, auth_provider):
        auth_provider.reset_password_for_email.side_effect = AuthProviderError(
            "rate limited", code="over_email_send_rate_limit", status=429
        )

        response = await http_client.post(
            f"{AUTH_URL}/password-reset", json={"email": "ghost@acme.com"}
        )

        assert response.status_code == 202
        assert response.json() == {"success": True}


class TestCurrentUser:
    async def test_me(self, http_client, signed_in_user):
        identity, token = signed_in_user

        response = await http_client.get(
            f"{AUTH_URL}/me", headers={"Authorization": f"Bearer {token}"}
        )

        assert response.status_code == 200
        body = response.json()
        assert body["id"] == str(identity.id)
        assert body["profile"]["role"] == "admin"
        assert body["profile"]["organization_name"] == "Acme Staffing"

    async def test_me_without_token_is_401(self, http_client):
        response = await http_client.get(f"{AUTH_URL}/me")

        assert response.status_code == 401

    async def test_update_profile(self, http_client, access_token):
        response = await http_client.patch(
            f"{AUTH_URL}/profile",
            json={"first_name": "Janet", "last_name": "Smith"},
            headers={"Authorization": f"Bearer {access_token}"},
        )

        assert response.status_code == 200
        assert response.json()["first_name"] == "Janet"

    async def test_sign_out(self, http_client, access_token, auth_provider):
        response = await http_client.post(
            f"{AUTH_URL}/sign-out", headers={"Authorization": f"Bearer {access_token}"}
        )

        assert response.status_code == 200
        auth_provider.sign_out.assert_awaited_once_with(access_token)

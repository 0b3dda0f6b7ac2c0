"""Integration tests for BackendClient over a SQLite database."""

from datetime import timedelta
from uuid import uuid4

import pytest
from sqlalchemy import select

from staffdesk.core.errors import (
    AuthenticationRequiredError,
    AuthProviderError,
    BackendQueryError,
)
from staffdesk.domain.entities import IdentityUser
from staffdesk.domain.enums import UserRole
from staffdesk.infrastructure.backend.client import backend_client_scope
from staffdesk.infrastructure.persistence.models import ClientModel
from tests.conftest import make_access_token

pytestmark = pytest.mark.integration


class TestGetUser:
    async def test_resolves_profile_and_organization(
        self, backend_client_factory, signed_in_user, organization
    ):
        identity, token = signed_in_user
        client = backend_client_factory(token)

        user = await client.get_user()

        assert user.id == identity.id
        assert user.email == "jane@acme.com"
        assert user.role is UserRole.ADMIN
        assert user.organization_id == organization.id
        assert user.organization_name == "Acme Staffing"

    async def test_user_is_cached(self, backend_client_factory, signed_in_user, auth_provider):
        _, token = signed_in_user
        client = backend_client_factory(token)

        first = await client.get_user()
        auth_provider.users.clear()

        assert await client.get_user() is first

    async def test_no_token_means_no_user(self, backend_client_factory):
        assert await backend_client_factory(None).get_user() is None

    async def test_missing_profile_means_no_user(self, backend_client_factory, auth_provider):
        identity = IdentityUser(id=uuid4(), email="new@acme.com")
        token = make_access_token(identity.id)
        auth_provider.register(token, identity)

        assert await backend_client_factory(token).get_user() is None

    async def test_rejected_token_raises_provider_error(self, backend_client_factory):
        with pytest.raises(AuthProviderError):
            await backend_client_factory("unknown-token").get_user()

    async def test_require_user_without_token(self, backend_client_factory):
        with pytest.raises(AuthenticationRequiredError):
            await backend_client_factory(None).require_user()

    async def test_require_user_wraps_provider_error(self, backend_client_factory):
        with pytest.raises(AuthenticationRequiredError):
            await backend_client_factory("unknown-token").require_user()


class TestTokenVerification:
    async def test_expired_token_is_pgrst301(self, backend_client_factory):
        token = make_access_token(uuid4(), expires_in=timedelta(minutes=-5))

        with pytest.raises(BackendQueryError) as exc_info:
            await backend_client_factory(token).fetch_all(select(ClientModel))

        assert exc_info.value.info.code == "PGRST301"

    async def test_forged_token_is_pgrst302(self, backend_client_factory):
        token = make_access_token(
            uuid4(), secret="some-other-secret-that-is-also-32-bytes"
        )

        with pytest.raises(BackendQueryError) as exc_info:
            await backend_client_factory(token).fetch_all(select(ClientModel))

        assert exc_info.value.info.code == "PGRST302"

    async def test_anonymous_queries_are_allowed(self, backend_client_factory):
        assert await backend_client_factory(None).fetch_all(select(ClientModel)) == []


class TestLifecycle:
    async def test_closed_client_rejects_queries(self, backend_client_factory):
        client = backend_client_factory(None)
        client.close()

        assert client.closed
        with pytest.raises(RuntimeError):
            await client.fetch_all(select(ClientModel))

    @pytest.mark.usefixtures("app_services")
    async def test_scope_closes_client(self, access_token):
        async with backend_client_scope(access_token) as client:
            assert (await client.get_user()) is not None

        assert client.closed


class TestFetchPage:
    async def test_returns_page_and_total(self, backend_client_factory, database, organization):
        async with database.get_session() as session:
            session.add_all(
                ClientModel(
                    organization_id=organization.id,
                    name=f"Client {i}",
                    email=f"client{i}@mailbox.com",
                    phone="123456789",
                    address="Street 1",
                )
                for i in range(7)
            )
        stmt = select(ClientModel).order_by(ClientModel.name)

        rows, total = await backend_client_factory(None).fetch_page(stmt, page=2, page_size=5)

        assert total == 7
        assert [row.name for row in rows] == ["Client 5", "Client 6"]

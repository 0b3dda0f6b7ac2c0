"""Pytest configuration shared by all test suites.

Environment variables are set before any staffdesk module reads settings.
Container singletons are cleared around every test so no adapter leaks
between tests.
"""

import os

os.environ.setdefault("ENVIRONMENT", "testing")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("REDIS_URL", "redis://localhost:6379/15")
os.environ.setdefault("AUTH_URL", "https://auth.staffdesk.test/auth/v1")
os.environ.setdefault("AUTH_API_KEY", "test-api-key")
os.environ.setdefault("JWT_SECRET", "test-jwt-secret-with-at-least-32-bytes!")
os.environ.setdefault("SITE_URL", "https://staffdesk.test")

from contextlib import asynccontextmanager  # noqa: E402
from datetime import UTC, datetime, timedelta  # noqa: E402
from unittest.mock import AsyncMock, MagicMock  # noqa: E402
from uuid import UUID, uuid4  # noqa: E402

import jwt  # noqa: E402
import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
import structlog  # noqa: E402

from staffdesk.core.config import get_settings  # noqa: E402
from staffdesk.core.container import (  # noqa: E402
    get_auth_provider,
    get_database,
    get_logger,
    get_path_revalidator,
)
from staffdesk.core.errors import AuthProviderError  # noqa: E402
from staffdesk.core.result import Success  # noqa: E402
from staffdesk.domain.entities import IdentityUser  # noqa: E402
from staffdesk.domain.enums import UserRole  # noqa: E402
from staffdesk.infrastructure.backend.client import BackendClient  # noqa: E402
from staffdesk.infrastructure.persistence.database import Database  # noqa: E402
from staffdesk.infrastructure.persistence.models import (  # noqa: E402
    OrganizationModel,
    ProfileModel,
)

JWT_SECRET = os.environ["JWT_SECRET"]


@pytest.fixture(autouse=True)
def clear_container_caches():
    """Reset app-scoped singletons before and after each test.

    structlog is returned to its defaults so no logger keeps writing to a
    capture stream pytest has already closed.
    """
    factories = (
        get_settings,
        get_logger,
        get_database,
        get_auth_provider,
        get_path_revalidator,
    )
    for factory in factories:
        factory.cache_clear()
    yield
    for factory in factories:
        factory.cache_clear()
    structlog.reset_defaults()


# =============================================================================
# Test doubles
# =============================================================================


class FakeAuthProvider:
    """In-memory identity provider.

    ``get_user`` resolves tokens registered with ``register``; every other
    operation is an AsyncMock tests configure and assert on.
    """

    def __init__(self) -> None:
        self.users: dict[str, IdentityUser] = {}
        self.sign_in_with_password = AsyncMock()
        self.sign_up = AsyncMock()
        self.sign_out = AsyncMock(return_value=None)
        self.reset_password_for_email = AsyncMock(return_value=None)
        self.update_user = AsyncMock()
        self.aclose = AsyncMock(return_value=None)

    def register(self, access_token: str, user: IdentityUser) -> None:
        self.users[access_token] = user

    async def get_user(self, access_token: str) -> IdentityUser:
        user = self.users.get(access_token)
        if user is None:
            raise AuthProviderError("invalid JWT", code="bad_jwt", status=401)
        return user


def make_access_token(
    user_id: UUID,
    *,
    expires_in: timedelta = timedelta(hours=1),
    secret: str = JWT_SECRET,
) -> str:
    """Sign an access token the way the identity provider does."""
    now = datetime.now(UTC)
    return jwt.encode(
        {
            "sub": str(user_id),
            "role": "authenticated",
            "iat": now,
            "exp": now + expires_in,
        },
        secret,
        algorithm="HS256",
    )


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def mock_logger() -> MagicMock:
    """Logger double whose ``bind`` returns itself."""
    logger = MagicMock()
    logger.bind.return_value = logger
    return logger


@pytest.fixture
def mock_revalidator() -> AsyncMock:
    """Path revalidator that always succeeds."""
    revalidator = AsyncMock()
    revalidator.revalidate_path.return_value = Success(value=None)
    return revalidator


@pytest.fixture
def auth_provider() -> FakeAuthProvider:
    return FakeAuthProvider()


@pytest_asyncio.fixture
async def database(tmp_path):
    """File-backed SQLite database with all tables created."""
    db = Database(f"sqlite+aiosqlite:///{tmp_path / 'staffdesk.db'}")
    await db.create_all()
    yield db
    await db.drop_all()
    await db.close()


@pytest_asyncio.fixture
async def organization(database: Database) -> OrganizationModel:
    async with database.get_session() as session:
        org = OrganizationModel(name="Acme Staffing")
        session.add(org)
    return org


async def create_profile(
    database: Database,
    organization_id: UUID,
    *,
    user_id: UUID | None = None,
    role: UserRole = UserRole.ADMIN,
) -> ProfileModel:
    """Insert a profile row for ``user_id``."""
    async with database.get_session() as session:
        profile = ProfileModel(
            id=user_id or uuid4(),
            first_name="Jane",
            last_name="Doe",
            role=role,
            organization_id=organization_id,
        )
        session.add(profile)
    return profile


@pytest_asyncio.fixture
async def signed_in_user(
    database: Database,
    organization: OrganizationModel,
    auth_provider: FakeAuthProvider,
) -> tuple[IdentityUser, str]:
    """A user with a profile in ``organization`` and a valid access token."""
    identity = IdentityUser(id=uuid4(), email="jane@acme.com")
    await create_profile(database, organization.id, user_id=identity.id)
    token = make_access_token(identity.id)
    auth_provider.register(token, identity)
    return identity, token


@pytest.fixture
def access_token(signed_in_user: tuple[IdentityUser, str]) -> str:
    return signed_in_user[1]


@pytest.fixture
def app_services(
    monkeypatch: pytest.MonkeyPatch,
    database: Database,
    auth_provider: FakeAuthProvider,
    mock_revalidator: AsyncMock,
) -> AsyncMock:
    """Point the container at the test database, fake provider and revalidator.

    Returns the revalidator so tests can assert on invalidations.
    """
    import staffdesk.application.actions.wrapper as wrapper
    import staffdesk.core.container as container

    monkeypatch.setattr(container, "get_database", lambda: database)
    monkeypatch.setattr(container, "get_auth_provider", lambda: auth_provider)
    monkeypatch.setattr(wrapper, "get_path_revalidator", lambda: mock_revalidator)
    return mock_revalidator


@pytest.fixture
def backend_client_factory(database: Database, auth_provider: FakeAuthProvider):
    """Build BackendClients over the test database."""

    def factory(access_token: str | None = None) -> BackendClient:
        return BackendClient(
            database=database,
            auth=auth_provider,
            access_token=access_token,
            jwt_secret=JWT_SECRET,
        )

    return factory


@pytest.fixture
def client_scope(backend_client_factory):
    """``client_scope`` for create_action over the test database."""

    @asynccontextmanager
    async def scope(access_token: str | None = None):
        client = backend_client_factory(access_token)
        try:
            yield client
        finally:
            client.close()

    return scope

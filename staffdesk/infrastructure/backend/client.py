"""Request-scoped backend client.

A BackendClient is the handle an action's handler talks to: it runs queries
on the shared Database, resolves the current user through the identity
provider, and carries the caller's access token. One is created per action
invocation by ``backend_client_scope`` and closed when the invocation ends.

Usage:
    async with backend_client_scope(access_token) as client:
        user = await client.get_user()
        rows, total = await client.fetch_page(stmt, page=1, page_size=20)
"""

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

import jwt
from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import joinedload

from staffdesk.core.errors import (
    AuthenticationRequiredError,
    AuthProviderError,
    BackendQueryError,
    DatabaseErrorInfo,
)
from staffdesk.domain.entities import AuthUser
from staffdesk.domain.protocols import AuthProviderProtocol, LoggerProtocol
from staffdesk.infrastructure.persistence.database import Database
from staffdesk.infrastructure.persistence.models import ProfileModel
from staffdesk.infrastructure.persistence.query_helpers import apply_pagination


class BackendClient:
    """Per-invocation handle over the database and the identity provider.

    Attributes:
        access_token: Caller's bearer token (None for anonymous calls).
        auth: Identity provider adapter.
    """

    def __init__(
        self,
        *,
        database: Database,
        auth: AuthProviderProtocol,
        access_token: str | None = None,
        jwt_secret: str | None = None,
        jwt_algorithm: str = "HS256",
        logger: LoggerProtocol | None = None,
    ) -> None:
        self._database = database
        self.auth = auth
        self.access_token = access_token
        self._jwt_secret = jwt_secret
        self._jwt_algorithm = jwt_algorithm
        self._logger = logger
        self._user: AuthUser | None = None
        self._closed = False

    # ------------------------------------------------------------------
    # Identity
    # ------------------------------------------------------------------

    async def get_user(self) -> AuthUser | None:
        """Resolve the authenticated user with profile and organization.

        Returns:
            AuthUser, or None when there is no access token or the user has
            no profile yet.

        Raises:
            AuthProviderError: If the identity provider rejects the token.
        """
        if self._user is not None:
            return self._user
        if not self.access_token:
            return None

        identity = await self.auth.get_user(self.access_token)

        stmt = (
            select(ProfileModel)
            .options(joinedload(ProfileModel.organization))
            .where(ProfileModel.id == identity.id)
        )
        async with self.session() as session:
            profile = (await session.execute(stmt)).scalar_one_or_none()

        if profile is None:
            if self._logger is not None:
                self._logger.warning("auth.profile_missing", user_id=str(identity.id))
            return None

        self._user = AuthUser(
            id=identity.id,
            email=identity.email,
            role=profile.role,
            first_name=profile.first_name,
            last_name=profile.last_name,
            organization_id=profile.organization_id,
            organization_name=profile.organization.name,
        )
        return self._user

    async def require_user(self) -> AuthUser:
        """Like ``get_user`` but raise when nobody is signed in.

        Raises:
            AuthenticationRequiredError: If there is no authenticated user.
        """
        try:
            user = await self.get_user()
        except AuthProviderError as e:
            raise AuthenticationRequiredError() from e
        if user is None:
            raise AuthenticationRequiredError()
        return user

    # ------------------------------------------------------------------
    # Sessions
    # ------------------------------------------------------------------

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        """Session that commits on success and rolls back on error."""
        self._check_usable()
        async with self._database.get_session() as session:
            yield session

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[AsyncSession]:
        """Session inside an explicit transaction block."""
        self._check_usable()
        async with self._database.transaction() as session:
            yield session

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    async def fetch_one(self, stmt: Select[Any]) -> Any:
        """Return exactly one row's first entity.

        Raises:
            sqlalchemy.exc.NoResultFound: If the query returns no rows.
        """
        async with self.session() as session:
            return (await session.execute(stmt)).scalar_one()

    async def fetch_all(self, stmt: Select[Any]) -> list[Any]:
        """Return the first entity of every row."""
        async with self.session() as session:
            return list((await session.execute(stmt)).scalars().all())

    async def count(self, stmt: Select[Any]) -> int:
        """Count the rows ``stmt`` would return (ordering is dropped)."""
        count_stmt = select(func.count()).select_from(stmt.order_by(None).subquery())
        async with self.session() as session:
            return int((await session.execute(count_stmt)).scalar_one())

    async def fetch_page(
        self,
        stmt: Select[Any],
        *,
        page: int,
        page_size: int,
    ) -> tuple[list[Any], int]:
        """Run the count query and the page query concurrently.

        Each query gets its own session. If either fails, the exception
        propagates and no partial result is returned.

        Args:
            stmt: Filtered and sorted statement (not yet paginated).
            page: 1-based page number.
            page_size: Rows per page.

        Returns:
            Tuple of (rows on the page, total matching rows).
        """
        rows, total = await asyncio.gather(
            self.fetch_all(apply_pagination(stmt, page, page_size)),
            self.count(stmt),
        )
        return rows, total

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def close(self) -> None:
        """End this client's lifetime. Later queries raise RuntimeError."""
        self._closed = True
        self._user = None

    @property
    def closed(self) -> bool:
        return self._closed

    def _check_usable(self) -> None:
        if self._closed:
            raise RuntimeError("BackendClient used after its action finished")
        self._verify_token()

    def _verify_token(self) -> None:
        """Reject expired or forged access tokens before touching the database.

        Raises:
            BackendQueryError: PGRST301 (expired) or PGRST302 (invalid).
        """
        if not self.access_token or not self._jwt_secret:
            return
        try:
            jwt.decode(
                self.access_token,
                self._jwt_secret,
                algorithms=[self._jwt_algorithm],
                options={"verify_aud": False},
            )
        except jwt.ExpiredSignatureError as e:
            raise BackendQueryError(
                DatabaseErrorInfo(code="PGRST301", message="JWT expired")
            ) from e
        except jwt.InvalidTokenError as e:
            raise BackendQueryError(
                DatabaseErrorInfo(code="PGRST302", message=f"JWT invalid: {e}")
            ) from e


@asynccontextmanager
async def backend_client_scope(access_token: str | None = None) -> AsyncIterator[BackendClient]:
    """Create a BackendClient from the container for one action invocation.

    Args:
        access_token: Caller's bearer token, if any.

    Yields:
        BackendClient, closed on exit.
    """
    from staffdesk.core.container import (
        get_auth_provider,
        get_database,
        get_logger,
        get_settings,
    )

    settings = get_settings()
    client = BackendClient(
        database=get_database(),
        auth=get_auth_provider(),
        access_token=access_token,
        jwt_secret=settings.jwt_secret,
        jwt_algorithm=settings.jwt_algorithm,
        logger=get_logger(),
    )
    try:
        yield client
    finally:
        client.close()


"""Infrastructure dependency factories.

Application-scoped singletons for core infrastructure services:
- Logging (console)
- Database (PostgreSQL)
- Identity provider (GoTrue over httpx)
- Path revalidation (Redis)

Adapters are imported inside the factories so importing the container never
touches the database, network or environment.
"""

from functools import lru_cache
from typing import TYPE_CHECKING

from staffdesk.core.config import get_settings
from staffdesk.core.constants import AUTH_PROVIDER_TIMEOUT

if TYPE_CHECKING:
    from staffdesk.domain.protocols import (
        AuthProviderProtocol,
        LoggerProtocol,
        PathRevalidatorProtocol,
    )
    from staffdesk.infrastructure.persistence.database import Database


# ============================================================================
# Application-Scoped Dependencies (Singletons)
# ============================================================================


@lru_cache()
def get_logger() -> "LoggerProtocol":
    """Return the application-scoped logger singleton.

    - development: ConsoleAdapter (human-readable)
    - testing/ci/production: ConsoleAdapter (JSON)

    Returns:
        LoggerProtocol: Logger instance implementing the protocol.
    """
    from staffdesk.infrastructure.logging.console_adapter import ConsoleAdapter

    settings = get_settings()
    return ConsoleAdapter(
        use_json=not settings.is_development,
        level="DEBUG" if settings.debug else settings.log_level,
    )


@lru_cache()
def get_database() -> "Database":
    """Get database manager singleton (app-scoped).

    Returns:
        Database manager instance (owns the connection pool).
    """
    from staffdesk.infrastructure.persistence.database import Database

    settings = get_settings()
    return Database(
        database_url=settings.database_url,
        echo=settings.db_echo,
    )


@lru_cache()
def get_auth_provider() -> "AuthProviderProtocol":
    """Get identity provider adapter singleton (app-scoped).

    One httpx.AsyncClient is shared so connections are pooled across actions.

    Returns:
        Identity provider implementing AuthProviderProtocol.
    """
    import httpx

    from staffdesk.infrastructure.auth.gotrue_adapter import GoTrueAuthAdapter

    settings = get_settings()
    http_client = httpx.AsyncClient(
        base_url=settings.auth_url,
        timeout=AUTH_PROVIDER_TIMEOUT,
    )
    return GoTrueAuthAdapter(
        http_client=http_client,
        api_key=settings.auth_api_key,
        logger=get_logger(),
    )


@lru_cache()
def get_path_revalidator() -> "PathRevalidatorProtocol":
    """Get path revalidator singleton (app-scoped).

    Returns:
        RedisPathRevalidator over a pooled Redis client.
    """
    from redis.asyncio import ConnectionPool, Redis

    from staffdesk.infrastructure.cache.redis_path_revalidator import (
        RedisPathRevalidator,
    )

    pool = ConnectionPool.from_url(
        get_settings().redis_url,
        max_connections=20,
        decode_responses=False,
        socket_connect_timeout=5,
        socket_timeout=5,
        retry_on_timeout=True,
    )
    return RedisPathRevalidator(Redis(connection_pool=pool))

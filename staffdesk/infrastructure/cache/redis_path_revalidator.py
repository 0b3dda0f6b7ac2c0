"""Redis adapter implementing PathRevalidatorProtocol.

Rendered pages are cached under ``page-cache:<path>``. Revalidating a path
deletes its cache entry so the next request re-renders it.

- ``page`` (default): delete exactly ``page-cache:<path>``
- ``layout``: delete ``page-cache:<path>`` and every key nested under it

Architecture:
- Implements PathRevalidatorProtocol without inheritance (structural typing)
- Maps Redis exceptions to CacheError
- Returns Result types for all operations
"""

import re

from redis.asyncio import Redis
from redis.exceptions import (
    ConnectionError as RedisConnectionError,
    RedisError,
    TimeoutError as RedisTimeoutError,
)

from staffdesk.core.constants import PAGE_CACHE_PREFIX
from staffdesk.core.result import Failure, Result, Success
from staffdesk.domain.protocols.path_revalidator_protocol import RevalidateType
from staffdesk.infrastructure.errors import CacheError, InfrastructureErrorCode

_GLOB_SPECIAL = re.compile(r"([*?\[\]\\])")

# Keys deleted per DEL command while scanning a layout
_DELETE_BATCH_SIZE = 500


class RedisPathRevalidator:
    """Redis implementation of PathRevalidatorProtocol.

    Attributes:
        _redis: Async Redis client instance.
    """

    def __init__(self, redis_client: Redis, *, prefix: str = PAGE_CACHE_PREFIX) -> None:
        self._redis = redis_client
        self._prefix = prefix

    def cache_key(self, path: str) -> str:
        """Cache key of a rendered path."""
        return f"{self._prefix}{path}"

    async def revalidate_path(
        self, path: str, type: RevalidateType | None = None
    ) -> Result[None, CacheError]:
        """Invalidate the cache entries for ``path``.

        Args:
            path: Rendered path (e.g. ``/clients``).
            type: ``page`` (default) or ``layout``.

        Returns:
            Success(None) or Failure(CacheError).
        """
        try:
            if type == "layout":
                await self._delete_matching(path)
            else:
                await self._redis.delete(self.cache_key(path))
            return Success(value=None)
        except RedisTimeoutError as e:
            return Failure(
                error=CacheError(
                    message=f"Timed out revalidating '{path}'",
                    infrastructure_code=InfrastructureErrorCode.CACHE_TIMEOUT,
                    details={"path": path, "type": type, "error": str(e)},
                )
            )
        except RedisConnectionError as e:
            return Failure(
                error=CacheError(
                    message=f"Cache unavailable while revalidating '{path}'",
                    infrastructure_code=InfrastructureErrorCode.CACHE_CONNECTION_ERROR,
                    details={"path": path, "type": type, "error": str(e)},
                )
            )
        except RedisError as e:
            return Failure(
                error=CacheError(
                    message=f"Failed to revalidate '{path}'",
                    infrastructure_code=InfrastructureErrorCode.CACHE_DELETE_ERROR,
                    details={"path": path, "type": type, "error": str(e)},
                )
            )

    async def aclose(self) -> None:
        """Close the Redis client and its connection pool."""
        await self._redis.aclose(close_connection_pool=True)

    async def _delete_matching(self, path: str) -> None:
        pattern = self.cache_key(_GLOB_SPECIAL.sub(r"\\\1", path)) + "*"
        batch: list[bytes | str] = []
        async for key in self._redis.scan_iter(match=pattern, count=_DELETE_BATCH_SIZE):
            batch.append(key)
            if len(batch) >= _DELETE_BATCH_SIZE:
                await self._redis.delete(*batch)
                batch.clear()
        if batch:
            await self._redis.delete(*batch)

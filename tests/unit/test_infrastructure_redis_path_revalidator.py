"""Unit tests for RedisPathRevalidator (Redis client mocked)."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from redis.exceptions import ConnectionError, ResponseError, TimeoutError

from staffdesk.core.result import Failure, Success
from staffdesk.infrastructure.cache import RedisPathRevalidator
from staffdesk.infrastructure.errors import CacheError, InfrastructureErrorCode


async def _scan(keys):
    for key in keys:
        yield key


@pytest.fixture
def redis_client() -> AsyncMock:
    return AsyncMock()


@pytest.fixture
def revalidator(redis_client) -> RedisPathRevalidator:
    return RedisPathRevalidator(redis_client)


@pytest.mark.unit
class TestRevalidatePage:
    async def test_deletes_exact_key(self, revalidator, redis_client):
        result = await revalidator.revalidate_path("/clients")

        assert result == Success(value=None)
        redis_client.delete.assert_awaited_once_with("page-cache:/clients")

    async def test_explicit_page_type(self, revalidator, redis_client):
        await revalidator.revalidate_path("/clients", "page")

        redis_client.delete.assert_awaited_once_with("page-cache:/clients")

    def test_custom_prefix(self, redis_client):
        assert RedisPathRevalidator(redis_client, prefix="x:").cache_key("/a") == "x:/a"


@pytest.mark.unit
class TestRevalidateLayout:
    async def test_deletes_every_nested_key(self, revalidator, redis_client):
        redis_client.scan_iter = MagicMock(
            return_value=_scan([b"page-cache:/clients", b"page-cache:/clients/1"])
        )

        result = await revalidator.revalidate_path("/clients", "layout")

        assert isinstance(result, Success)
        redis_client.scan_iter.assert_called_once_with(
            match="page-cache:/clients*", count=500
        )
        redis_client.delete.assert_awaited_once_with(
            b"page-cache:/clients", b"page-cache:/clients/1"
        )

    async def test_no_matching_keys(self, revalidator, redis_client):
        redis_client.scan_iter = MagicMock(return_value=_scan([]))

        result = await revalidator.revalidate_path("/", "layout")

        assert isinstance(result, Success)
        redis_client.delete.assert_not_awaited()

    async def test_glob_characters_are_escaped(self, revalidator, redis_client):
        redis_client.scan_iter = MagicMock(return_value=_scan([]))

        await revalidator.revalidate_path("/reports[2026]", "layout")

        pattern = redis_client.scan_iter.call_args.kwargs["match"]
        assert pattern == "page-cache:/reports\\[2026\\]*"


@pytest.mark.unit
class TestRevalidateErrors:
    @pytest.mark.parametrize(
        ("exception", "expected"),
        [
            (TimeoutError("timed out"), InfrastructureErrorCode.CACHE_TIMEOUT),
            (ConnectionError("refused"), InfrastructureErrorCode.CACHE_CONNECTION_ERROR),
            (ResponseError("WRONGTYPE"), InfrastructureErrorCode.CACHE_DELETE_ERROR),
        ],
    )
    async def test_redis_errors_become_failures(
        self, revalidator, redis_client, exception, expected
    ):
        redis_client.delete.side_effect = exception

        result = await revalidator.revalidate_path("/clients")

        assert isinstance(result, Failure)
        assert isinstance(result.error, CacheError)
        assert result.error.infrastructure_code is expected
        assert result.error.details["path"] == "/clients"


@pytest.mark.unit
class TestClose:
    async def test_closes_client_and_pool(self, revalidator, redis_client):
        await revalidator.aclose()

        redis_client.aclose.assert_awaited_once_with(close_connection_pool=True)

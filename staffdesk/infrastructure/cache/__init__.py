"""Cache adapters."""

from staffdesk.infrastructure.cache.redis_path_revalidator import RedisPathRevalidator

__all__ = ["RedisPathRevalidator"]

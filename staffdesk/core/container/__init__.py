"""Container module - Centralized dependency injection.

    from staffdesk.core.container import get_database, get_logger, ...

All factories are ``lru_cache``d: each service is built once per process on
first use and shared read-only afterwards. Tests reset them with
``factory.cache_clear()``.
"""

from staffdesk.core.config import get_settings
from staffdesk.core.container.infrastructure import (
    get_auth_provider,
    get_database,
    get_logger,
    get_path_revalidator,
)

__all__ = [
    "get_auth_provider",
    "get_database",
    "get_logger",
    "get_path_revalidator",
    "get_settings",
]

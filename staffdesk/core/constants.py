"""Centralized constants for internal implementation details.

This module contains constants that are internal implementation details,
NOT environment-specific configuration. For environment-specific settings,
use `staffdesk/core/config.py` instead.

Example:
    >>> from staffdesk.core.constants import DEFAULT_PAGE_SIZE, BEARER_PREFIX
    >>> header = f"{BEARER_PREFIX}{access_token}"
"""

# =============================================================================
# Pagination
# =============================================================================

DEFAULT_PAGE_SIZE: int = 20
"""Page size used by list actions when the caller gives none."""

MAX_PAGE_SIZE: int = 100
"""Largest page size accepted by list inputs."""


# =============================================================================
# Protocol Prefixes
# =============================================================================

BEARER_PREFIX: str = "Bearer "
"""Authorization header prefix for bearer tokens."""


# =============================================================================
# Timeouts
# =============================================================================

AUTH_PROVIDER_TIMEOUT: float = 10.0
"""Timeout in seconds for identity provider HTTP calls."""


# =============================================================================
# Cache Keys
# =============================================================================

PAGE_CACHE_PREFIX: str = "page-cache:"
"""Redis key prefix for cached rendered pages."""


# =============================================================================
# Input Limits
# =============================================================================

PASSWORD_MIN_LENGTH: int = 8
"""Minimum password length accepted before calling the identity provider."""

NAME_MAX_LENGTH: int = 100
"""Maximum length of person and organization names."""

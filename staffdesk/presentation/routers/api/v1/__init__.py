"""API v1 routers.

Resources:
    /api/v1/clients  - Client management
    /api/v1/auth     - Sign-in, sign-up, password and profile
"""

from fastapi import APIRouter

from staffdesk.core.config import get_settings
from staffdesk.presentation.routers.api.v1 import auth, clients


def create_v1_router() -> APIRouter:
    """Build the v1 router under the configured prefix (``/api/v1``)."""
    router = APIRouter(prefix=get_settings().api_v1_prefix)
    router.include_router(clients.router)
    router.include_router(auth.router)
    return router


__all__ = ["create_v1_router"]

"""Request middleware and dependencies."""

from staffdesk.presentation.routers.api.middleware.auth_dependencies import (
    AccessToken,
    get_access_token,
)
from staffdesk.presentation.routers.api.middleware.trace_middleware import (
    TraceMiddleware,
    get_trace_id,
)

__all__ = ["AccessToken", "TraceMiddleware", "get_access_token", "get_trace_id"]

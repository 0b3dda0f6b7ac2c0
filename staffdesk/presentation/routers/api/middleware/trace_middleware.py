"""Trace middleware to inject a trace_id per request.

- Adds X-Trace-Id response header
- Binds trace_id into structlog context vars so every log line of the request carries it
- Exposes get_trace_id() for problem-details responses
"""

from __future__ import annotations

from contextvars import ContextVar
from typing import Awaitable, Callable
from uuid import uuid4

import structlog
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

trace_id_context: ContextVar[str | None] = ContextVar("trace_id", default=None)


def get_trace_id() -> str | None:
    """Return the current trace ID, or None outside a request."""
    return trace_id_context.get()


class TraceMiddleware(BaseHTTPMiddleware):
    """Starlette middleware that injects a trace ID into each request context."""

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        trace_id = request.headers.get("X-Trace-Id") or str(uuid4())
        token = trace_id_context.set(trace_id)
        structlog.contextvars.bind_contextvars(trace_id=trace_id)
        try:
            response = await call_next(request)
            response.headers["X-Trace-Id"] = trace_id
            return response
        finally:
            structlog.contextvars.unbind_contextvars("trace_id")
            trace_id_context.reset(token)

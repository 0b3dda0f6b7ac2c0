"""Request-scoped backend client."""

from staffdesk.infrastructure.backend.client import BackendClient, backend_client_scope

__all__ = ["BackendClient", "backend_client_scope"]

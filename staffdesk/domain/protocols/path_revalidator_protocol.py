"""Path revalidation port.

After a successful mutation, actions mark rendered paths stale so the next
read reflects fresh data. Revalidation is fire-and-forget from the action's
point of view: a failure is logged, never returned to the caller.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Literal, Protocol

if TYPE_CHECKING:
    from staffdesk.core.result import Result
    from staffdesk.infrastructure.errors import CacheError

type RevalidateType = Literal["page", "layout"]


class PathRevalidatorProtocol(Protocol):
    """Marks cached rendered paths as stale."""

    async def revalidate_path(
        self, path: str, type: RevalidateType | None = None
    ) -> Result[None, CacheError]:
        """Invalidate ``path``.

        Args:
            path: Rendered path (e.g. ``/clients``).
            type: ``page`` (default) invalidates exactly that path;
                ``layout`` also invalidates every path nested under it.

        Returns:
            Success(None) or Failure(CacheError).
        """
        ...

    async def aclose(self) -> None:
        """Release connections held by the cache client."""
        ...

"""Pagination metadata for list actions.

Pure functions: ``page`` and ``page_size`` are trusted as positive integers
already validated by the input schema.

Usage:
    rows, total = await client.fetch_page(stmt, page=3, page_size=20)
    result = paginate_result(rows, total, page=3, page_size=20)
    result.pagination.total_pages  # 5 for 95 rows
"""

import math
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True, slots=True, kw_only=True)
class PaginationMeta:
    """Page metadata returned alongside a page of rows.

    Attributes:
        page: 1-based page number.
        page_size: Rows per page.
        total_items: Total rows matching the filters.
        total_pages: ``ceil(total_items / page_size)``, 0 when empty.
        has_next_page: ``page < total_pages``.
        has_previous_page: ``page > 1``.
    """

    page: int
    page_size: int
    total_items: int
    total_pages: int
    has_next_page: bool
    has_previous_page: bool

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a plain dict."""
        return {
            "page": self.page,
            "page_size": self.page_size,
            "total_items": self.total_items,
            "total_pages": self.total_pages,
            "has_next_page": self.has_next_page,
            "has_previous_page": self.has_previous_page,
        }


@dataclass(frozen=True, slots=True, kw_only=True)
class PaginatedResult(Generic[T]):
    """One page of rows plus its metadata."""

    data: list[T] = field(default_factory=list)
    pagination: PaginationMeta


def calculate_offset(page: int, page_size: int) -> int:
    """Row offset of the first row of ``page`` (pages below 1 count as 1)."""
    return (max(page, 1) - 1) * page_size


def calculate_total_pages(total_items: int, page_size: int) -> int:
    """Number of pages needed for ``total_items`` rows."""
    if total_items <= 0 or page_size <= 0:
        return 0
    return math.ceil(total_items / page_size)


def create_pagination_meta(page: int, page_size: int, total_items: int) -> PaginationMeta:
    """Build PaginationMeta for a page.

    Args:
        page: 1-based page number.
        page_size: Rows per page.
        total_items: Total rows matching the filters.

    Returns:
        PaginationMeta.

    Example:
        >>> create_pagination_meta(3, 20, 95).total_pages
        5
    """
    total_pages = calculate_total_pages(total_items, page_size)
    return PaginationMeta(
        page=page,
        page_size=page_size,
        total_items=total_items,
        total_pages=total_pages,
        has_next_page=page < total_pages,
        has_previous_page=page > 1,
    )


def paginate_result(
    rows: list[T],
    total_count: int,
    page: int,
    page_size: int,
) -> PaginatedResult[T]:
    """Combine a page of rows with its metadata.

    Args:
        rows: Rows of the requested page.
        total_count: Total rows matching the filters (from the count query).
        page: 1-based page number.
        page_size: Rows per page.

    Returns:
        PaginatedResult with ``data`` and ``pagination``.
    """
    return PaginatedResult(
        data=list(rows),
        pagination=create_pagination_meta(page, page_size, total_count),
    )

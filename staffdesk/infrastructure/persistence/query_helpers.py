"""Composable filters for list queries.

Each helper takes a SQLAlchemy ``Select`` and returns a new one, so they
chain the same way the statement builder does. Columns may be passed by
name (resolved against the statement) or as column expressions.

Usage:
    stmt = select(ClientModel).where(ClientModel.organization_id == org_id)
    stmt = apply_list_filters(
        stmt,
        ListFilterConfig(
            search="acme",
            search_columns=CLIENT_SEARCHABLE_COLUMNS,
            sort_by="name",
        ),
    )
    rows, total = await client.fetch_page(stmt, page=1, page_size=20)
"""

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, Literal

from sqlalchemy import ColumnElement, Select, column as sql_column, or_

from staffdesk.core.pagination import calculate_offset

type SortOrder = Literal["asc", "desc"]
type SearchMode = Literal["ilike", "like"]
type ColumnRef = str | ColumnElement[Any]


@dataclass(frozen=True, slots=True, kw_only=True)
class ListFilterConfig:
    """How a list query should be shaped.

    Attributes:
        search: Free-text term (blank means no search).
        search_columns: Columns matched by ``search``.
        include_deleted: Keep soft-deleted rows.
        sort_by: Sort column, or None to leave ordering alone.
        sort_order: ``asc`` or ``desc``.
        deleted_column: Soft-delete marker column.
    """

    search: str | None = None
    search_columns: Sequence[ColumnRef] = ()
    include_deleted: bool = False
    sort_by: ColumnRef | None = None
    sort_order: SortOrder = "asc"
    deleted_column: ColumnRef = "deleted_at"


def resolve_column(stmt: Select[Any], column: ColumnRef) -> ColumnElement[Any]:
    """Resolve a column name against ``stmt``.

    Looks at the selected columns first, then at the columns of the
    statement's FROM clauses. Expressions are returned unchanged.

    Raises:
        ValueError: If no column with that name exists.
    """
    if not isinstance(column, str):
        return column

    selected = stmt.selected_columns
    if column in selected:
        return selected[column]

    for from_clause in stmt.get_final_froms():
        columns = getattr(from_clause, "c", None)
        if columns is not None and column in columns:
            return columns[column]

    raise ValueError(f"Unknown column {column!r} for this query")


def build_search_filter(
    term: str | None,
    columns: Sequence[ColumnRef],
    mode: SearchMode = "ilike",
    *,
    stmt: Select[Any] | None = None,
) -> ColumnElement[bool] | None:
    """Build an OR of substring matches of ``term`` across ``columns``.

    LIKE wildcards in ``term`` are escaped, so ``50%`` matches literally.

    Args:
        term: Search term; None or blank means no filter.
        columns: Columns to search.
        mode: ``ilike`` (case-insensitive) or ``like`` (case-sensitive).
        stmt: Statement column names are resolved against. Without it,
            names become bare column references.

    Returns:
        Filter expression, or None when there is nothing to filter on.

    Example:
        >>> build_search_filter("  john ", ["name", "email"])
        # lower(name) LIKE '%' || lower('john') || '%' OR lower(email) ...
    """
    if term is None:
        return None
    term = term.strip()
    if not term or not columns:
        return None

    if stmt is not None:
        resolved = [resolve_column(stmt, column) for column in columns]
    else:
        resolved = [
            sql_column(column) if isinstance(column, str) else column
            for column in columns
        ]
    if mode == "like":
        clauses = [column.contains(term, autoescape=True) for column in resolved]
    else:
        clauses = [column.icontains(term, autoescape=True) for column in resolved]
    return or_(*clauses)


def apply_soft_delete_filter(
    stmt: Select[Any],
    include_deleted: bool,
    column: ColumnRef = "deleted_at",
) -> Select[Any]:
    """Hide soft-deleted rows unless ``include_deleted``."""
    if include_deleted:
        return stmt
    return stmt.where(resolve_column(stmt, column).is_(None))


def apply_search_filter(
    stmt: Select[Any],
    expression: ColumnElement[bool] | None,
) -> Select[Any]:
    """Apply a filter from ``build_search_filter`` (no-op for None)."""
    if expression is None:
        return stmt
    return stmt.where(expression)


def apply_sort_filter(
    stmt: Select[Any],
    column: ColumnRef,
    order: SortOrder = "asc",
) -> Select[Any]:
    """Order by ``column`` ascending or descending."""
    resolved = resolve_column(stmt, column)
    return stmt.order_by(resolved.desc() if order == "desc" else resolved.asc())


def apply_pagination(stmt: Select[Any], page: int, page_size: int) -> Select[Any]:
    """Restrict ``stmt`` to one page (1-based ``page``)."""
    return stmt.offset(calculate_offset(page, page_size)).limit(page_size)


def apply_list_filters(stmt: Select[Any], config: ListFilterConfig) -> Select[Any]:
    """Apply soft-delete, then search, then sort.

    Search only scans visible rows and ordering is always the last clause.
    """
    stmt = apply_soft_delete_filter(stmt, config.include_deleted, config.deleted_column)
    stmt = apply_search_filter(
        stmt, build_search_filter(config.search, config.search_columns, stmt=stmt)
    )
    if config.sort_by is not None:
        stmt = apply_sort_filter(stmt, config.sort_by, config.sort_order)
    return stmt

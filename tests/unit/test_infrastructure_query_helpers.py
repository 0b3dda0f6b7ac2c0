"""Unit tests for list-query helpers (compiled SQL, no database)."""

import pytest
from sqlalchemy import select
from sqlalchemy.dialects import sqlite

from staffdesk.infrastructure.persistence.models import ClientModel
from staffdesk.infrastructure.persistence.models.client import (
    CLIENT_SEARCHABLE_COLUMNS,
)
from staffdesk.infrastructure.persistence.query_helpers import (
    ListFilterConfig,
    apply_list_filters,
    apply_pagination,
    apply_search_filter,
    apply_soft_delete_filter,
    apply_sort_filter,
    build_search_filter,
    resolve_column,
)


def _sql(stmt) -> str:
    return str(
        stmt.compile(dialect=sqlite.dialect(), compile_kwargs={"literal_binds": True})
    )


@pytest.fixture
def stmt():
    return select(ClientModel)


@pytest.mark.unit
class TestResolveColumn:
    def test_resolves_name(self, stmt):
        resolved = resolve_column(stmt, "name")

        assert resolved.name == "name"
        assert str(resolved) == "clients.name"

    def test_expression_passes_through(self, stmt):
        expression = ClientModel.email
        assert resolve_column(stmt, expression) is expression

    def test_unknown_name_raises(self, stmt):
        with pytest.raises(ValueError, match="Unknown column 'nickname'"):
            resolve_column(stmt, "nickname")


@pytest.mark.unit
class TestBuildSearchFilter:
    @pytest.mark.parametrize("term", [None, "", "   "])
    def test_blank_term_is_no_filter(self, term):
        assert build_search_filter(term, ["name", "email"]) is None

    def test_no_columns_is_no_filter(self):
        assert build_search_filter("acme", []) is None

    def test_ors_every_column(self, stmt):
        expression = build_search_filter("acme", CLIENT_SEARCHABLE_COLUMNS, stmt=stmt)

        sql = _sql(stmt.where(expression))
        assert sql.count(" LIKE ") == 4
        assert sql.count(" OR ") == 3
        assert "lower(clients.name)" in sql

    def test_term_is_trimmed(self, stmt):
        expression = build_search_filter("  acme  ", ["name"], stmt=stmt)

        assert "lower('acme')" in _sql(stmt.where(expression))

    def test_wildcards_are_escaped(self, stmt):
        expression = build_search_filter("50%_off", ["name"], stmt=stmt)

        sql = _sql(stmt.where(expression))
        assert "50/%/_off" in sql
        assert "ESCAPE '/'" in sql

    def test_like_mode_is_case_sensitive(self, stmt):
        expression = build_search_filter("Acme", ["name"], mode="like", stmt=stmt)

        sql = _sql(stmt.where(expression))
        assert "lower(" not in sql
        assert "clients.name LIKE" in sql

    def test_names_without_statement_become_bare_columns(self):
        expression = build_search_filter("acme", ["name"])

        assert "lower(name)" in str(expression.compile(dialect=sqlite.dialect()))


@pytest.mark.unit
class TestApplyFilters:
    def test_soft_delete_filter_hides_deleted(self, stmt):
        assert "clients.deleted_at IS NULL" in _sql(apply_soft_delete_filter(stmt, False))

    def test_soft_delete_filter_include_deleted(self, stmt):
        assert "deleted_at IS NULL" not in _sql(apply_soft_delete_filter(stmt, True))

    def test_search_filter_none_is_noop(self, stmt):
        assert apply_search_filter(stmt, None) is stmt

    @pytest.mark.parametrize(("order", "expected"), [("asc", "ASC"), ("desc", "DESC")])
    def test_sort(self, stmt, order, expected):
        assert f"ORDER BY clients.name {expected}" in _sql(apply_sort_filter(stmt, "name", order))

    def test_pagination(self, stmt):
        sql = _sql(apply_pagination(stmt, 3, 20))

        assert "LIMIT 20 OFFSET 40" in sql

    def test_list_filters_compose_in_order(self, stmt):
        sql = _sql(
            apply_list_filters(
                stmt,
                ListFilterConfig(
                    search="acme",
                    search_columns=("name", "email"),
                    sort_by="created_at",
                    sort_order="desc",
                ),
            )
        )

        where = sql.index("WHERE")
        assert sql.index("deleted_at IS NULL") > where
        assert sql.index("LIKE") > sql.index("deleted_at IS NULL")
        assert sql.rstrip().endswith("ORDER BY clients.created_at DESC")

    def test_list_filters_without_sort_leave_order_alone(self, stmt):
        sql = _sql(apply_list_filters(stmt, ListFilterConfig()))

        assert "ORDER BY" not in sql
        assert "deleted_at IS NULL" in sql

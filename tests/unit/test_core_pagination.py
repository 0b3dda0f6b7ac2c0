"""Unit tests for pagination metadata."""

import pytest

from staffdesk.core.pagination import (
    PaginationMeta,
    calculate_offset,
    calculate_total_pages,
    create_pagination_meta,
    paginate_result,
)


@pytest.mark.unit
class TestCalculateOffset:
    @pytest.mark.parametrize(
        ("page", "page_size", "expected"),
        [(1, 20, 0), (2, 20, 20), (3, 20, 40), (5, 7, 28)],
    )
    def test_offset(self, page, page_size, expected):
        assert calculate_offset(page, page_size) == expected

    def test_pages_below_one_count_as_first_page(self):
        assert calculate_offset(0, 20) == 0
        assert calculate_offset(-3, 20) == 0


@pytest.mark.unit
class TestCalculateTotalPages:
    def test_rounds_up(self):
        assert calculate_total_pages(95, 20) == 5
        assert calculate_total_pages(100, 20) == 5
        assert calculate_total_pages(101, 20) == 6

    def test_empty(self):
        assert calculate_total_pages(0, 20) == 0


@pytest.mark.unit
class TestPaginateResult:
    def test_middle_page(self):
        rows = list(range(41, 61))

        result = paginate_result(rows, 95, 3, 20)

        assert result.data == rows
        assert result.pagination == PaginationMeta(
            page=3,
            page_size=20,
            total_items=95,
            total_pages=5,
            has_next_page=True,
            has_previous_page=True,
        )

    def test_first_page(self):
        meta = create_pagination_meta(1, 20, 95)

        assert meta.has_previous_page is False
        assert meta.has_next_page is True

    def test_last_page(self):
        meta = create_pagination_meta(5, 20, 95)

        assert meta.has_next_page is False
        assert meta.has_previous_page is True

    def test_no_rows(self):
        result = paginate_result([], 0, 1, 20)

        assert result.data == []
        assert result.pagination.total_pages == 0
        assert result.pagination.has_next_page is False
        assert result.pagination.has_previous_page is False

    def test_page_past_the_end(self):
        meta = create_pagination_meta(9, 20, 95)

        assert meta.has_next_page is False
        assert meta.has_previous_page is True

    def test_to_dict(self):
        meta = create_pagination_meta(2, 10, 15)

        assert meta.to_dict() == {
            "page": 2,
            "page_size": 10,
            "total_items": 15,
            "total_pages": 2,
            "has_next_page": False,
            "has_previous_page": True,
        }

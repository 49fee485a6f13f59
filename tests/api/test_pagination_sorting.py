# This file tests the pagination and sort helpers shared by the router and repository.
# It covers default page size, offset arithmetic, and rejection of out-of-range input.

from __future__ import annotations

import pytest

from src.api.pagination import InvalidPaginationError, normalize_pagination, parse_sort


def test_normalize_pagination_computes_offset() -> None:
    pagination = normalize_pagination(page=3, page_size=2, default_page_size=10, max_page_size=100)

    assert pagination.page == 3
    assert pagination.limit == 2
    assert pagination.offset == 4


def test_zero_page_size_uses_default() -> None:
    pagination = normalize_pagination(page=1, page_size=0, default_page_size=10, max_page_size=100)

    assert pagination.limit == 10
    assert pagination.offset == 0


@pytest.mark.parametrize("page", [0, -1, -50])
def test_page_below_one_is_rejected(page: int) -> None:
    with pytest.raises(InvalidPaginationError, match="page must be >= 1"):
        normalize_pagination(page=page, page_size=5, default_page_size=10, max_page_size=100)


def test_negative_page_size_is_rejected() -> None:
    with pytest.raises(InvalidPaginationError, match="page_size"):
        normalize_pagination(page=1, page_size=-5, default_page_size=10, max_page_size=100)


def test_page_size_above_maximum_is_rejected() -> None:
    with pytest.raises(InvalidPaginationError, match="page_size must be <= 100"):
        normalize_pagination(page=1, page_size=101, default_page_size=10, max_page_size=100)


def test_page_with_offset_beyond_bigint_is_rejected() -> None:
    with pytest.raises(InvalidPaginationError, match="page is too large"):
        normalize_pagination(page=10**20, page_size=10, default_page_size=10, max_page_size=100)

    largest = normalize_pagination(page=2**62, page_size=1, default_page_size=10, max_page_size=100)
    assert largest.offset == 2**62 - 1


def test_parse_sort_defaults_and_validation() -> None:
    default_sort = parse_sort(field=None, order=None, default_field="id", allowed_fields={"id", "title"})
    title_desc = parse_sort(field="Title", order="DESC", default_field="id", allowed_fields={"id", "title"})

    assert default_sort.as_text == "id:asc"
    assert title_desc.as_text == "title:desc"

    with pytest.raises(InvalidPaginationError, match="Unsupported sort field"):
        parse_sort(field="currency", order="asc", default_field="id", allowed_fields={"id", "title"})

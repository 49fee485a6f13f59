# This file handles pagination and sort parsing for the book list endpoint.
# It exists so the router and the repository apply the same page-window and ordering rules.
# The helpers validate caller input and produce stable offset/limit behavior.

from __future__ import annotations

from dataclasses import dataclass

MAX_SQL_OFFSET = 2**63 - 1


class InvalidPaginationError(ValueError):
    """Raised when page, page_size, or sort input cannot be honored."""


@dataclass(frozen=True)
class SortSpec:
    field: str
    order: str

    @property
    def as_text(self) -> str:
        return f"{self.field}:{self.order}"


@dataclass(frozen=True)
class PaginationSpec:
    page: int
    page_size: int

    @property
    def limit(self) -> int:
        return self.page_size

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.page_size


def normalize_pagination(
    *,
    page: int,
    page_size: int,
    default_page_size: int,
    max_page_size: int,
) -> PaginationSpec:
    """Validate page/page_size; a page_size of 0 selects the default."""

    resolved_page_size = page_size or default_page_size
    if page < 1:
        raise InvalidPaginationError("page must be >= 1")
    if resolved_page_size < 1:
        raise InvalidPaginationError("page_size must be >= 0")
    if resolved_page_size > max_page_size:
        raise InvalidPaginationError(f"page_size must be <= {max_page_size}")
    if (page - 1) * resolved_page_size > MAX_SQL_OFFSET:
        raise InvalidPaginationError("page is too large")
    return PaginationSpec(page=page, page_size=resolved_page_size)


def parse_sort(
    *,
    field: str | None,
    order: str | None,
    default_field: str,
    allowed_fields: set[str],
) -> SortSpec:
    """Validate a sort field/order pair, falling back to `default_field` ascending."""

    resolved_field = (field or default_field).strip().lower()
    resolved_order = (order or "asc").strip().lower()

    if resolved_field not in allowed_fields:
        supported = ", ".join(sorted(allowed_fields))
        raise InvalidPaginationError(
            f"Unsupported sort field '{resolved_field}'. Supported fields: {supported}"
        )
    if resolved_order not in {"asc", "desc"}:
        raise InvalidPaginationError("sort order must be 'asc' or 'desc'")
    return SortSpec(field=resolved_field, order=resolved_order)

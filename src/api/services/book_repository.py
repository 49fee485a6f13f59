# This file implements persistence for books: list, get, create, update, and delete.
# It exists so routers can serve book requests without embedding SQL directly.
# Every statement binds caller values as parameters; only the validated table name and
# allowlisted sort columns are placed into the SQL text.
# Storage errors are never caught here; zero matched rows become BookNotFoundError.

from __future__ import annotations

import logging
from typing import Any

from src.api.db_access import DatabaseClient
from src.api.pagination import SortSpec, normalize_pagination, parse_sort
from src.api.schemas.book_schemas import Book, BookPayload, PaginationRequest

logger = logging.getLogger(__name__)

BOOK_SORT_FIELD_MAP: dict[str, str] = {
    "id": "b.id",
    "title": "b.title",
    "author": "b.author",
    "isbn": "b.isbn",
}

DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100


class BookNotFoundError(LookupError):
    """No book row matched the requested id."""

    def __init__(self, book_id: int) -> None:
        self.book_id = book_id
        super().__init__(f"book {book_id} not found")


def _escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class BookRepository:
    """SQL access for the books table."""

    def __init__(
        self,
        *,
        db: DatabaseClient,
        table_name: str = "books",
        default_page_size: int = DEFAULT_PAGE_SIZE,
        max_page_size: int = MAX_PAGE_SIZE,
        health_check_timeout_seconds: int | None = None,
    ) -> None:
        self.db = db
        self.table = table_name
        self.default_page_size = default_page_size
        self.max_page_size = max_page_size
        self.health_check_timeout_seconds = health_check_timeout_seconds

    def list_all(self, request: PaginationRequest) -> tuple[list[Book], int, int]:
        """Return (page of books, rows in this page, total matching rows).

        The COUNT and the page SELECT are separate statements, so under concurrent
        writes the total may not agree with the page contents.
        """

        pagination = normalize_pagination(
            page=request.page,
            page_size=request.page_size,
            default_page_size=self.default_page_size,
            max_page_size=self.max_page_size,
        )
        sort = parse_sort(
            field=request.sort.field if request.sort else None,
            order=request.sort.order if request.sort else None,
            default_field="id",
            allowed_fields=set(BOOK_SORT_FIELD_MAP),
        )

        where_clauses: list[str] = ["1 = 1"]
        params: dict[str, Any] = {}

        if request.search:
            where_clauses.append(
                "(LOWER(b.title) LIKE :search ESCAPE '\\' OR LOWER(b.author) LIKE :search ESCAPE '\\')"
            )
            params["search"] = f"%{_escape_like(request.search.lower())}%"

        where_sql = " AND ".join(where_clauses)
        order_sql = self._order_by_clause(sort)

        logger.debug(
            "list_all starts page=%s page_size=%s search=%r sort=%s",
            pagination.page,
            pagination.page_size,
            request.search,
            sort.as_text,
        )

        count_query = f"""
        SELECT COUNT(*) AS total_count
        FROM {self.table} b
        WHERE {where_sql}
        """
        total_count = int(self.db.fetch_scalar(count_query, params))

        data_query = f"""
        SELECT
            b.id,
            b.title,
            b.author,
            b.isbn
        FROM {self.table} b
        WHERE {where_sql}
        ORDER BY {order_sql}, b.id ASC
        LIMIT :limit OFFSET :offset
        """
        page_params = dict(params)
        page_params["limit"] = pagination.limit
        page_params["offset"] = pagination.offset

        rows = self.db.fetch_all(data_query, page_params)
        books = [Book.model_validate(row) for row in rows]
        return books, len(books), total_count

    def get_by_id(self, book_id: int) -> Book:
        logger.debug("get_by_id starts id=%s", book_id)
        query = f"""
        SELECT id, title, author, isbn
        FROM {self.table}
        WHERE id = :book_id
        """
        row = self.db.fetch_one(query, {"book_id": book_id})
        if row is None:
            logger.info("Book with id=%s not found", book_id)
            raise BookNotFoundError(book_id)
        return Book.model_validate(row)

    def create(self, payload: BookPayload) -> Book:
        logger.debug("create starts title=%r", payload.title)
        query = f"""
        INSERT INTO {self.table} (title, author, isbn)
        VALUES (:title, :author, :isbn)
        RETURNING id
        """
        new_id = self.db.execute_returning(
            query,
            {"title": payload.title, "author": payload.author, "isbn": payload.isbn},
        )
        logger.info("Created book id=%s", new_id)
        return Book(id=int(new_id), title=payload.title, author=payload.author, isbn=payload.isbn)

    def update(self, book_id: int, payload: BookPayload) -> Book:
        """Overwrite every column of the row; the path id wins over any id in the payload."""

        logger.debug("update starts id=%s", book_id)
        query = f"""
        UPDATE {self.table}
        SET title = :title, author = :author, isbn = :isbn
        WHERE id = :book_id
        """
        affected = self.db.execute(
            query,
            {
                "title": payload.title,
                "author": payload.author,
                "isbn": payload.isbn,
                "book_id": book_id,
            },
        )
        if affected == 0:
            logger.info("No book found to update with id=%s", book_id)
            raise BookNotFoundError(book_id)
        return Book(id=book_id, title=payload.title, author=payload.author, isbn=payload.isbn)

    def delete(self, book_id: int) -> None:
        logger.debug("delete starts id=%s", book_id)
        query = f"DELETE FROM {self.table} WHERE id = :book_id"
        affected = self.db.execute(query, {"book_id": book_id})
        if affected == 0:
            logger.info("No book found to delete with id=%s", book_id)
            raise BookNotFoundError(book_id)

    def ping(self) -> bool:
        return self.db.can_connect(timeout_seconds=self.health_check_timeout_seconds)

    @staticmethod
    def _order_by_clause(sort: SortSpec) -> str:
        return f"{BOOK_SORT_FIELD_MAP[sort.field]} {sort.order.upper()}"

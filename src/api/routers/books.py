# This file defines the book CRUD endpoints under the versioned API path.
# Each route is a thin adapter: FastAPI decodes the path and body, the repository runs the SQL,
# and domain or storage failures are mapped to APIError here and nowhere else.

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Body, Depends, Path, Response, status
from sqlalchemy.exc import SQLAlchemyError

from src.api.dependencies import get_book_repository
from src.api.error_handlers import APIError, storage_error
from src.api.pagination import InvalidPaginationError
from src.api.schemas.book_schemas import Book, BookPayload, PaginationRequest, PaginationResponse
from src.api.schemas.common import ErrorResponse
from src.api.services.book_repository import BookNotFoundError, BookRepository

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/books", tags=["books"])
BookRepositoryDep = Annotated[BookRepository, Depends(get_book_repository)]
MAX_BOOK_ID = 2**31 - 1
BookIdPath = Annotated[int, Path(description="Book ID", ge=1, le=MAX_BOOK_ID)]

ERROR_RESPONSES: dict[int | str, dict[str, object]] = {
    400: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


def _not_found(book_id: int) -> APIError:
    return APIError(
        status_code=404,
        error_code="BOOK_NOT_FOUND",
        message=f"Book {book_id} was not found.",
        details={"id": book_id},
    )


@router.post("/list", response_model=PaginationResponse, responses=ERROR_RESPONSES)
def list_books(
    repository: BookRepositoryDep,
    request_body: Annotated[PaginationRequest, Body()],
) -> dict[str, object]:
    """Get a paginated, optionally filtered list of books."""

    try:
        books, page_count, total_count = repository.list_all(request_body)
    except InvalidPaginationError as exc:
        raise APIError(
            status_code=400,
            error_code="INVALID_PAGINATION",
            message=str(exc),
        ) from exc
    except SQLAlchemyError as exc:
        logger.exception("failed to list books page=%s search=%r", request_body.page, request_body.search)
        raise storage_error("list_books") from exc

    return {"total_count": total_count, "page_count": page_count, "data": books}


@router.get("/{book_id}", response_model=Book, responses=ERROR_RESPONSES)
def get_book(book_id: BookIdPath, repository: BookRepositoryDep) -> Book:
    try:
        return repository.get_by_id(book_id)
    except BookNotFoundError as exc:
        raise _not_found(book_id) from exc
    except SQLAlchemyError as exc:
        logger.exception("error retrieving book id=%s", book_id)
        raise storage_error("get_book") from exc


@router.post(
    "/create",
    response_model=Book,
    status_code=status.HTTP_201_CREATED,
    responses=ERROR_RESPONSES,
)
def create_book(payload: Annotated[BookPayload, Body()], repository: BookRepositoryDep) -> Book:
    """Add a book to the library. Any `id` in the body is ignored."""

    try:
        return repository.create(payload)
    except SQLAlchemyError as exc:
        logger.exception("create failed title=%r", payload.title)
        raise storage_error("create_book") from exc


@router.put("/{book_id}", response_model=Book, responses=ERROR_RESPONSES)
def update_book(
    book_id: BookIdPath,
    payload: Annotated[BookPayload, Body()],
    repository: BookRepositoryDep,
) -> Book:
    """Replace all fields of a book; the id in the path wins over any id in the body."""

    try:
        return repository.update(book_id, payload)
    except BookNotFoundError as exc:
        raise _not_found(book_id) from exc
    except SQLAlchemyError as exc:
        logger.exception("update failed id=%s", book_id)
        raise storage_error("update_book") from exc


@router.delete(
    "/{book_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses=ERROR_RESPONSES,
)
def delete_book(book_id: BookIdPath, repository: BookRepositoryDep) -> Response:
    try:
        repository.delete(book_id)
    except BookNotFoundError as exc:
        raise _not_found(book_id) from exc
    except SQLAlchemyError as exc:
        logger.exception("delete failed id=%s", book_id)
        raise storage_error("delete_book") from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)

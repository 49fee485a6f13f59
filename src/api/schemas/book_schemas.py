# This file defines request and response schemas for the book endpoints.
# Field names here are the wire contract shared with API clients.
# Payload fields default to empty strings, so an update body that omits a field clears it.

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class Book(BaseModel):
    id: int = Field(examples=[1])
    title: str = Field(examples=["The Great Gatsby"])
    author: str = Field(examples=["F. Scott Fitzgerald"])
    isbn: str = Field(examples=["9780743273565"])


class BookPayload(BaseModel):
    """Create/update body. Unknown keys, including any `id` sent by the caller, are ignored."""

    model_config = ConfigDict(extra="ignore")

    title: str = ""
    author: str = ""
    isbn: str = ""


class SortRequest(BaseModel):
    field: str = "id"
    order: Literal["asc", "desc"] = "asc"


class PaginationRequest(BaseModel):
    page: int = 1
    page_size: int = 0
    search: str = ""
    sort: SortRequest | None = None


class PaginationResponse(BaseModel):
    total_count: int
    page_count: int
    data: list[Book]

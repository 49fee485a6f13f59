# This file provides dependency factories for FastAPI routes and the startup hook.
# It exists so the engine and repository are created once and shared through dependency injection.
# Tests swap these providers through `app.dependency_overrides`.

from __future__ import annotations

from functools import lru_cache

from src.api.api_config import ApiConfig, get_api_config
from src.api.db_access import DatabaseClient
from src.api.services.book_repository import BookRepository
from src.common.db import build_engine


@lru_cache(maxsize=1)
def get_database_client() -> DatabaseClient:
    config = get_api_config()
    engine = build_engine(
        config.database_url,
        connect_timeout_seconds=config.connect_timeout_seconds,
        statement_timeout_seconds=config.request_timeout_seconds,
    )
    return DatabaseClient(engine=engine)


@lru_cache(maxsize=1)
def get_book_repository() -> BookRepository:
    config = get_api_config()
    return build_book_repository(config=config, db=get_database_client())


def build_book_repository(*, config: ApiConfig, db: DatabaseClient) -> BookRepository:
    return BookRepository(
        db=db,
        table_name=config.books_table_name,
        default_page_size=config.default_page_size,
        max_page_size=config.max_page_size,
        health_check_timeout_seconds=config.health_check_timeout_seconds,
    )


def get_config() -> ApiConfig:
    return get_api_config()

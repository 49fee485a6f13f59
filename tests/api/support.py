# This file provides shared helpers for API endpoint tests.
# It exists so tests can override the repository and database dependencies without a real Postgres.
# The helpers build consistent config objects and scoped TestClient contexts.

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from fastapi.testclient import TestClient

from src.api.api_config import ApiConfig
from src.api.app import app
from src.api.dependencies import get_book_repository, get_config, get_database_client


def build_test_config(*, max_page_size: int = 100) -> ApiConfig:
    """Create deterministic API config for tests."""

    return ApiConfig(
        api_name="Test Library API",
        api_version_path="/api/v1",
        app_version="v1.0.0",
        host="0.0.0.0",
        port=8080,
        environment="test",
        database_url="sqlite+pysqlite://",
        default_page_size=10,
        max_page_size=max_page_size,
        request_timeout_seconds=30,
        connect_timeout_seconds=5,
        health_check_timeout_seconds=2,
        allowed_origins=[],
        books_table_name="books",
    )


@contextmanager
def api_test_client(
    *,
    config: ApiConfig | None = None,
    db_client: Any | None = None,
    book_repository: Any | None = None,
) -> Iterator[TestClient]:
    """Yield a TestClient with scoped dependency overrides."""

    resolved_config = config or build_test_config()

    app.dependency_overrides[get_config] = lambda: resolved_config
    if db_client is not None:
        app.dependency_overrides[get_database_client] = lambda: db_client
    if book_repository is not None:
        app.dependency_overrides[get_book_repository] = lambda: book_repository

    try:
        with TestClient(app) as client:
            yield client
    finally:
        app.dependency_overrides.clear()

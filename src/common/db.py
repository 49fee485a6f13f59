"""
Database engine construction and schema bootstrap.
The engine owns the connection pool; callers receive it explicitly instead of importing a module-level handle.
"""

from __future__ import annotations

import logging

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine, make_url

logger = logging.getLogger(__name__)

POOL_SIZE = 5
POOL_MAX_OVERFLOW = 5
POOL_RECYCLE_SECONDS = 30 * 60

BOOKS_DDL: dict[str, str] = {
    "postgresql": """
    CREATE TABLE IF NOT EXISTS {table_name} (
        id SERIAL PRIMARY KEY,
        title TEXT NOT NULL,
        author TEXT NOT NULL,
        isbn TEXT NOT NULL
    )
    """,
    "sqlite": """
    CREATE TABLE IF NOT EXISTS {table_name} (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        title TEXT NOT NULL,
        author TEXT NOT NULL,
        isbn TEXT NOT NULL
    )
    """,
}


def build_engine(
    database_url: str,
    *,
    connect_timeout_seconds: int = 5,
    statement_timeout_seconds: int | None = None,
) -> Engine:
    """Create a pooled engine; PostgreSQL connections get connect and statement timeouts."""

    url = make_url(database_url)
    if url.get_backend_name() != "postgresql":
        return create_engine(url, pool_pre_ping=True, future=True)

    connect_args: dict[str, object] = {"connect_timeout": connect_timeout_seconds}
    if statement_timeout_seconds is not None:
        connect_args["options"] = f"-c statement_timeout={statement_timeout_seconds * 1000}"

    return create_engine(
        url,
        pool_size=POOL_SIZE,
        max_overflow=POOL_MAX_OVERFLOW,
        pool_recycle=POOL_RECYCLE_SECONDS,
        pool_pre_ping=True,
        connect_args=connect_args,
        future=True,
    )


def ensure_books_table(engine: Engine, *, table_name: str = "books") -> None:
    """Create the books table if it does not exist yet."""

    dialect = engine.dialect.name
    if dialect not in BOOKS_DDL:
        raise ValueError(f"No books DDL for dialect {dialect!r}")
    with engine.begin() as connection:
        connection.execute(text(BOOKS_DDL[dialect].format(table_name=table_name)))
    logger.info("Ensured table %s exists (dialect=%s)", table_name, dialect)

# This file wraps database access so the repository can run parameterized SQL safely.
# It exists to keep SQL execution details out of router code and make testing easier.
# The client holds an injected SQLAlchemy engine, which owns the connection pool.
# Keeping this layer small makes query behavior easier to audit and troubleshoot.

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from sqlalchemy import text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

logger = logging.getLogger(__name__)


class DatabaseClient:
    """Minimal SQLAlchemy wrapper for API read/write access."""

    def __init__(self, *, engine: Engine) -> None:
        self._engine = engine

    @property
    def engine(self) -> Engine:
        return self._engine

    def can_connect(self, *, timeout_seconds: int | None = None) -> bool:
        """Run a bounded `SELECT 1`; any storage failure reports False.

        `timeout_seconds` caps the query once a connection is held. Opening a new
        connection is capped separately by the engine's `connect_timeout`, so on
        PostgreSQL the worst case is `connect_timeout + timeout_seconds`.
        """

        try:
            with self._engine.begin() as connection:
                if timeout_seconds is not None and self._engine.dialect.name == "postgresql":
                    connection.execute(
                        text("SELECT set_config('statement_timeout', :timeout, true)"),
                        {"timeout": str(timeout_seconds * 1000)},
                    )
                connection.execute(text("SELECT 1"))
            return True
        except SQLAlchemyError:
            logger.exception("Database liveness probe failed")
            return False

    def fetch_all(self, query: str, params: Mapping[str, Any] | None = None) -> list[dict[str, Any]]:
        with self._engine.connect() as connection:
            rows = connection.execute(text(query), dict(params or {})).mappings().all()
        return [dict(row) for row in rows]

    def fetch_one(self, query: str, params: Mapping[str, Any] | None = None) -> dict[str, Any] | None:
        with self._engine.connect() as connection:
            row = connection.execute(text(query), dict(params or {})).mappings().first()
        return dict(row) if row is not None else None

    def fetch_scalar(self, query: str, params: Mapping[str, Any] | None = None) -> Any:
        with self._engine.connect() as connection:
            return connection.execute(text(query), dict(params or {})).scalar_one()

    def execute(self, query: str, params: Mapping[str, Any] | None = None) -> int:
        """Run a write statement in its own transaction and return the affected row count."""

        with self._engine.begin() as connection:
            result = connection.execute(text(query), dict(params or {}))
            return result.rowcount

    def execute_returning(self, query: str, params: Mapping[str, Any] | None = None) -> Any:
        """Run a write statement with a RETURNING clause and return its single scalar."""

        with self._engine.begin() as connection:
            return connection.execute(text(query), dict(params or {})).scalar_one()

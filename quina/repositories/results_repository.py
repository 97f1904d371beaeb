"""Repository layer for stored Quina draw rows.

Repositories only fetch raw rows (plain dicts, column names untouched).
Turning them into `DrawResult` objects is the normalizer's job.
"""

from __future__ import annotations

from typing import Any, Protocol

from flask import current_app
from sqlalchemy import inspect, text
from sqlalchemy.engine import Engine

from quina.db import get_db_backend, get_engine, get_mongo_db
from quina.errors import QueryShapeError

Row = dict[str, Any]


class ResultsRepository(Protocol):
    """Narrow read capability every storage backend provides."""

    def table_exists(self) -> bool: ...

    def fetch_recent_rows(self, limit: int) -> list[Row]: ...

    def fetch_recent_rows_loose(self, limit: int) -> list[Row]: ...


class SqlResultsRepository:
    """Reads results from sqlite (file) or postgres through SQLAlchemy Core."""

    def __init__(self, engine: Engine, table: str = "quina_results") -> None:
        self._engine = engine
        self._table = table

    def _quoted_table(self) -> str:
        return self._engine.dialect.identifier_preparer.quote(self._table)

    def table_exists(self) -> bool:
        return inspect(self._engine).has_table(self._table)

    def _fetch(self, sql: str, limit: int) -> list[Row]:
        # A fresh connection per attempt, so a failed statement leaves no
        # aborted transaction behind for the fallback query.
        with self._engine.connect() as conn:
            result = conn.execute(text(sql), {"limit": int(limit)})
            return [dict(row) for row in result.mappings()]

    def fetch_recent_rows(self, limit: int) -> list[Row]:
        sql = (
            'SELECT draw_number AS "drawNumber", date, numbers '
            f"FROM {self._quoted_table()} "
            "ORDER BY draw_number DESC LIMIT :limit"
        )
        return self._fetch(sql, limit)

    def _order_column(self) -> str:
        # sqlite reads an unknown double-quoted name as a string literal.
        if self._engine.dialect.name == "sqlite":
            return "drawNumber"
        return self._engine.dialect.identifier_preparer.quote("drawNumber")

    def fetch_recent_rows_loose(self, limit: int) -> list[Row]:
        sql = (
            f"SELECT * FROM {self._quoted_table()} "
            f"ORDER BY {self._order_column()} DESC LIMIT :limit"
        )
        return self._fetch(sql, limit)


class MongoResultsRepository:
    """Reads results from a MongoDB collection."""

    def __init__(self, db: Any, collection: str = "quina_results") -> None:
        self._db = db
        self._collection = collection

    def table_exists(self) -> bool:
        return self._collection in self._db.list_collection_names()

    def _fetch(self, sort_field: str, limit: int, query: dict[str, Any] | None = None) -> list[Row]:
        cur = (
            self._db[self._collection]
            .find(query or {}, {"_id": 0})
            .sort(sort_field, -1)
            .limit(int(limit))
        )
        return [dict(doc) for doc in cur]

    def fetch_recent_rows(self, limit: int) -> list[Row]:
        rows = self._fetch("drawNumber", limit, {"drawNumber": {"$exists": True}})
        if not rows and self._db[self._collection].estimated_document_count() > 0:
            raise QueryShapeError(f"no documents in {self._collection} carry a drawNumber field")
        return rows

    def fetch_recent_rows_loose(self, limit: int) -> list[Row]:
        return self._fetch("draw_number", limit)


def get_results_repository() -> ResultsRepository:
    """Repository for the backend configured on the current app."""

    table = str(current_app.config.get("RESULTS_TABLE", "quina_results"))
    if get_db_backend() == "mongo":
        return MongoResultsRepository(get_mongo_db(), table)
    return SqlResultsRepository(get_engine(), table)

"""Pytest configuration and fixtures.

Provides environment isolation, a temporary sqlite store, and in-memory test
doubles for the results repository and MongoDB.
"""

from __future__ import annotations

import json
from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any

import pytest
from sqlalchemy import text

from quina import create_app
from quina.db import create_app_engine

_ENV_VARS = (
    "APP_ENV",
    "PORT",
    "DB_BACKEND",
    "DATABASE_URL",
    "DB_PATH",
    "PGHOST",
    "PGUSER",
    "PGDATABASE",
    "PGPORT",
    "PGPASSWORD",
    "PGSSLMODE",
    "MONGODB_URI",
    "MONGODB_DB",
    "RESULTS_TABLE",
    "RESULTS_LIMIT",
    "STATIC_DIR",
    "LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the developer's shell and .env files out of the tests."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr("quina.load_dotenv", None)


# =============================================================================
# Test Doubles
# =============================================================================


@dataclass
class FakeRepository:
    """Results repository double with scripted rows or failures."""

    rows: list[dict[str, Any]] = field(default_factory=list)
    loose_rows: list[dict[str, Any]] = field(default_factory=list)
    exists: bool = True
    primary_error: Exception | None = None
    loose_error: Exception | None = None
    calls: list[str] = field(default_factory=list)

    def table_exists(self) -> bool:
        self.calls.append("table_exists")
        return self.exists

    def fetch_recent_rows(self, limit: int) -> list[dict[str, Any]]:
        self.calls.append("primary")
        if self.primary_error is not None:
            raise self.primary_error
        return self.rows[:limit]

    def fetch_recent_rows_loose(self, limit: int) -> list[dict[str, Any]]:
        self.calls.append("loose")
        if self.loose_error is not None:
            raise self.loose_error
        return self.loose_rows[:limit]


class FakeCursor:
    def __init__(self, docs: list[dict[str, Any]]) -> None:
        self._docs = docs

    def sort(self, key: str, direction: int) -> FakeCursor:
        present = [d for d in self._docs if key in d]
        missing = [d for d in self._docs if key not in d]
        present.sort(key=lambda d: d[key], reverse=direction < 0)
        self._docs = present + missing
        return self

    def limit(self, n: int) -> FakeCursor:
        self._docs = self._docs[:n]
        return self

    def __iter__(self) -> Iterator[dict[str, Any]]:
        return iter(self._docs)


@dataclass
class FakeUpdateResult:
    upserted_id: Any | None


class FakeCollection:
    def __init__(self) -> None:
        self.docs: list[dict[str, Any]] = []
        self.indexes: list[tuple[str, bool]] = []

    def find(self, query: dict[str, Any], projection: dict[str, Any] | None = None) -> FakeCursor:
        matched = []
        for doc in self.docs:
            ok = True
            for key, cond in (query or {}).items():
                if isinstance(cond, dict) and "$exists" in cond:
                    ok = ok and ((key in doc) == bool(cond["$exists"]))
                else:
                    ok = ok and doc.get(key) == cond
            if ok:
                matched.append({k: v for k, v in doc.items() if k != "_id"})
        return FakeCursor(matched)

    def estimated_document_count(self) -> int:
        return len(self.docs)

    def create_index(self, key: str, unique: bool = False) -> str:
        self.indexes.append((key, unique))
        return f"{key}_1"

    def update_one(self, flt: dict[str, Any], update: dict[str, Any], upsert: bool = False) -> FakeUpdateResult:
        for doc in self.docs:
            if all(doc.get(k) == v for k, v in flt.items()):
                return FakeUpdateResult(upserted_id=None)
        if not upsert:
            return FakeUpdateResult(upserted_id=None)
        doc = {**flt, **update.get("$setOnInsert", {}), "_id": len(self.docs) + 1}
        self.docs.append(doc)
        return FakeUpdateResult(upserted_id=doc["_id"])


class FakeMongoDb:
    """Just enough of pymongo's Database for the results repository."""

    def __init__(self) -> None:
        self.collections: dict[str, FakeCollection] = {}
        self.online = True

    def __getitem__(self, name: str) -> FakeCollection:
        return self.collections.setdefault(name, FakeCollection())

    def list_collection_names(self) -> list[str]:
        return list(self.collections)

    def command(self, name: str) -> dict[str, Any]:
        if not self.online:
            raise ConnectionError("server selection timeout")
        return {"ok": 1.0}


class FakeMongoClient:
    def __init__(self, db: FakeMongoDb) -> None:
        self._db = db

    def __getitem__(self, name: str) -> FakeMongoDb:
        return self._db


# =============================================================================
# Storage fixtures
# =============================================================================


def _insert_draws(database_url: str, rows: list[tuple[int, str, list[int]]]) -> None:
    engine = create_app_engine(database_url)
    with engine.begin() as conn:
        conn.execute(
            text(
                "CREATE TABLE IF NOT EXISTS quina_results ("
                "id INTEGER PRIMARY KEY AUTOINCREMENT, "
                "drawNumber INTEGER UNIQUE NOT NULL, "
                "date TEXT NOT NULL, "
                "numbers TEXT NOT NULL, "
                "createdAt DATETIME DEFAULT CURRENT_TIMESTAMP)"
            )
        )
        for draw_number, draw_date, numbers in rows:
            conn.execute(
                text("INSERT INTO quina_results (drawNumber, date, numbers) VALUES (:d, :dt, :n)"),
                {"d": draw_number, "dt": draw_date, "n": json.dumps(numbers)},
            )
    engine.dispose()


@pytest.fixture
def sqlite_url(tmp_path: Any) -> str:
    return f"sqlite:///{tmp_path / 'quina.db'}"


@pytest.fixture
def seed_draws(sqlite_url: str) -> Any:
    """Create the bootstrap-layout table and insert `(drawNumber, date, numbers)` rows."""

    def _seed(rows: list[tuple[int, str, list[int]]]) -> None:
        _insert_draws(sqlite_url, rows)

    return _seed


@pytest.fixture
def app(sqlite_url: str) -> Any:
    return create_app({"DB_BACKEND": "sql", "DATABASE_URL": sqlite_url})


@pytest.fixture
def client(app: Any) -> Any:
    return app.test_client()


@pytest.fixture
def fake_mongo() -> FakeMongoDb:
    return FakeMongoDb()


@pytest.fixture
def mongo_app(fake_mongo: FakeMongoDb) -> Any:
    application = create_app({"DB_BACKEND": "mongo", "MONGODB_URI": "mongodb://localhost:27017"})
    application.extensions["mongo_client"] = FakeMongoClient(fake_mongo)
    return application

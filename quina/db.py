"""Storage handles: SQLAlchemy engine or pymongo client.

One handle per process, created at startup and reused by every request.
"""

from __future__ import annotations

import logging
from typing import Any

from flask import Flask, current_app
from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine, make_url

from quina.errors import DatabaseUnavailableError

logger = logging.getLogger(__name__)


def create_app_engine(database_url: str) -> Engine:
    url = make_url(database_url)
    connect_args: dict[str, Any] = {}

    # Railway's managed Postgres requires TLS but serves a self-signed cert.
    if url.get_backend_name() == "postgresql" and "railway" in database_url:
        if "sslmode" not in (url.query or {}):
            connect_args["sslmode"] = "require"

    engine = create_engine(
        database_url,
        pool_pre_ping=True,
        connect_args=connect_args,
        future=True,
    )

    @event.listens_for(engine, "connect")
    def _on_connect(dbapi_connection: Any, connection_record: Any) -> None:
        logger.info("Connected to %s database", engine.dialect.name)

    return engine


def create_mongo_client(uri: str) -> Any:
    from pymongo import MongoClient

    return MongoClient(uri)


def init_db(app: Flask) -> None:
    """Initialize the process-wide storage handle for the configured backend."""

    backend = str(app.config["DB_BACKEND"])
    app.extensions["db_backend"] = backend

    if backend == "mongo":
        app.extensions["mongo_client"] = create_mongo_client(str(app.config["MONGODB_URI"]))
        return

    app.extensions["engine"] = create_app_engine(str(app.config["DATABASE_URL"]))


def get_db_backend() -> str:
    return str(current_app.extensions.get("db_backend", "sql"))


def get_engine() -> Engine:
    engine: Engine | None = current_app.extensions.get("engine")
    if engine is None:
        raise RuntimeError("SQL engine not initialized")
    return engine


def get_mongo_db() -> Any:
    client = current_app.extensions.get("mongo_client")
    if client is None:
        raise RuntimeError("MongoDB client not initialized")
    return client[str(current_app.config["MONGODB_DB"])]


def ping() -> None:
    """Liveness probe against the configured backend; raises on failure."""

    if get_db_backend() == "mongo":
        get_mongo_db().command("ping")
        return

    with get_engine().connect() as conn:
        conn.execute(text("SELECT 1"))


def check_connection() -> None:
    """Run `ping()`, reporting any failure as `DatabaseUnavailableError`."""

    try:
        ping()
    except Exception as exc:
        raise DatabaseUnavailableError(str(exc)) from exc

"""Environment-based configuration."""

from __future__ import annotations

import os
import pathlib
from dataclasses import dataclass, field

from sqlalchemy.engine import URL

PACKAGE_DIR = pathlib.Path(__file__).resolve().parent


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def normalize_database_url(url: str) -> str:
    """Rewrite the legacy `postgres://` scheme that SQLAlchemy rejects."""

    if url.startswith("postgres://"):
        return "postgresql://" + url[len("postgres://"):]
    return url


def resolve_database_url() -> str:
    """Resolve DB connection string.

    Priority:
      1) DATABASE_URL (network store)
      2) Build from PG* env vars (common Postgres convention)
      3) DB_PATH (file-backed sqlite store), default ./quina.db
    """

    explicit = os.getenv("DATABASE_URL")
    if explicit:
        return normalize_database_url(explicit)

    host = os.getenv("PGHOST")
    user = os.getenv("PGUSER")
    database = os.getenv("PGDATABASE")

    if host and user and database:
        password = os.getenv("PGPASSWORD")
        sslmode = os.getenv("PGSSLMODE", "require")
        port = _int_env("PGPORT", 5432)

        query = {"sslmode": sslmode} if sslmode else {}
        url = URL.create(
            drivername="postgresql+psycopg2",
            username=user,
            password=password,
            host=host,
            port=port,
            database=database,
            query=query,
        )
        return url.render_as_string(hide_password=False)

    db_path = os.getenv("DB_PATH", "./quina.db")
    return f"sqlite:///{db_path}"


def resolve_db_backend() -> str:
    return (
        os.getenv("DB_BACKEND")
        or ("mongo" if os.getenv("MONGODB_URI") else "sql")
    ).lower().strip()


@dataclass(frozen=True)
class BaseConfig:
    """Base configuration shared by all environments.

    Values are read from the environment when the config is instantiated.
    """

    APP_ENV: str = field(default_factory=lambda: os.getenv("APP_ENV", "development"))
    PORT: int = field(default_factory=lambda: _int_env("PORT", 3000))
    DB_BACKEND: str = field(default_factory=resolve_db_backend)  # "sql" | "mongo"

    # SQL backend (sqlite file or postgres)
    DATABASE_URL: str = field(default_factory=resolve_database_url)

    # Mongo backend
    MONGODB_URI: str = field(default_factory=lambda: os.getenv("MONGODB_URI", "mongodb://localhost:27017"))
    MONGODB_DB: str = field(default_factory=lambda: os.getenv("MONGODB_DB", "quina"))

    RESULTS_TABLE: str = field(default_factory=lambda: os.getenv("RESULTS_TABLE", "quina_results"))
    RESULTS_LIMIT: int = field(default_factory=lambda: _int_env("RESULTS_LIMIT", 11))

    STATIC_DIR: str = field(default_factory=lambda: os.getenv("STATIC_DIR", str(PACKAGE_DIR / "static")))
    LOG_LEVEL: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))


@dataclass(frozen=True)
class DevelopmentConfig(BaseConfig):
    """Development configuration."""

    DEBUG: bool = True


@dataclass(frozen=True)
class ProductionConfig(BaseConfig):
    """Production configuration."""

    DEBUG: bool = False


def get_config() -> type[BaseConfig]:
    """Resolve configuration class based on APP_ENV."""

    env = os.getenv("APP_ENV", "development").lower().strip()
    if env == "production":
        return ProductionConfig
    return DevelopmentConfig

"""Create the quina_results table and seed two sample draws.

Run once against the configured store (DB_BACKEND / DATABASE_URL / DB_PATH /
MONGODB_URI, read from .env / environment). Existing draws are left as they are.

Usage:
  python scripts/create_table.py
"""

from __future__ import annotations

import argparse
import json
import logging
import pathlib
import sys
from collections.abc import Sequence

from dotenv import load_dotenv
from sqlalchemy import select
from sqlalchemy.orm import sessionmaker

PROJECT_ROOT = pathlib.Path(__file__).resolve().parents[1]
sys.path.insert(0, str(PROJECT_ROOT))

from quina.config import get_config
from quina.db import create_app_engine, create_mongo_client
from quina.models.base import Base
from quina.models.quina_result import QuinaResult

logger = logging.getLogger(__name__)

SAMPLE_DRAWS = (
    {"drawNumber": 6907, "date": "19th December 2025", "numbers": [23, 41, 46, 58, 66]},
    {"drawNumber": 6906, "date": "18th December 2025", "numbers": [5, 32, 51, 55, 56]},
)


def bootstrap_sql(database_url: str, *, seed: bool = True) -> int:
    """Create the table and insert sample draws that are not stored yet.

    Returns the number of inserted rows.
    """

    engine = create_app_engine(database_url)
    Base.metadata.create_all(bind=engine)
    if not seed:
        return 0

    session_factory = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)
    inserted = 0
    with session_factory() as session, session.begin():
        existing = set(session.scalars(select(QuinaResult.draw_number)).all())
        for draw in SAMPLE_DRAWS:
            if draw["drawNumber"] in existing:
                continue
            session.add(
                QuinaResult(
                    draw_number=int(draw["drawNumber"]),
                    date=str(draw["date"]),
                    numbers=json.dumps(draw["numbers"]),
                )
            )
            inserted += 1
    return inserted


def bootstrap_mongo(db: object, collection: str, *, seed: bool = True) -> int:
    """Create the collection's unique drawNumber index and upsert sample draws."""

    col = db[collection]  # type: ignore[index]
    col.create_index("drawNumber", unique=True)
    if not seed:
        return 0

    inserted = 0
    for draw in SAMPLE_DRAWS:
        result = col.update_one(
            {"drawNumber": draw["drawNumber"]},
            {"$setOnInsert": dict(draw)},
            upsert=True,
        )
        if result.upserted_id is not None:
            inserted += 1
    return inserted


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create the quina_results table and seed sample data")
    parser.add_argument("--no-seed", action="store_true", help="Only create the table")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(message)s")

    load_dotenv()
    env_local = PROJECT_ROOT / ".env.local"
    if env_local.exists():
        load_dotenv(dotenv_path=env_local, override=True)

    config = get_config()()
    seed = not args.no_seed

    if config.DB_BACKEND == "mongo":
        logger.info("MongoDB: %s (db=%s)", config.MONGODB_URI, config.MONGODB_DB)
        client = create_mongo_client(config.MONGODB_URI)
        inserted = bootstrap_mongo(client[config.MONGODB_DB], config.RESULTS_TABLE, seed=seed)
    else:
        if config.RESULTS_TABLE != QuinaResult.__tablename__:
            raise SystemExit(f"RESULTS_TABLE must be {QuinaResult.__tablename__!r} for the SQL bootstrap")
        inserted = bootstrap_sql(config.DATABASE_URL, seed=seed)

    logger.info("Table %r created (or already exists)", config.RESULTS_TABLE)
    logger.info("Sample draws inserted: %s", inserted)
    print("Your scraper should insert rows like this:")
    print(
        "INSERT INTO quina_results (\"drawNumber\", date, numbers) "
        "VALUES (6908, '20th December 2025', '[1, 2, 3, 4, 5]');"
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

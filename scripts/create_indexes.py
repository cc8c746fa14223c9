"""Provision storage ahead of a deploy.

Mongo: creates the `matchups` / `guesses` indexes, including the unique
(matchupId, participantId) index that enforces one guess per participant.
SQL: creates the tables (with the same unique constraint); for PostgreSQL
also applies the unique index idempotently to an existing `guesses` table,
since create_all() never alters existing tables.

Usage:
  python scripts/create_indexes.py                 # backend from env
  python scripts/create_indexes.py --backend mongo --mongo-uri mongodb://localhost:27017
  python scripts/create_indexes.py --backend sql --database-url sqlite:///./jersey_pool.db
"""

from __future__ import annotations

import argparse
import logging
import os
from collections.abc import Sequence

from dotenv import load_dotenv
from pymongo import MongoClient
from sqlalchemy import text

from jersey_pool.config import resolve_database_url, resolve_db_backend
from jersey_pool.db import GUESS_UNIQUE_INDEX, create_app_engine, ensure_mongo_indexes
from jersey_pool.models.base import Base

# Import models so they register with Base.metadata
from jersey_pool import models  # noqa: F401

logger = logging.getLogger(__name__)


def _provision_mongo(uri: str, db_name: str) -> None:
    logger.info("MongoDB: %s (db=%s)", uri, db_name)
    client = MongoClient(uri)
    try:
        ensure_mongo_indexes(client[db_name])
    finally:
        client.close()


def _provision_sql(database_url: str) -> None:
    engine = create_app_engine(database_url)
    logger.info("SQL dialect: %s", engine.dialect.name)
    Base.metadata.create_all(bind=engine)

    if engine.dialect.name == "postgresql":
        ddl = [
            f"CREATE UNIQUE INDEX IF NOT EXISTS {GUESS_UNIQUE_INDEX} ON guesses (matchup_id, participant_id)",
            "CREATE INDEX IF NOT EXISTS ix_guess_participant_created ON guesses (participant_id, created_at)",
        ]
        with engine.begin() as conn:
            for stmt in ddl:
                conn.execute(text(stmt))


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create jersey pool indexes / tables")
    parser.add_argument("--backend", choices=("mongo", "sql"), default=None)
    parser.add_argument("--mongo-uri", dest="mongo_uri", type=str, default=None)
    parser.add_argument("--mongo-db", dest="mongo_db", type=str, default=None)
    parser.add_argument("--database-url", dest="database_url", type=str, default=None)
    args = parser.parse_args(argv)

    load_dotenv()
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(message)s")

    backend = (args.backend or resolve_db_backend()).lower().strip()

    if backend == "mongo":
        _provision_mongo(
            args.mongo_uri or os.getenv("MONGODB_URI") or "mongodb://localhost:27017",
            args.mongo_db or os.getenv("MONGODB_DB") or "jersey-pool",
        )
    elif backend == "sql":
        _provision_sql(args.database_url or resolve_database_url())
    else:
        raise SystemExit(f"Unknown backend: {backend}")

    logger.info("Indexes created (or already exist).")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

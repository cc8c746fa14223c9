"""Storage bootstrap for both backends.

- mongo: one ``MongoClient`` per app (it pools internally), indexes ensured
  at startup.
- sql: SQLAlchemy engine plus a lazily opened session per app context,
  committed or rolled back on teardown.
"""

from __future__ import annotations

import logging

from flask import Flask, current_app, g
from pymongo import ASCENDING, DESCENDING, MongoClient
from pymongo.database import Database
from pymongo.errors import PyMongoError
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import Session, sessionmaker

from jersey_pool.models.base import Base

logger = logging.getLogger(__name__)

GUESS_UNIQUE_INDEX = "uq_guess_matchup_participant"


def get_db_backend() -> str:
    return str(current_app.config.get("DB_BACKEND", "sql"))


def create_app_engine(database_url: str) -> Engine:
    url = make_url(database_url)

    connect_args: dict[str, object] = {}
    if url.get_backend_name() == "sqlite":
        # Flask may serve a request on a different thread than the one that
        # opened the pooled connection.
        connect_args = {"check_same_thread": False}

    return create_engine(database_url, pool_pre_ping=True, connect_args=connect_args)


def ensure_mongo_indexes(db: Database) -> None:
    """Create the indexes the game relies on.

    The compound unique index on ``guesses`` is what enforces one guess per
    participant per matchup.
    """

    db["matchups"].create_index("matchupId", unique=True)
    db["guesses"].create_index(
        [("matchupId", ASCENDING), ("participantId", ASCENDING)],
        unique=True,
        name=GUESS_UNIQUE_INDEX,
    )
    db["guesses"].create_index([("participantId", ASCENDING), ("createdAt", DESCENDING)])
    db["guesses"].create_index([("matchupId", ASCENDING), ("createdAt", ASCENDING)])


def init_mongo(app: Flask) -> None:
    client = MongoClient(str(app.config["MONGODB_URI"]))
    db = client[str(app.config["MONGODB_DB"])]

    # The unique guess index is the only duplicate guard, so boot fails without it.
    try:
        ensure_mongo_indexes(db)
    except PyMongoError:
        logger.exception("Failed to create Mongo indexes")
        client.close()
        raise

    app.extensions["mongo_client"] = client
    app.extensions["mongo_db"] = db


def init_sql(app: Flask) -> None:
    # Register models on Base.metadata
    from jersey_pool import models  # noqa: F401

    engine = create_app_engine(str(app.config["DATABASE_URL"]))
    session_factory = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)

    # Tables and the unique constraint; scripts/create_indexes.py does the same ahead of deploys.
    Base.metadata.create_all(bind=engine)

    app.extensions["engine"] = engine
    app.extensions["session_factory"] = session_factory

    @app.teardown_appcontext
    def _close_session(exc: BaseException | None) -> None:
        session: Session | None = g.pop("db", None)
        if session is None:
            return

        try:
            # A handled storage error leaves exc None but the session inactive.
            if exc is None and session.is_active:
                session.commit()
            else:
                session.rollback()
        finally:
            session.close()


def init_db(app: Flask) -> None:
    """Initialize whichever backend DB_BACKEND selects."""

    backend = str(app.config.get("DB_BACKEND", "sql"))
    if backend == "mongo":
        init_mongo(app)
    elif backend == "sql":
        init_sql(app)
    else:
        raise RuntimeError(f"Unknown DB_BACKEND: {backend!r}")

    logger.info("Storage backend: %s", backend)


def get_mongo_db() -> Database:
    db: Database | None = current_app.extensions.get("mongo_db")
    if db is None:
        raise RuntimeError("MongoDB not initialized")
    return db


def get_session() -> Session:
    """Get (opening on first use) the current context's SQLAlchemy session."""

    session: Session | None = g.get("db")
    if session is not None:
        return session

    factory = current_app.extensions.get("session_factory")
    if factory is None:
        raise RuntimeError("Database session not initialized")
    session = factory()
    g.db = session
    return session


def get_optional_session() -> Session | None:
    """Session for the sql backend, None for mongo."""

    if get_db_backend() == "mongo":
        return None
    return get_session()

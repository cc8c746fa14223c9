"""Environment-based configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass

DEFAULT_ADMIN_IDS = "1441046"


def resolve_db_backend() -> str:
    """Pick the storage backend.

    Priority:
      1) DB_BACKEND (explicit "mongo" | "sql")
      2) "mongo" when MONGODB_URI is set
      3) "sql"
    """

    explicit = (os.getenv("DB_BACKEND") or "").lower().strip()
    if explicit:
        return explicit
    return "mongo" if os.getenv("MONGODB_URI") else "sql"


def resolve_database_url() -> str:
    url = os.getenv("DATABASE_URL") or "sqlite:///./jersey_pool.db"

    # Heroku/Render style URLs; SQLAlchemy expects postgresql://
    if url.startswith("postgres://"):
        url = url.replace("postgres://", "postgresql://", 1)
    return url


def parse_admin_ids(raw: str | None) -> frozenset[int]:
    """Parse a comma-separated list of admin participant ids.

    Blank entries are ignored; anything else that is not a positive integer
    raises ValueError so a typo never silently locks everyone out.
    """

    ids: set[int] = set()
    for part in (raw or "").split(","):
        part = part.strip()
        if not part:
            continue
        value = int(part)
        if value <= 0:
            raise ValueError(f"Admin id must be positive: {part}")
        ids.add(value)
    return frozenset(ids)


@dataclass(frozen=True)
class BaseConfig:
    """Base configuration shared by all environments."""

    APP_ENV: str = os.getenv("APP_ENV", "development")
    SECRET_KEY: str = os.getenv("SECRET_KEY", "dev-secret")
    DB_BACKEND: str = resolve_db_backend()  # "sql" | "mongo"

    # SQL backend
    DATABASE_URL: str = resolve_database_url()

    # Mongo backend
    MONGODB_URI: str = os.getenv("MONGODB_URI", "mongodb://localhost:27017")
    MONGODB_DB: str = os.getenv("MONGODB_DB", "jersey-pool")

    ADMIN_IDS: frozenset[int] = parse_admin_ids(os.getenv("ADMIN_IDS", DEFAULT_ADMIN_IDS))
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")


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

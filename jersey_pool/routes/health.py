"""Health check route."""

from __future__ import annotations

from flask import Blueprint

from jersey_pool.db import get_db_backend
from jersey_pool.utils.responses import ok

health_bp = Blueprint("health", __name__)


@health_bp.get("/health")
def health_check():
    return ok({"status": "ok", "backend": get_db_backend()})

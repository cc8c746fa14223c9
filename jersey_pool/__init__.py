"""Jersey-number prediction game API."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from dotenv import load_dotenv
from flask import Flask


def create_app(overrides: Mapping[str, Any] | None = None) -> Flask:
    """Application factory.

    Args:
        overrides: config values applied on top of the environment config.

    Returns:
        Configured Flask application.
    """
    load_dotenv()

    from jersey_pool.config import get_config
    from jersey_pool.db import init_db
    from jersey_pool.error_handlers import register_error_handlers
    from jersey_pool.logging_config import configure_logging
    from jersey_pool.routes.admin import admin_bp
    from jersey_pool.routes.guesses import guesses_bp
    from jersey_pool.routes.health import health_bp
    from jersey_pool.routes.matchups import matchups_bp

    app = Flask(__name__)
    app.config.from_object(get_config())
    if overrides:
        app.config.update(overrides)

    configure_logging(app)
    init_db(app)
    register_error_handlers(app)

    app.register_blueprint(health_bp)
    app.register_blueprint(guesses_bp)
    app.register_blueprint(matchups_bp)
    app.register_blueprint(admin_bp, url_prefix="/admin")

    return app

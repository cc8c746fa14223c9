"""Public matchup read."""

from __future__ import annotations

from flask import Blueprint, current_app

from jersey_pool.db import get_optional_session
from jersey_pool.schemas.admin import MatchupSchema
from jersey_pool.services.admin_service import AdminService
from jersey_pool.utils.responses import ok

matchups_bp = Blueprint("matchups", __name__)

_schema = MatchupSchema()


@matchups_bp.get("/matchups/<matchup_id>")
def get_matchup(matchup_id: str):
    service = AdminService(admin_ids=current_app.config["ADMIN_IDS"])
    matchup = service.get_matchup(get_optional_session(), matchup_id)
    return ok(_schema.dump(matchup))

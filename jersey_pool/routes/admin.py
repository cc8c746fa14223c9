"""Admin routes (controllers). No business logic here.

Body validation runs before the admin check, so a malformed request is a 400
whoever sends it.
"""

from __future__ import annotations

from flask import Blueprint, current_app, request

from jersey_pool.db import get_optional_session
from jersey_pool.errors import ValidationError
from jersey_pool.schemas.admin import (
    LockRequestSchema,
    LockStateSchema,
    MatchupConfigSchema,
    MatchupSchema,
    SettleRequestSchema,
    SettlementSchema,
)
from jersey_pool.services.admin_service import AdminService
from jersey_pool.services.settlement_service import SettlementService
from jersey_pool.utils.responses import ok

admin_bp = Blueprint("admin", __name__)

_config_schema = MatchupConfigSchema()
_lock_request_schema = LockRequestSchema()
_settle_schema = SettleRequestSchema()
_lock_state_schema = LockStateSchema()
_settlement_schema = SettlementSchema()
_matchup_schema = MatchupSchema(exclude=("locked",))


def _admin_service() -> AdminService:
    return AdminService(admin_ids=current_app.config["ADMIN_IDS"])


def _settlement_service() -> SettlementService:
    return SettlementService(admin_ids=current_app.config["ADMIN_IDS"])


@admin_bp.post("/matchup")
def set_matchup():
    data = _config_schema.load(request.get_json(silent=True) or {})

    matchup = _admin_service().set_configuration(
        get_optional_session(),
        admin_id=int(data["admin_id"]),
        matchup_id=str(data["matchup_id"]),
        home_team=str(data["home_team"]),
        away_team=str(data["away_team"]),
        spread=float(data["spread"]),
        jersey_sum_line=int(data["jersey_sum_line"]),
        kickoff=data.get("kickoff"),
    )
    return ok(_matchup_schema.dump(matchup))


@admin_bp.get("/lock")
def get_lock():
    matchup_id = (request.args.get("matchupId") or "").strip()
    if not matchup_id:
        raise ValidationError(
            "matchupId query param is required",
            details={"matchupId": ["Missing data for required field."]},
        )

    locked = _admin_service().get_lock(get_optional_session(), matchup_id)
    return ok(_lock_state_schema.dump({"matchup_id": matchup_id, "locked": locked}))


@admin_bp.post("/lock")
def set_lock():
    data = _lock_request_schema.load(request.get_json(silent=True) or {})

    matchup_id = str(data["matchup_id"])
    locked = _admin_service().set_lock(
        get_optional_session(),
        admin_id=int(data["admin_id"]),
        matchup_id=matchup_id,
        locked=bool(data["locked"]),
    )
    return ok(_lock_state_schema.dump({"matchup_id": matchup_id, "locked": locked}))


@admin_bp.post("/settle")
def settle():
    data = _settle_schema.load(request.get_json(silent=True) or {})

    result = _settlement_service().settle(
        get_optional_session(),
        admin_id=int(data["admin_id"]),
        matchup_id=str(data["matchup_id"]),
        correct_winner=str(data["correct_winner"]),
        correct_jersey_total=int(data["correct_jersey_total"]),
    )
    return ok(_settlement_schema.dump(result))

"""Guess routes (controllers). No business logic here."""

from __future__ import annotations

from flask import Blueprint, request

from jersey_pool.db import get_optional_session
from jersey_pool.errors import ValidationError
from jersey_pool.schemas.guess import GuessCreateSchema, GuessSchema
from jersey_pool.services.guess_service import GuessService
from jersey_pool.utils.responses import ok

guesses_bp = Blueprint("guesses", __name__)

_create_schema = GuessCreateSchema()
_guesses_schema = GuessSchema(many=True)
_service = GuessService()


@guesses_bp.get("/guesses")
def list_guesses():
    """A participant's past guesses, newest first (max 50)."""

    raw = (request.args.get("participantId") or "").strip()
    if not raw:
        raise ValidationError(
            "participantId query param is required",
            details={"participantId": ["Missing data for required field."]},
        )
    try:
        participant_id = int(raw)
    except ValueError as e:
        raise ValidationError(
            "participantId must be a positive integer",
            details={"participantId": ["Not a valid integer."]},
        ) from e

    session = get_optional_session()
    guesses = _service.history(session, participant_id)
    return ok({"guesses": _guesses_schema.dump(guesses)})


@guesses_bp.post("/guesses")
def submit_guess():
    payload = request.get_json(silent=True) or {}
    data = _create_schema.load(payload)

    session = get_optional_session()
    _service.submit(
        session,
        matchup_id=str(data["matchup_id"]),
        participant_id=int(data["participant_id"]),
        jersey_sum_guess=int(data["jersey_sum_guess"]),
        winner_pick=str(data["winner_pick"]),
    )

    return ok({"ok": True, "message": "Guess submitted!"}, status_code=201)

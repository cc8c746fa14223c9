"""Schemas for guess submission and history."""

from __future__ import annotations

from marshmallow import EXCLUDE, Schema, fields, validate

SIDES = ("home", "away")
MAX_JERSEY_SUM = 9999
# Largest id both backends can store (signed 64-bit).
MAX_ID = 2**63 - 1


class GuessCreateSchema(Schema):
    """Validate a guess submission payload."""

    class Meta:
        unknown = EXCLUDE

    matchup_id = fields.String(required=True, data_key="matchupId", validate=validate.Length(min=1))
    participant_id = fields.Integer(
        required=True,
        strict=True,
        data_key="participantId",
        validate=validate.Range(min=1, max=MAX_ID),
    )
    jersey_sum_guess = fields.Integer(
        required=True,
        strict=True,
        data_key="jerseySumGuess",
        validate=validate.Range(min=0, max=MAX_JERSEY_SUM),
    )
    winner_pick = fields.String(required=True, data_key="winnerPick", validate=validate.OneOf(SIDES))


class GuessSchema(Schema):
    """Serialize a stored guess."""

    id = fields.String()
    matchup_id = fields.String(data_key="matchupId")
    participant_id = fields.Integer(data_key="participantId")
    jersey_sum_guess = fields.Integer(data_key="jerseySumGuess")
    winner_pick = fields.String(data_key="winnerPick")
    created_at = fields.DateTime(data_key="createdAt")

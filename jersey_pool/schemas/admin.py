"""Schemas for the admin endpoints."""

from __future__ import annotations

from marshmallow import EXCLUDE, Schema, fields, validate

from jersey_pool.schemas.guess import MAX_ID, MAX_JERSEY_SUM, SIDES


class StrictBoolean(fields.Boolean):
    """JSON true/false only; no "yes", 1 or "on"."""

    def _deserialize(self, value, attr, data, **kwargs):  # type: ignore[no-untyped-def]
        if not isinstance(value, bool):
            raise self.make_error("invalid", input=value)
        return value


class StrictFloat(fields.Float):
    """JSON numbers only; numeric strings and booleans are rejected."""

    def _deserialize(self, value, attr, data, **kwargs):  # type: ignore[no-untyped-def]
        if isinstance(value, (str, bool)):
            raise self.make_error("invalid", input=value)
        return super()._deserialize(value, attr, data, **kwargs)


class AdminRequestSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    admin_id = fields.Integer(required=True, strict=True, data_key="adminId", validate=validate.Range(min=1, max=MAX_ID))
    matchup_id = fields.String(required=True, data_key="matchupId", validate=validate.Length(min=1))


class MatchupConfigSchema(AdminRequestSchema):
    home_team = fields.String(required=True, data_key="homeTeam", validate=validate.Length(min=1))
    away_team = fields.String(required=True, data_key="awayTeam", validate=validate.Length(min=1))
    spread = StrictFloat(required=True, allow_nan=False)
    jersey_sum_line = fields.Integer(
        required=True,
        strict=True,
        data_key="jerseySumLine",
        validate=validate.Range(min=0),
    )
    kickoff = fields.String(required=False, load_default=None, allow_none=True)


class LockRequestSchema(AdminRequestSchema):
    locked = StrictBoolean(required=True)


class SettleRequestSchema(AdminRequestSchema):
    correct_winner = fields.String(required=True, data_key="correctWinner", validate=validate.OneOf(SIDES))
    correct_jersey_total = fields.Integer(
        required=True,
        strict=True,
        data_key="correctJerseyTotal",
        validate=validate.Range(min=0, max=MAX_JERSEY_SUM),
    )


class MatchupSchema(Schema):
    """Serialize a stored matchup."""

    matchup_id = fields.String(data_key="matchupId")
    home_team = fields.String(data_key="homeTeam", allow_none=True)
    away_team = fields.String(data_key="awayTeam", allow_none=True)
    spread = fields.Float(allow_none=True)
    jersey_sum_line = fields.Integer(data_key="jerseySumLine", allow_none=True)
    kickoff = fields.String(allow_none=True)
    locked = fields.Boolean()


class LockStateSchema(Schema):
    matchup_id = fields.String(data_key="matchupId")
    locked = fields.Boolean()


class WinnerSchema(Schema):
    participant_id = fields.Integer(data_key="participantId")
    jersey_sum_guess = fields.Integer(data_key="jerseySumGuess")
    winner_pick = fields.String(data_key="winnerPick")
    created_at = fields.DateTime(data_key="createdAt")
    diff = fields.Integer()


class SettlementSchema(Schema):
    matchup_id = fields.String(data_key="matchupId")
    correct_winner = fields.String(data_key="correctWinner")
    correct_jersey_total = fields.Integer(data_key="correctJerseyTotal")
    total_guesses = fields.Integer(data_key="totalGuesses")
    eligible_guesses = fields.Integer(data_key="eligibleGuesses")
    winner = fields.Nested(WinnerSchema)

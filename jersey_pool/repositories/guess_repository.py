"""Repository layer for guess persistence."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

from pymongo import ASCENDING, DESCENDING
from pymongo.errors import DuplicateKeyError
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from jersey_pool.db import get_db_backend, get_mongo_db
from jersey_pool.errors import DuplicateError
from jersey_pool.models.guess import Guess


@dataclass(frozen=True)
class GuessRecord:
    id: str
    matchup_id: str
    participant_id: int
    jersey_sum_guess: int
    winner_pick: str
    created_at: datetime


def as_utc(value: datetime) -> datetime:
    # Both pymongo and sqlite hand back naive datetimes; they are stored as UTC.
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _from_document(doc: dict[str, Any]) -> GuessRecord:
    return GuessRecord(
        id=str(doc.get("_id", "")),
        matchup_id=str(doc.get("matchupId")),
        participant_id=int(doc.get("participantId")),
        jersey_sum_guess=int(doc.get("jerseySumGuess")),
        winner_pick=str(doc.get("winnerPick")),
        created_at=as_utc(doc["createdAt"]),
    )


def _from_row(row: Guess) -> GuessRecord:
    return GuessRecord(
        id=str(row.id),
        matchup_id=row.matchup_id,
        participant_id=int(row.participant_id),
        jersey_sum_guess=int(row.jersey_sum_guess),
        winner_pick=row.winner_pick,
        created_at=as_utc(row.created_at),
    )


class GuessRepository:
    """Insert and ordered reads for Guess.

    Reads are ordered by ``createdAt`` and then by insertion order (Mongo
    ``_id`` / SQL autoincrement id) so two guesses stamped in the same
    millisecond still come back in a stable order.
    """

    def insert(
        self,
        session: Session | None,
        *,
        matchup_id: str,
        participant_id: int,
        jersey_sum_guess: int,
        winner_pick: str,
        created_at: datetime,
    ) -> GuessRecord:
        """Insert a guess.

        Raises:
            DuplicateError: the (matchup, participant) unique constraint fired.
        """

        if get_db_backend() == "mongo":
            doc = {
                "matchupId": matchup_id,
                "participantId": int(participant_id),
                "jerseySumGuess": int(jersey_sum_guess),
                "winnerPick": winner_pick,
                "createdAt": created_at,
            }
            try:
                result = get_mongo_db()["guesses"].insert_one(doc)
            except DuplicateKeyError as exc:
                raise DuplicateError() from exc
            return _from_document({**doc, "_id": result.inserted_id})

        if session is None:
            raise RuntimeError("SQLAlchemy session required for sql backend")
        row = Guess(
            matchup_id=matchup_id,
            participant_id=int(participant_id),
            jersey_sum_guess=int(jersey_sum_guess),
            winner_pick=winner_pick,
            created_at=created_at,
        )
        session.add(row)
        try:
            session.flush()
        except IntegrityError as exc:
            session.rollback()
            raise DuplicateError() from exc
        return _from_row(row)

    def list_for_matchup(self, session: Session | None, matchup_id: str) -> Sequence[GuessRecord]:
        """All guesses for a matchup, oldest first."""

        if get_db_backend() == "mongo":
            cur = (
                get_mongo_db()["guesses"]
                .find({"matchupId": matchup_id})
                .sort([("createdAt", ASCENDING), ("_id", ASCENDING)])
            )
            return [_from_document(d) for d in cur]

        if session is None:
            raise RuntimeError("SQLAlchemy session required for sql backend")
        stmt = (
            select(Guess)
            .where(Guess.matchup_id == matchup_id)
            .order_by(Guess.created_at.asc(), Guess.id.asc())
        )
        return [_from_row(r) for r in session.scalars(stmt).all()]

    def list_for_participant(
        self,
        session: Session | None,
        participant_id: int,
        limit: int,
    ) -> Sequence[GuessRecord]:
        """A participant's guesses across matchups, newest first."""

        if get_db_backend() == "mongo":
            cur = (
                get_mongo_db()["guesses"]
                .find({"participantId": int(participant_id)})
                .sort([("createdAt", DESCENDING), ("_id", DESCENDING)])
                .limit(int(limit))
            )
            return [_from_document(d) for d in cur]

        if session is None:
            raise RuntimeError("SQLAlchemy session required for sql backend")
        stmt = (
            select(Guess)
            .where(Guess.participant_id == int(participant_id))
            .order_by(Guess.created_at.desc(), Guess.id.desc())
            .limit(int(limit))
        )
        return [_from_row(r) for r in session.scalars(stmt).all()]

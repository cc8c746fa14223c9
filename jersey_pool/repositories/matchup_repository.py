"""Repository layer for matchup persistence.

Configuration fields and the lock flag are written by separate field-level
upserts so neither operation clobbers the other.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from sqlalchemy.orm import Session

from jersey_pool.db import get_db_backend, get_mongo_db
from jersey_pool.models.matchup import Matchup


@dataclass(frozen=True)
class MatchupRecord:
    matchup_id: str
    home_team: str | None = None
    away_team: str | None = None
    spread: float | None = None
    jersey_sum_line: int | None = None
    kickoff: str | None = None
    locked: bool = False


def _from_document(doc: dict[str, Any]) -> MatchupRecord:
    spread = doc.get("spread")
    line = doc.get("jerseySumLine")
    return MatchupRecord(
        matchup_id=str(doc.get("matchupId")),
        home_team=doc.get("homeTeam"),
        away_team=doc.get("awayTeam"),
        spread=float(spread) if spread is not None else None,
        jersey_sum_line=int(line) if line is not None else None,
        kickoff=doc.get("kickoff"),
        locked=bool(doc.get("locked", False)),
    )


def _from_row(row: Matchup) -> MatchupRecord:
    return MatchupRecord(
        matchup_id=row.matchup_id,
        home_team=row.home_team,
        away_team=row.away_team,
        spread=row.spread,
        jersey_sum_line=row.jersey_sum_line,
        kickoff=row.kickoff,
        locked=bool(row.locked),
    )


class MatchupRepository:
    """Reads and field-level upserts for Matchup."""

    def get(self, session: Session | None, matchup_id: str) -> MatchupRecord | None:
        if get_db_backend() == "mongo":
            doc = get_mongo_db()["matchups"].find_one({"matchupId": matchup_id}, {"_id": 0})
            return _from_document(doc) if doc else None

        if session is None:
            raise RuntimeError("SQLAlchemy session required for sql backend")
        row = session.get(Matchup, matchup_id)
        return _from_row(row) if row is not None else None

    def set_configuration(
        self,
        session: Session | None,
        matchup_id: str,
        *,
        home_team: str,
        away_team: str,
        spread: float,
        jersey_sum_line: int,
        kickoff: str | None,
    ) -> None:
        if get_db_backend() == "mongo":
            get_mongo_db()["matchups"].update_one(
                {"matchupId": matchup_id},
                {
                    "$set": {
                        "matchupId": matchup_id,
                        "homeTeam": home_team,
                        "awayTeam": away_team,
                        "spread": float(spread),
                        "jerseySumLine": int(jersey_sum_line),
                        "kickoff": kickoff,
                    }
                },
                upsert=True,
            )
            return

        if session is None:
            raise RuntimeError("SQLAlchemy session required for sql backend")
        row = self._get_or_add(session, matchup_id)
        row.home_team = home_team
        row.away_team = away_team
        row.spread = float(spread)
        row.jersey_sum_line = int(jersey_sum_line)
        row.kickoff = kickoff
        session.flush()

    def set_lock(self, session: Session | None, matchup_id: str, locked: bool) -> None:
        if get_db_backend() == "mongo":
            get_mongo_db()["matchups"].update_one(
                {"matchupId": matchup_id},
                {"$set": {"matchupId": matchup_id, "locked": bool(locked)}},
                upsert=True,
            )
            return

        if session is None:
            raise RuntimeError("SQLAlchemy session required for sql backend")
        row = self._get_or_add(session, matchup_id)
        row.locked = bool(locked)
        session.flush()

    @staticmethod
    def _get_or_add(session: Session, matchup_id: str) -> Matchup:
        row = session.get(Matchup, matchup_id)
        if row is None:
            row = Matchup(matchup_id=matchup_id, locked=False)
            session.add(row)
        return row

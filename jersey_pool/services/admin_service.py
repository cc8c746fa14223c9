"""Admin use-cases: matchup configuration and lock state."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from sqlalchemy.orm import Session

from jersey_pool.errors import NotFoundError, UnauthorizedError
from jersey_pool.repositories.matchup_repository import MatchupRecord, MatchupRepository

logger = logging.getLogger(__name__)


def authorize(admin_ids: frozenset[int], admin_id: int, action: str) -> None:
    """Raise UnauthorizedError unless admin_id is on the allow-list.

    The rejected id is deliberately left out of the log line.
    """

    if admin_id not in admin_ids:
        logger.warning("Rejected unauthorized %s request", action)
        raise UnauthorizedError()


class AdminService:
    """Privileged matchup mutations plus the public lock/matchup reads."""

    def __init__(self, admin_ids: Iterable[int], repository: MatchupRepository | None = None) -> None:
        self._admin_ids = frozenset(int(i) for i in admin_ids)
        self._repo = repository or MatchupRepository()

    def set_configuration(
        self,
        session: Session | None,
        *,
        admin_id: int,
        matchup_id: str,
        home_team: str,
        away_team: str,
        spread: float,
        jersey_sum_line: int,
        kickoff: str | None = None,
    ) -> MatchupRecord:
        """Upsert the matchup's configuration fields, leaving the lock flag alone."""

        authorize(self._admin_ids, admin_id, "set matchup")

        self._repo.set_configuration(
            session,
            matchup_id,
            home_team=home_team,
            away_team=away_team,
            spread=spread,
            jersey_sum_line=jersey_sum_line,
            kickoff=kickoff,
        )
        logger.info("Matchup %s configured: %s at %s", matchup_id, away_team, home_team)

        return MatchupRecord(
            matchup_id=matchup_id,
            home_team=home_team,
            away_team=away_team,
            spread=float(spread),
            jersey_sum_line=int(jersey_sum_line),
            kickoff=kickoff,
        )

    def set_lock(self, session: Session | None, *, admin_id: int, matchup_id: str, locked: bool) -> bool:
        authorize(self._admin_ids, admin_id, "set lock")

        self._repo.set_lock(session, matchup_id, locked)
        logger.info("Matchup %s %s", matchup_id, "locked" if locked else "unlocked")
        return bool(locked)

    def get_lock(self, session: Session | None, matchup_id: str) -> bool:
        matchup = self._repo.get(session, matchup_id)
        return bool(matchup and matchup.locked)

    def get_matchup(self, session: Session | None, matchup_id: str) -> MatchupRecord:
        matchup = self._repo.get(session, matchup_id)
        if matchup is None:
            raise NotFoundError(message=f"Matchup {matchup_id} not found")
        return matchup

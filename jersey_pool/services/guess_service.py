"""Guess submission and history use-cases."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from datetime import datetime, timezone

from sqlalchemy.orm import Session

from jersey_pool.errors import DuplicateError, LockedError, ValidationError
from jersey_pool.repositories.guess_repository import GuessRecord, GuessRepository
from jersey_pool.repositories.matchup_repository import MatchupRepository
from jersey_pool.schemas.guess import MAX_ID

logger = logging.getLogger(__name__)

HISTORY_LIMIT = 50


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class GuessService:
    """Submit guesses and list a participant's past guesses."""

    def __init__(
        self,
        guesses: GuessRepository | None = None,
        matchups: MatchupRepository | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._guesses = guesses or GuessRepository()
        self._matchups = matchups or MatchupRepository()
        self._clock = clock or _utcnow

    def submit(
        self,
        session: Session | None,
        *,
        matchup_id: str,
        participant_id: int,
        jersey_sum_guess: int,
        winner_pick: str,
    ) -> GuessRecord:
        """Record a guess.

        A matchup id with no stored document counts as unlocked. The
        one-guess-per-participant rule is enforced by the storage layer's
        unique constraint, which the repository reports as DuplicateError.

        Raises:
            LockedError: the matchup is locked.
            DuplicateError: the participant already guessed on this matchup.
        """

        matchup = self._matchups.get(session, matchup_id)
        if matchup is not None and matchup.locked:
            logger.info("Rejected guess for locked matchup %s", matchup_id)
            raise LockedError()

        try:
            record = self._guesses.insert(
                session,
                matchup_id=matchup_id,
                participant_id=participant_id,
                jersey_sum_guess=jersey_sum_guess,
                winner_pick=winner_pick,
                created_at=self._clock(),
            )
        except DuplicateError:
            logger.info("Rejected duplicate guess for matchup %s participant %s", matchup_id, participant_id)
            raise

        logger.info("Guess %s recorded for matchup %s", record.id, matchup_id)
        return record

    def history(self, session: Session | None, participant_id: int) -> Sequence[GuessRecord]:
        valid = isinstance(participant_id, int) and not isinstance(participant_id, bool)
        if not valid or not 0 < participant_id <= MAX_ID:
            raise ValidationError(
                message="participantId must be a positive integer",
                details={"participantId": ["Must be a positive integer"]},
            )
        return self._guesses.list_for_participant(session, participant_id, limit=HISTORY_LIMIT)

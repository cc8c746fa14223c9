"""Settlement: pick the closest guess on the correct side.

Given every guess for a matchup in submission order, keep the ones whose
``winner_pick`` matches the real winner and choose the smallest
``abs(jersey_sum_guess - correct_total)``. On an equal diff the incumbent
(earlier) guess is kept, so the earliest submission wins ties.

Nothing is persisted; settling twice over the same guesses yields the same
winner.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from datetime import datetime

from sqlalchemy.orm import Session

from jersey_pool.errors import NotFoundError
from jersey_pool.repositories.guess_repository import GuessRecord, GuessRepository
from jersey_pool.services.admin_service import authorize

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SettledWinner:
    participant_id: int
    jersey_sum_guess: int
    winner_pick: str
    created_at: datetime
    diff: int


@dataclass(frozen=True)
class SettlementResult:
    matchup_id: str
    correct_winner: str
    correct_jersey_total: int
    total_guesses: int
    eligible_guesses: int
    winner: SettledWinner


def settle_guesses(
    matchup_id: str,
    guesses: Sequence[GuessRecord],
    correct_winner: str,
    correct_jersey_total: int,
) -> SettlementResult:
    """Pure winner selection over guesses already sorted oldest first.

    Raises:
        NotFoundError: there are no guesses, or none picked the correct side.
    """

    if not guesses:
        raise NotFoundError(message="No guesses found for this matchup.")

    eligible = [g for g in guesses if g.winner_pick == correct_winner]
    if not eligible:
        raise NotFoundError(message="No guesses on the correct side.")

    best = eligible[0]
    best_diff = abs(best.jersey_sum_guess - correct_jersey_total)
    for guess in eligible[1:]:
        diff = abs(guess.jersey_sum_guess - correct_jersey_total)
        if diff < best_diff:
            best, best_diff = guess, diff

    return SettlementResult(
        matchup_id=matchup_id,
        correct_winner=correct_winner,
        correct_jersey_total=correct_jersey_total,
        total_guesses=len(guesses),
        eligible_guesses=len(eligible),
        winner=SettledWinner(
            participant_id=best.participant_id,
            jersey_sum_guess=best.jersey_sum_guess,
            winner_pick=best.winner_pick,
            created_at=best.created_at,
            diff=best_diff,
        ),
    )


class SettlementService:
    """Admin-gated settlement of one matchup."""

    def __init__(self, admin_ids: Iterable[int], repository: GuessRepository | None = None) -> None:
        self._admin_ids = frozenset(int(i) for i in admin_ids)
        self._repo = repository or GuessRepository()

    def settle(
        self,
        session: Session | None,
        *,
        admin_id: int,
        matchup_id: str,
        correct_winner: str,
        correct_jersey_total: int,
    ) -> SettlementResult:
        authorize(self._admin_ids, admin_id, "settle")

        guesses = self._repo.list_for_matchup(session, matchup_id)
        result = settle_guesses(matchup_id, guesses, correct_winner, correct_jersey_total)

        logger.info(
            "Settled %s: participant %s wins (diff=%s, %s/%s eligible)",
            matchup_id,
            result.winner.participant_id,
            result.winner.diff,
            result.eligible_guesses,
            result.total_guesses,
        )
        return result

"""ORM models."""

from jersey_pool.models.guess import Guess
from jersey_pool.models.matchup import Matchup

__all__ = ["Guess", "Matchup"]

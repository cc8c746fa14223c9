"""Guess ORM model."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import BigInteger, DateTime, Index, Integer, SmallInteger, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from jersey_pool.models.base import Base


class Guess(Base):
    """One participant's guess for one matchup."""

    __tablename__ = "guesses"
    __table_args__ = (
        UniqueConstraint("matchup_id", "participant_id", name="uq_guess_matchup_participant"),
        Index("ix_guess_participant_created", "participant_id", "created_at"),
    )

    # Autoincrement id doubles as the insertion-order tie-break.
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    matchup_id: Mapped[str] = mapped_column(String(200), nullable=False, index=True)
    participant_id: Mapped[int] = mapped_column(BigInteger, nullable=False)
    jersey_sum_guess: Mapped[int] = mapped_column(SmallInteger, nullable=False)  # 0..9999
    winner_pick: Mapped[str] = mapped_column(String(8), nullable=False)  # home | away
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

"""Matchup ORM model.

A row can exist with only ``matchup_id`` and ``locked`` populated when an
admin locks a matchup before configuring it, so every configuration column is
nullable.
"""

from __future__ import annotations

from sqlalchemy import Boolean, Float, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from jersey_pool.models.base import Base


class Matchup(Base):
    __tablename__ = "matchups"

    matchup_id: Mapped[str] = mapped_column(String(200), primary_key=True)

    home_team: Mapped[str | None] = mapped_column(String(200), nullable=True)
    away_team: Mapped[str | None] = mapped_column(String(200), nullable=True)
    spread: Mapped[float | None] = mapped_column(Float, nullable=True)
    jersey_sum_line: Mapped[int | None] = mapped_column(Integer, nullable=True)
    kickoff: Mapped[str | None] = mapped_column(String(200), nullable=True)

    locked: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

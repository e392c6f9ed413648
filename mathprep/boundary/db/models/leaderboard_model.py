"""
Leaderboard ORM model.

Dependencies: sqlalchemy, mathprep.boundary.db.base
System role: Per-user, per-topic ranking statistics
"""

import uuid
from datetime import datetime

from sqlalchemy import DateTime, Float, ForeignKey, Integer, String, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from mathprep.boundary.db.base import Base, UUIDMixin, utc_now


class LeaderboardEntryModel(Base, UUIDMixin):
    """
    Aggregated statistics for one (user, division, topic).

    Everything except points is recomputed from practice attempts on each
    answer; points accumulate from completed sessions.
    """

    __tablename__ = "leaderboard"
    __table_args__ = (
        UniqueConstraint("user_id", "division", "topic", name="uq_leaderboard_user_division_topic"),
    )

    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False, index=True
    )
    username: Mapped[str] = mapped_column(String(255), nullable=False)
    grade_level: Mapped[str | None] = mapped_column(String(50), nullable=True)
    division: Mapped[str] = mapped_column(String(255), nullable=False)
    topic: Mapped[str] = mapped_column(String(255), nullable=False)
    average_score: Mapped[float] = mapped_column(Float, nullable=False, default=0)
    attempts: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    perfect_scores: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    questions_attempted: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    points: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    last_updated: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utc_now, onupdate=utc_now
    )

"""
Practice attempt and practice session ORM models.

Dependencies: sqlalchemy, mathprep.boundary.db.base
System role: Answer history and per-session progress persistence
"""

import enum
import uuid
from datetime import datetime

from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, String, Text, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from mathprep.boundary.db.base import Base, TimestampMixin, UUIDMixin, enum_column, utc_now


class SessionType(str, enum.Enum):
    PRACTICE = "practice"
    TEST = "test"


class PracticeAttemptModel(Base, UUIDMixin, TimestampMixin):
    """
    One submitted answer.

    division and topic are copied from the question so leaderboard
    aggregation never needs a join.
    """

    __tablename__ = "practice_attempts"

    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False, index=True
    )
    question_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("questions.id", ondelete="CASCADE"), nullable=False, index=True
    )
    user_answer: Mapped[str] = mapped_column(Text, nullable=False)
    is_correct: Mapped[bool] = mapped_column(Boolean, nullable=False)
    session_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    division: Mapped[str] = mapped_column(String(255), nullable=False)
    topic: Mapped[str] = mapped_column(String(255), nullable=False)


class PracticeSessionModel(Base, UUIDMixin, TimestampMixin):
    """
    Progress row for a practice session or graded test.

    Constraints:
        (user_id, session_id): one progress row per session
    """

    __tablename__ = "user_progress"
    __table_args__ = (UniqueConstraint("user_id", "session_id", name="uq_user_progress_user_session"),)

    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False, index=True
    )
    session_id: Mapped[str] = mapped_column(String(64), nullable=False)
    division: Mapped[str] = mapped_column(String(255), nullable=False)
    topic: Mapped[str] = mapped_column(String(255), nullable=False)
    grade_level: Mapped[str | None] = mapped_column(String(50), nullable=True)
    type: Mapped[SessionType] = mapped_column(
        enum_column(SessionType), nullable=False, default=SessionType.PRACTICE
    )
    score: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    total_questions: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    points: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    answer_streak: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    completed_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utc_now)

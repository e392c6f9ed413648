"""
Question flag ORM model.

Dependencies: sqlalchemy, mathprep.boundary.db.base
System role: User reports of broken questions and their admin review state
"""

import enum
import uuid
from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Text, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from mathprep.boundary.db.base import Base, TimestampMixin, UUIDMixin, enum_column


class FlagType(str, enum.Enum):
    INCORRECT_ANSWER = "incorrect_answer"
    WRONG_LATEX = "wrong_latex"
    TYPO = "typo"
    UNCLEAR_QUESTION = "unclear_question"
    DUPLICATE = "duplicate"
    OTHER = "other"


class FlagStatus(str, enum.Enum):
    """
    Review states.

    PENDING: Awaiting an admin
    REVIEWED: Seen, no decision yet
    RESOLVED: Question fixed
    DISMISSED: Report rejected
    """

    PENDING = "pending"
    REVIEWED = "reviewed"
    RESOLVED = "resolved"
    DISMISSED = "dismissed"


class QuestionFlagModel(Base, UUIDMixin, TimestampMixin):
    """
    A user's report against a question.

    Constraints:
        (question_id, user_id): one flag per user per question
    """

    __tablename__ = "question_flags"
    __table_args__ = (UniqueConstraint("question_id", "user_id", name="uq_question_flags_question_user"),)

    question_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("questions.id", ondelete="CASCADE"), nullable=False, index=True
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False
    )
    flag_type: Mapped[FlagType] = mapped_column(enum_column(FlagType), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    status: Mapped[FlagStatus] = mapped_column(
        enum_column(FlagStatus), nullable=False, default=FlagStatus.PENDING, index=True
    )
    admin_notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    reviewed_by: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("profiles.id", ondelete="SET NULL"), nullable=True
    )
    reviewed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

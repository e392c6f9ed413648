"""
Question ORM model.

Dependencies: sqlalchemy, mathprep.boundary.db.base
System role: Question bank persistence
"""

from sqlalchemy import JSON, CheckConstraint, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from mathprep.boundary.db.base import Base, TimestampMixin, UUIDMixin


class QuestionModel(Base, UUIDMixin, TimestampMixin):
    """
    Multiple-choice question.

    Attributes:
        question_text: Prompt (may contain LaTeX)
        options: Ordered list of option strings
        answer: Text of the correct option
        division: Competition division
        topic: Topic within the division
        difficulty: 1 (easiest) to 10
        level: Level gate for the question
        xp_reward: Base XP for answering
        accuracy_bonus: Extra XP for a correct answer
        stamina_bonus: Extra XP for extending an answer streak
    """

    __tablename__ = "questions"
    __table_args__ = (
        CheckConstraint("difficulty >= 1 AND difficulty <= 10", name="ck_questions_difficulty"),
    )

    question_text: Mapped[str] = mapped_column(Text, nullable=False)
    options: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    answer: Mapped[str] = mapped_column(Text, nullable=False)
    division: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    topic: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    difficulty: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    level: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    xp_reward: Mapped[int] = mapped_column(Integer, nullable=False, default=10)
    accuracy_bonus: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    stamina_bonus: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

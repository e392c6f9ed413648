"""
Practice attempt CRUD operations.

Dependencies: sqlalchemy, mathprep.boundary.db.models
System role: Answer history queries for adaptive selection, stats and leaderboard
"""

from typing import Sequence
from uuid import UUID

from sqlalchemy import case, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from mathprep.boundary.db.CRUD.base_crud import BaseCRUD
from mathprep.boundary.db.CRUD.question_crud import ALL_TOPICS
from mathprep.boundary.db.models.practice_model import PracticeAttemptModel


class PracticeAttemptCRUD(BaseCRUD[PracticeAttemptModel]):
    """CRUD operations for PracticeAttemptModel."""

    def __init__(self) -> None:
        super().__init__(PracticeAttemptModel)

    async def list_for_user(
        self,
        session: AsyncSession,
        user_id: UUID,
        division: str | None = None,
        topics: Sequence[str] | None = None,
        question_ids: Sequence[UUID] | None = None,
    ) -> Sequence[PracticeAttemptModel]:
        """
        A user's attempts in chronological order, optionally scoped.

        Args:
            session: Async database session
            user_id: Profile id
            division: Restrict to one division
            topics: Restrict to these topics ("All Topics" means any)
            question_ids: Restrict to these questions
        """
        stmt = select(PracticeAttemptModel).where(PracticeAttemptModel.user_id == user_id)
        if division:
            stmt = stmt.where(PracticeAttemptModel.division == division)
        if topics and ALL_TOPICS not in topics:
            stmt = stmt.where(PracticeAttemptModel.topic.in_(list(topics)))
        if question_ids is not None:
            stmt = stmt.where(PracticeAttemptModel.question_id.in_(list(question_ids)))
        stmt = stmt.order_by(PracticeAttemptModel.created_at, PracticeAttemptModel.id)
        result = await session.execute(stmt)
        return result.scalars().all()

    async def list_for_session(
        self,
        session: AsyncSession,
        user_id: UUID,
        session_id: str,
    ) -> Sequence[PracticeAttemptModel]:
        stmt = (
            select(PracticeAttemptModel)
            .where(
                PracticeAttemptModel.user_id == user_id,
                PracticeAttemptModel.session_id == session_id,
            )
            .order_by(PracticeAttemptModel.created_at, PracticeAttemptModel.id)
        )
        result = await session.execute(stmt)
        return result.scalars().all()

    async def list_for_scope(
        self,
        session: AsyncSession,
        user_id: UUID,
        division: str,
        topic: str,
    ) -> Sequence[PracticeAttemptModel]:
        """Attempts feeding one leaderboard row."""
        stmt = select(PracticeAttemptModel).where(
            PracticeAttemptModel.user_id == user_id,
            PracticeAttemptModel.division == division,
            PracticeAttemptModel.topic == topic,
        )
        result = await session.execute(stmt)
        return result.scalars().all()

    async def count_for_question_in_session(
        self,
        session: AsyncSession,
        user_id: UUID,
        session_id: str,
        question_id: UUID,
    ) -> int:
        stmt = select(func.count(PracticeAttemptModel.id)).where(
            PracticeAttemptModel.user_id == user_id,
            PracticeAttemptModel.session_id == session_id,
            PracticeAttemptModel.question_id == question_id,
        )
        result = await session.execute(stmt)
        return int(result.scalar_one())

    async def session_question_state(
        self,
        session: AsyncSession,
        user_id: UUID,
        session_id: str,
        question_id: UUID,
    ) -> tuple[int, bool]:
        """(attempts made, any of them correct) for one question in a session."""
        stmt = select(
            func.count(PracticeAttemptModel.id),
            func.coalesce(func.max(case((PracticeAttemptModel.is_correct, 1), else_=0)), 0),
        ).where(
            PracticeAttemptModel.user_id == user_id,
            PracticeAttemptModel.session_id == session_id,
            PracticeAttemptModel.question_id == question_id,
        )
        result = await session.execute(stmt)
        attempts, any_correct = result.one()
        return int(attempts), bool(any_correct)

    async def totals_for_user(self, session: AsyncSession, user_id: UUID) -> tuple[int, int]:
        """(questions answered, answered correctly) over all attempts."""
        stmt = select(
            func.count(PracticeAttemptModel.id),
            func.coalesce(func.sum(case((PracticeAttemptModel.is_correct, 1), else_=0)), 0),
        ).where(PracticeAttemptModel.user_id == user_id)
        result = await session.execute(stmt)
        total, correct = result.one()
        return int(total), int(correct)

    async def division_accuracy(self, session: AsyncSession, user_id: UUID) -> dict[str, tuple[int, int]]:
        """Per division: (correct, total) attempts."""
        stmt = (
            select(
                PracticeAttemptModel.division,
                func.coalesce(func.sum(case((PracticeAttemptModel.is_correct, 1), else_=0)), 0),
                func.count(PracticeAttemptModel.id),
            )
            .where(PracticeAttemptModel.user_id == user_id)
            .group_by(PracticeAttemptModel.division)
        )
        result = await session.execute(stmt)
        return {division: (int(correct), int(total)) for division, correct, total in result.all()}

    async def distinct_topic_count(self, session: AsyncSession, user_id: UUID) -> int:
        subquery = (
            select(PracticeAttemptModel.division, PracticeAttemptModel.topic)
            .where(PracticeAttemptModel.user_id == user_id)
            .distinct()
            .subquery()
        )
        result = await session.execute(select(func.count()).select_from(subquery))
        return int(result.scalar_one())

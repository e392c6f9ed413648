"""
Practice session progress CRUD operations.

Dependencies: sqlalchemy, mathprep.boundary.db.models
System role: Session progress rows for streaks, completion counts and history
"""

from datetime import datetime
from typing import Sequence
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from mathprep.boundary.db.CRUD.base_crud import BaseCRUD
from mathprep.boundary.db.models.practice_model import PracticeSessionModel, SessionType


class PracticeSessionCRUD(BaseCRUD[PracticeSessionModel]):
    """CRUD operations for PracticeSessionModel (table user_progress)."""

    def __init__(self) -> None:
        super().__init__(PracticeSessionModel)

    async def get_by_session_id(
        self,
        session: AsyncSession,
        user_id: UUID,
        session_id: str,
    ) -> PracticeSessionModel | None:
        stmt = select(PracticeSessionModel).where(
            PracticeSessionModel.user_id == user_id,
            PracticeSessionModel.session_id == session_id,
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def completion_times(
        self,
        session: AsyncSession,
        user_id: UUID,
        session_type: SessionType | None = SessionType.PRACTICE,
    ) -> list[datetime]:
        stmt = select(PracticeSessionModel.completed_at).where(PracticeSessionModel.user_id == user_id)
        if session_type is not None:
            stmt = stmt.where(PracticeSessionModel.type == session_type)
        result = await session.execute(stmt.order_by(PracticeSessionModel.completed_at))
        return list(result.scalars().all())

    async def count_completed(self, session: AsyncSession, user_id: UUID) -> int:
        """Practice sessions that have been scored (total_questions > 0)."""
        stmt = select(func.count(PracticeSessionModel.id)).where(
            PracticeSessionModel.user_id == user_id,
            PracticeSessionModel.type == SessionType.PRACTICE,
            PracticeSessionModel.total_questions > 0,
        )
        result = await session.execute(stmt)
        return int(result.scalar_one())

    async def count_topic_completions(
        self,
        session: AsyncSession,
        user_id: UUID,
        division: str,
        topic: str,
        exclude_session_id: str | None = None,
    ) -> int:
        stmt = select(func.count(PracticeSessionModel.id)).where(
            PracticeSessionModel.user_id == user_id,
            PracticeSessionModel.division == division,
            PracticeSessionModel.topic == topic,
            PracticeSessionModel.total_questions > 0,
        )
        if exclude_session_id is not None:
            stmt = stmt.where(PracticeSessionModel.session_id != exclude_session_id)
        result = await session.execute(stmt)
        return int(result.scalar_one())

    async def has_perfect_session(self, session: AsyncSession, user_id: UUID) -> bool:
        stmt = (
            select(PracticeSessionModel.id)
            .where(
                PracticeSessionModel.user_id == user_id,
                PracticeSessionModel.type == SessionType.PRACTICE,
                PracticeSessionModel.total_questions > 0,
                PracticeSessionModel.score == PracticeSessionModel.total_questions,
            )
            .limit(1)
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none() is not None

    async def list_for_user(
        self,
        session: AsyncSession,
        user_id: UUID,
        limit: int | None = None,
    ) -> Sequence[PracticeSessionModel]:
        stmt = (
            select(PracticeSessionModel)
            .where(PracticeSessionModel.user_id == user_id)
            .order_by(PracticeSessionModel.completed_at.desc())
        )
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await session.execute(stmt)
        return result.scalars().all()

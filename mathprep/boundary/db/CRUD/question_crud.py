"""
Question CRUD operations.

Dependencies: sqlalchemy, mathprep.boundary.db.models
System role: Question bank queries for catalogue, practice and tests
"""

from typing import Sequence

from sqlalchemy import insert, select
from sqlalchemy.ext.asyncio import AsyncSession

from mathprep.boundary.db.CRUD.base_crud import BaseCRUD
from mathprep.boundary.db.models.question_model import QuestionModel

ALL_TOPICS = "All Topics"


class QuestionCRUD(BaseCRUD[QuestionModel]):
    """CRUD operations for QuestionModel."""

    def __init__(self) -> None:
        super().__init__(QuestionModel)

    async def list_divisions(self, session: AsyncSession) -> list[str]:
        stmt = select(QuestionModel.division).distinct().order_by(QuestionModel.division)
        result = await session.execute(stmt)
        return list(result.scalars().all())

    async def list_topics(self, session: AsyncSession, division: str) -> list[str]:
        stmt = (
            select(QuestionModel.topic)
            .where(QuestionModel.division == division)
            .distinct()
            .order_by(QuestionModel.topic)
        )
        result = await session.execute(stmt)
        return list(result.scalars().all())

    async def query(
        self,
        session: AsyncSession,
        division: str | None = None,
        topics: Sequence[str] | None = None,
        min_difficulty: int | None = None,
        max_difficulty: int | None = None,
        limit: int | None = None,
    ) -> Sequence[QuestionModel]:
        """
        Filter questions, ordered by id.

        Args:
            session: Async database session
            division: Division to match, None for any
            topics: Topics to match; None, empty, or containing "All Topics" means any
            min_difficulty: Inclusive lower difficulty bound
            max_difficulty: Inclusive upper difficulty bound
            limit: Maximum number of questions

        Returns:
            Sequence of matching QuestionModels
        """
        stmt = select(QuestionModel)
        if division:
            stmt = stmt.where(QuestionModel.division == division)
        if topics and ALL_TOPICS not in topics:
            stmt = stmt.where(QuestionModel.topic.in_(list(topics)))
        if min_difficulty is not None:
            stmt = stmt.where(QuestionModel.difficulty >= min_difficulty)
        if max_difficulty is not None:
            stmt = stmt.where(QuestionModel.difficulty <= max_difficulty)
        stmt = stmt.order_by(QuestionModel.id)
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await session.execute(stmt)
        return result.scalars().all()

    async def get_many(self, session: AsyncSession, ids: Sequence) -> Sequence[QuestionModel]:
        if not ids:
            return []
        stmt = select(QuestionModel).where(QuestionModel.id.in_(list(ids)))
        result = await session.execute(stmt)
        return result.scalars().all()

    async def bulk_create(self, session: AsyncSession, rows: Sequence[dict]) -> int:
        """Insert normalized question rows in one statement; returns the row count."""
        if not rows:
            return 0
        await session.execute(insert(QuestionModel), list(rows))
        return len(rows)

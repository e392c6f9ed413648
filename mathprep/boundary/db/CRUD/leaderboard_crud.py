"""
Leaderboard CRUD operations.

Dependencies: sqlalchemy, mathprep.boundary.db.models
System role: Leaderboard row lookup, filtering and filter options
"""

from typing import Sequence
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from mathprep.boundary.db.CRUD.base_crud import BaseCRUD
from mathprep.boundary.db.models.leaderboard_model import LeaderboardEntryModel


class LeaderboardCRUD(BaseCRUD[LeaderboardEntryModel]):
    """CRUD operations for LeaderboardEntryModel."""

    def __init__(self) -> None:
        super().__init__(LeaderboardEntryModel)

    async def get_entry(
        self,
        session: AsyncSession,
        user_id: UUID,
        division: str,
        topic: str,
    ) -> LeaderboardEntryModel | None:
        stmt = select(LeaderboardEntryModel).where(
            LeaderboardEntryModel.user_id == user_id,
            LeaderboardEntryModel.division == division,
            LeaderboardEntryModel.topic == topic,
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def query(
        self,
        session: AsyncSession,
        grade_level: str | None = None,
        division: str | None = None,
        topic: str | None = None,
    ) -> Sequence[LeaderboardEntryModel]:
        """Filtered rows, unordered; ranking happens in core.leaderboard."""
        stmt = select(LeaderboardEntryModel)
        if grade_level:
            stmt = stmt.where(LeaderboardEntryModel.grade_level == grade_level)
        if division:
            stmt = stmt.where(LeaderboardEntryModel.division == division)
        if topic:
            stmt = stmt.where(LeaderboardEntryModel.topic == topic)
        result = await session.execute(stmt)
        return result.scalars().all()

    async def distinct_values(self, session: AsyncSession, column_name: str) -> list[str]:
        column = getattr(LeaderboardEntryModel, column_name)
        stmt = select(column).where(column.is_not(None)).distinct().order_by(column)
        result = await session.execute(stmt)
        return list(result.scalars().all())

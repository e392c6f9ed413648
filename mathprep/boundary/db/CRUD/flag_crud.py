"""
Question flag CRUD operations.

Dependencies: sqlalchemy, mathprep.boundary.db.models
System role: Flag lookup and admin review listings
"""

from typing import Sequence
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from mathprep.boundary.db.CRUD.base_crud import BaseCRUD
from mathprep.boundary.db.models.flag_model import FlagStatus, FlagType, QuestionFlagModel


class QuestionFlagCRUD(BaseCRUD[QuestionFlagModel]):
    """CRUD operations for QuestionFlagModel."""

    def __init__(self) -> None:
        super().__init__(QuestionFlagModel)

    async def get_for_user(
        self,
        session: AsyncSession,
        question_id: UUID,
        user_id: UUID,
    ) -> QuestionFlagModel | None:
        stmt = select(QuestionFlagModel).where(
            QuestionFlagModel.question_id == question_id,
            QuestionFlagModel.user_id == user_id,
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_filtered(
        self,
        session: AsyncSession,
        status: FlagStatus | None = None,
        flag_type: FlagType | None = None,
        limit: int | None = None,
    ) -> Sequence[QuestionFlagModel]:
        """
        Flags newest first, optionally filtered.

        Args:
            session: Async database session
            status: Review state to match
            flag_type: Flag type to match
            limit: Maximum number of flags
        """
        stmt = select(QuestionFlagModel)
        if status is not None:
            stmt = stmt.where(QuestionFlagModel.status == status)
        if flag_type is not None:
            stmt = stmt.where(QuestionFlagModel.flag_type == flag_type)
        stmt = stmt.order_by(QuestionFlagModel.created_at.desc())
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await session.execute(stmt)
        return result.scalars().all()

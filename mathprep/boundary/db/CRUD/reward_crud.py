"""
Badge and achievement CRUD operations.

Dependencies: sqlalchemy, mathprep.boundary.db.models
System role: Reward catalogue and earned-reward queries
"""

from typing import Sequence
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from mathprep.boundary.db.CRUD.base_crud import BaseCRUD
from mathprep.boundary.db.models.reward_model import BadgeModel, UserAchievementModel, UserBadgeModel


class BadgeCRUD(BaseCRUD[BadgeModel]):
    def __init__(self) -> None:
        super().__init__(BadgeModel)

    async def get_by_name(self, session: AsyncSession, name: str) -> BadgeModel | None:
        result = await session.execute(select(BadgeModel).where(BadgeModel.name == name))
        return result.scalar_one_or_none()

    async def list_catalog(self, session: AsyncSession) -> Sequence[BadgeModel]:
        result = await session.execute(select(BadgeModel).order_by(BadgeModel.name))
        return result.scalars().all()


class UserBadgeCRUD(BaseCRUD[UserBadgeModel]):
    def __init__(self) -> None:
        super().__init__(UserBadgeModel)

    async def earned_badge_ids(self, session: AsyncSession, user_id: UUID) -> set[UUID]:
        stmt = select(UserBadgeModel.badge_id).where(UserBadgeModel.user_id == user_id)
        result = await session.execute(stmt)
        return set(result.scalars().all())

    async def list_with_badges(
        self,
        session: AsyncSession,
        user_id: UUID,
    ) -> list[tuple[UserBadgeModel, BadgeModel]]:
        """Earned badges joined to their catalogue rows, newest first."""
        stmt = (
            select(UserBadgeModel, BadgeModel)
            .join(BadgeModel, BadgeModel.id == UserBadgeModel.badge_id)
            .where(UserBadgeModel.user_id == user_id)
            .order_by(UserBadgeModel.earned_at.desc())
        )
        result = await session.execute(stmt)
        return [(row[0], row[1]) for row in result.all()]


class UserAchievementCRUD(BaseCRUD[UserAchievementModel]):
    def __init__(self) -> None:
        super().__init__(UserAchievementModel)

    async def list_for_user(self, session: AsyncSession, user_id: UUID) -> Sequence[UserAchievementModel]:
        stmt = (
            select(UserAchievementModel)
            .where(UserAchievementModel.user_id == user_id)
            .order_by(UserAchievementModel.unlocked_at.desc())
        )
        result = await session.execute(stmt)
        return result.scalars().all()

    async def unlocked_types(self, session: AsyncSession, user_id: UUID) -> set[str]:
        stmt = select(UserAchievementModel.achievement_type).where(UserAchievementModel.user_id == user_id)
        result = await session.execute(stmt)
        return set(result.scalars().all())

"""
Profile CRUD operations.

Dependencies: sqlalchemy, mathprep.boundary.db.models
System role: Profile lookups for identity, search and admin listings
"""

from typing import Sequence
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from mathprep.boundary.db.CRUD.base_crud import BaseCRUD
from mathprep.boundary.db.models.profile_model import ProfileModel, UserRole


class ProfileCRUD(BaseCRUD[ProfileModel]):
    """CRUD operations for ProfileModel."""

    def __init__(self) -> None:
        super().__init__(ProfileModel)

    async def get_by_username(self, session: AsyncSession, username: str) -> ProfileModel | None:
        stmt = select(ProfileModel).where(ProfileModel.username == username)
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def search_by_username_prefix(
        self,
        session: AsyncSession,
        prefix: str,
        exclude_id: UUID | None = None,
        limit: int = 20,
    ) -> Sequence[ProfileModel]:
        """
        Case-insensitive username prefix search.

        Args:
            session: Async database session
            prefix: Leading characters of the username
            exclude_id: Profile to leave out (usually the caller)
            limit: Maximum number of profiles
        """
        escaped = prefix.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
        stmt = (
            select(ProfileModel)
            .where(ProfileModel.username.ilike(f"{escaped}%", escape="\\"))
            .order_by(ProfileModel.username)
            .limit(limit)
        )
        if exclude_id is not None:
            stmt = stmt.where(ProfileModel.id != exclude_id)
        result = await session.execute(stmt)
        return result.scalars().all()

    async def list_newest(self, session: AsyncSession, limit: int | None = None) -> Sequence[ProfileModel]:
        stmt = select(ProfileModel).order_by(ProfileModel.created_at.desc())
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await session.execute(stmt)
        return result.scalars().all()

    async def list_by_role(self, session: AsyncSession, role: UserRole) -> Sequence[ProfileModel]:
        stmt = select(ProfileModel).where(ProfileModel.role == role).order_by(ProfileModel.username)
        result = await session.execute(stmt)
        return result.scalars().all()

    async def adjust_friend_count(self, session: AsyncSession, ids: Sequence[UUID], delta: int) -> None:
        """Add delta to friend_count for each profile, never going below zero."""
        for profile_id in ids:
            profile = await self.get_by_id(session, profile_id)
            if profile is not None:
                profile.friend_count = max(0, profile.friend_count + delta)
        await session.flush()

    async def add_points(self, session: AsyncSession, id: UUID, points: int) -> ProfileModel | None:
        profile = await self.get_by_id(session, id)
        if profile is None:
            return None
        profile.total_points += points
        await session.flush()
        return profile

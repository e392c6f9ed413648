"""
Friend relationship CRUD operations.

Dependencies: sqlalchemy, mathprep.boundary.db.models
System role: Friendship and friend-request queries
"""

from typing import Sequence
from uuid import UUID

from sqlalchemy import and_, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from mathprep.boundary.db.CRUD.base_crud import BaseCRUD
from mathprep.boundary.db.models.friend_model import FriendRelationshipModel, FriendStatus


def _between(a: UUID, b: UUID):
    return or_(
        and_(FriendRelationshipModel.requester_id == a, FriendRelationshipModel.recipient_id == b),
        and_(FriendRelationshipModel.requester_id == b, FriendRelationshipModel.recipient_id == a),
    )


class FriendRelationshipCRUD(BaseCRUD[FriendRelationshipModel]):
    """CRUD operations for FriendRelationshipModel."""

    def __init__(self) -> None:
        super().__init__(FriendRelationshipModel)

    async def get_active_between(
        self,
        session: AsyncSession,
        a: UUID,
        b: UUID,
    ) -> FriendRelationshipModel | None:
        """Pending or accepted relationship in either direction."""
        stmt = select(FriendRelationshipModel).where(
            _between(a, b),
            FriendRelationshipModel.status.in_([FriendStatus.PENDING, FriendStatus.ACCEPTED]),
        )
        result = await session.execute(stmt.limit(1))
        return result.scalar_one_or_none()

    async def list_accepted(self, session: AsyncSession, user_id: UUID) -> Sequence[FriendRelationshipModel]:
        stmt = (
            select(FriendRelationshipModel)
            .where(
                or_(
                    FriendRelationshipModel.requester_id == user_id,
                    FriendRelationshipModel.recipient_id == user_id,
                ),
                FriendRelationshipModel.status == FriendStatus.ACCEPTED,
            )
            .order_by(FriendRelationshipModel.created_at.desc())
        )
        result = await session.execute(stmt)
        return result.scalars().all()

    async def list_pending(
        self,
        session: AsyncSession,
        user_id: UUID,
        incoming: bool,
    ) -> Sequence[FriendRelationshipModel]:
        """Pending requests received (incoming=True) or sent by the user."""
        column = FriendRelationshipModel.recipient_id if incoming else FriendRelationshipModel.requester_id
        stmt = (
            select(FriendRelationshipModel)
            .where(column == user_id, FriendRelationshipModel.status == FriendStatus.PENDING)
            .order_by(FriendRelationshipModel.created_at.desc())
        )
        result = await session.execute(stmt)
        return result.scalars().all()

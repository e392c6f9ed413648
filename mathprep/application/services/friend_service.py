"""
Friend service orchestrator.

Dependencies: mathprep.boundary.db.CRUD
System role: Friend requests, friendships and user search
"""

import logging
from typing import Sequence
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from mathprep.boundary.db.CRUD import friend_crud, profile_crud
from mathprep.boundary.db.models import FriendRelationshipModel, FriendStatus, ProfileModel
from mathprep.core.exceptions import ConflictError, NotFoundError, PermissionDeniedError, ValidationError

logger = logging.getLogger(__name__)


def friend_profile_to_dict(profile: ProfileModel) -> dict:
    return {
        "id": profile.id,
        "username": profile.username,
        "grade_level": profile.grade_level,
        "level": profile.level,
        "total_points": profile.total_points,
    }


class FriendService:
    """Friend service orchestrator."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def _request_to_dict(self, relationship: FriendRelationshipModel, viewer_id: UUID) -> dict:
        other_id = (
            relationship.recipient_id if relationship.requester_id == viewer_id else relationship.requester_id
        )
        other = await profile_crud.get_by_id(self.db, other_id)
        return {
            "id": relationship.id,
            "requester_id": relationship.requester_id,
            "recipient_id": relationship.recipient_id,
            "status": relationship.status.value,
            "created_at": relationship.created_at,
            "other_user": friend_profile_to_dict(other) if other else None,
        }

    async def _to_dicts(self, rows: Sequence[FriendRelationshipModel], viewer_id: UUID) -> list[dict]:
        return [await self._request_to_dict(row, viewer_id) for row in rows]

    async def send_request(self, requester_id: UUID, recipient_id: UUID) -> dict:
        """
        Send a friend request.

        Raises:
            ValidationError: Request to self
            NotFoundError: Unknown recipient
            ConflictError: Already friends or a request is pending
        """
        if requester_id == recipient_id:
            raise ValidationError("Cannot send a friend request to yourself", field="recipient_id")
        if not await profile_crud.exists(self.db, recipient_id):
            raise NotFoundError("Profile", recipient_id)

        existing = await friend_crud.get_active_between(self.db, requester_id, recipient_id)
        if existing is not None:
            message = (
                "Already friends" if existing.status == FriendStatus.ACCEPTED else "Friend request already pending"
            )
            raise ConflictError(message, details={"relationship_id": str(existing.id)})

        relationship = await friend_crud.create(
            self.db, requester_id=requester_id, recipient_id=recipient_id, status=FriendStatus.PENDING
        )
        await self.db.commit()

        logger.info(
            "Friend request sent",
            extra={"requester_id": str(requester_id), "recipient_id": str(recipient_id)},
        )
        return await self._request_to_dict(relationship, requester_id)

    async def respond(self, user_id: UUID, request_id: UUID, accept: bool) -> dict:
        """
        Accept or reject a pending request addressed to the caller.

        Accepting increments both profiles' friend_count.
        """
        relationship = await friend_crud.get_by_id(self.db, request_id)
        if relationship is None:
            raise NotFoundError("Friend request", request_id)
        if relationship.recipient_id != user_id:
            raise PermissionDeniedError("Only the recipient can respond to a friend request")
        if relationship.status != FriendStatus.PENDING:
            raise ConflictError("Friend request is no longer pending", details={"status": relationship.status.value})

        relationship.status = FriendStatus.ACCEPTED if accept else FriendStatus.REJECTED
        if accept:
            await profile_crud.adjust_friend_count(
                self.db, [relationship.requester_id, relationship.recipient_id], 1
            )
        await self.db.flush()
        await self.db.commit()

        logger.info(
            "Friend request answered",
            extra={"request_id": str(request_id), "status": relationship.status.value},
        )
        return await self._request_to_dict(relationship, user_id)

    async def list_friends(self, user_id: UUID) -> list[dict]:
        rows = await friend_crud.list_accepted(self.db, user_id)
        friends = []
        for row in rows:
            other_id = row.recipient_id if row.requester_id == user_id else row.requester_id
            other = await profile_crud.get_by_id(self.db, other_id)
            if other is not None:
                friends.append(friend_profile_to_dict(other))
        return friends

    async def list_incoming(self, user_id: UUID) -> list[dict]:
        return await self._to_dicts(await friend_crud.list_pending(self.db, user_id, incoming=True), user_id)

    async def list_outgoing(self, user_id: UUID) -> list[dict]:
        return await self._to_dicts(await friend_crud.list_pending(self.db, user_id, incoming=False), user_id)

    async def remove_friend(self, user_id: UUID, friend_id: UUID) -> None:
        relationship = await friend_crud.get_active_between(self.db, user_id, friend_id)
        if relationship is None or relationship.status != FriendStatus.ACCEPTED:
            raise NotFoundError("Friendship", friend_id)

        await friend_crud.delete_by_id(self.db, relationship.id)
        await profile_crud.adjust_friend_count(self.db, [user_id, friend_id], -1)
        await self.db.commit()

        logger.info("Friend removed", extra={"user_id": str(user_id), "friend_id": str(friend_id)})

    async def search_users(self, user_id: UUID, query: str, limit: int = 20) -> list[dict]:
        query = query.strip()
        if not query:
            return []
        profiles = await profile_crud.search_by_username_prefix(self.db, query, exclude_id=user_id, limit=limit)
        return [friend_profile_to_dict(p) for p in profiles]

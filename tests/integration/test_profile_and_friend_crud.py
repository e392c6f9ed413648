"""
Test suite for profile and friend relationship CRUD.

System role: Verification of username search, counters and friendship lookups
"""

import uuid

import pytest

from mathprep.boundary.db.CRUD import friend_crud, profile_crud
from mathprep.boundary.db.models import FriendStatus, UserRole


class TestProfileCRUD:
    @pytest.mark.asyncio
    async def test_prefix_search_is_case_insensitive_and_escaped(self, test_async_db, make_profile) -> None:
        # Arrange
        caller = await make_profile("alice")
        await make_profile("Alicia")
        await make_profile("al_x")
        await make_profile("bob")

        # Act
        found = await profile_crud.search_by_username_prefix(test_async_db, "ali", exclude_id=caller.id)
        underscored = await profile_crud.search_by_username_prefix(test_async_db, "al_")

        # Assert
        assert [p.username for p in found] == ["Alicia"]
        assert [p.username for p in underscored] == ["al_x"]

    @pytest.mark.asyncio
    async def test_friend_count_never_negative(self, test_async_db, make_profile) -> None:
        # Arrange
        profile = await make_profile()

        # Act
        await profile_crud.adjust_friend_count(test_async_db, [profile.id], -1)

        # Assert
        assert profile.friend_count == 0

    @pytest.mark.asyncio
    async def test_add_points(self, test_async_db, make_profile) -> None:
        # Arrange
        profile = await make_profile(total_points=5)

        # Act
        updated = await profile_crud.add_points(test_async_db, profile.id, 20)
        missing = await profile_crud.add_points(test_async_db, uuid.uuid4(), 20)

        # Assert
        assert updated.total_points == 25
        assert missing is None

    @pytest.mark.asyncio
    async def test_list_by_role(self, test_async_db, make_profile) -> None:
        # Arrange
        await make_profile("zed", role=UserRole.ADMIN)
        await make_profile("amy")

        # Act
        admins = await profile_crud.list_by_role(test_async_db, UserRole.ADMIN)

        # Assert
        assert [p.username for p in admins] == ["zed"]


class TestFriendRelationshipCRUD:
    @pytest.mark.asyncio
    async def test_active_relationship_found_in_either_direction(self, test_async_db, make_profile) -> None:
        # Arrange
        a = await make_profile()
        b = await make_profile()
        await friend_crud.create(test_async_db, requester_id=a.id, recipient_id=b.id)

        # Act
        forward = await friend_crud.get_active_between(test_async_db, a.id, b.id)
        reverse = await friend_crud.get_active_between(test_async_db, b.id, a.id)

        # Assert
        assert forward is not None
        assert reverse is not None
        assert forward.status == FriendStatus.PENDING

    @pytest.mark.asyncio
    async def test_rejected_relationship_is_not_active(self, test_async_db, make_profile) -> None:
        # Arrange
        a = await make_profile()
        b = await make_profile()
        await friend_crud.create(
            test_async_db, requester_id=a.id, recipient_id=b.id, status=FriendStatus.REJECTED
        )

        # Act / Assert
        assert await friend_crud.get_active_between(test_async_db, a.id, b.id) is None

    @pytest.mark.asyncio
    async def test_pending_lists_split_by_direction(self, test_async_db, make_profile) -> None:
        # Arrange
        a = await make_profile()
        b = await make_profile()
        await friend_crud.create(test_async_db, requester_id=a.id, recipient_id=b.id)

        # Act
        incoming_b = await friend_crud.list_pending(test_async_db, b.id, incoming=True)
        outgoing_b = await friend_crud.list_pending(test_async_db, b.id, incoming=False)
        outgoing_a = await friend_crud.list_pending(test_async_db, a.id, incoming=False)

        # Assert
        assert len(incoming_b) == 1
        assert outgoing_b == []
        assert len(outgoing_a) == 1

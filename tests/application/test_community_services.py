"""
Test suite for flag, friend, leaderboard, reward and admin services.

System role: Verification of community and administration use cases
"""

import uuid
from datetime import datetime, timezone

import pytest

from mathprep.application.services.admin_service import AdminService
from mathprep.application.services.flag_service import FlagService
from mathprep.application.services.friend_service import FriendService
from mathprep.application.services.leaderboard_service import LeaderboardService
from mathprep.application.services.reward_service import RewardService
from mathprep.boundary.db.CRUD import achievement_crud, badge_crud, leaderboard_crud, user_badge_crud
from mathprep.boundary.db.models import FlagStatus, FlagType, UserRole
from mathprep.core.exceptions import (
    ConflictError,
    NotFoundError,
    PermissionDeniedError,
    ValidationError,
)


class TestFlagService:
    @pytest.mark.asyncio
    async def test_flag_then_duplicate(self, test_async_db, make_profile, make_question) -> None:
        # Arrange
        user = await make_profile()
        question = await make_question()
        service = FlagService(test_async_db)

        # Act
        flag = await service.flag_question(user.id, question.id, FlagType.TYPO, "  missing bracket ")

        # Assert
        assert flag["status"] == FlagStatus.PENDING
        assert flag["description"] == "missing bracket"
        with pytest.raises(ConflictError):
            await service.flag_question(user.id, question.id, FlagType.OTHER)

    @pytest.mark.asyncio
    async def test_flag_unknown_question(self, test_async_db, make_profile) -> None:
        user = await make_profile()

        with pytest.raises(NotFoundError):
            await FlagService(test_async_db).flag_question(user.id, uuid.uuid4(), FlagType.TYPO)

    @pytest.mark.asyncio
    async def test_review_and_filter(self, test_async_db, make_profile, make_question) -> None:
        # Arrange
        user = await make_profile()
        admin = await make_profile(role=UserRole.ADMIN)
        first = await make_question()
        second = await make_question()
        service = FlagService(test_async_db)
        reviewed = await service.flag_question(user.id, first.id, FlagType.INCORRECT_ANSWER)
        await service.flag_question(user.id, second.id, FlagType.TYPO)

        # Act
        result = await service.review_flag(reviewed["id"], admin.id, FlagStatus.RESOLVED, "fixed")
        pending = await service.list_flags(status=FlagStatus.PENDING)

        # Assert
        assert result["status"] == FlagStatus.RESOLVED
        assert result["reviewed_by"] == admin.id
        assert result["admin_notes"] == "fixed"
        assert result["reviewed_at"] is not None
        assert [f["question_id"] for f in pending] == [second.id]

    @pytest.mark.asyncio
    async def test_edit_flagged_question(self, test_async_db, make_profile, make_question) -> None:
        # Arrange
        user = await make_profile()
        question = await make_question()
        service = FlagService(test_async_db)
        flag = await service.flag_question(user.id, question.id, FlagType.INCORRECT_ANSWER)

        # Act
        updated = await service.edit_flagged_question(flag["id"], answer="C")

        # Assert
        assert updated["answer"] == "5"

    @pytest.mark.asyncio
    async def test_review_unknown_flag(self, test_async_db) -> None:
        with pytest.raises(NotFoundError):
            await FlagService(test_async_db).review_flag(uuid.uuid4(), uuid.uuid4(), FlagStatus.DISMISSED)


class TestFriendService:
    @pytest.mark.asyncio
    async def test_request_accept_and_remove(self, test_async_db, make_profile) -> None:
        # Arrange
        alice = await make_profile("alice")
        bob = await make_profile("bob")
        service = FriendService(test_async_db)

        # Act
        request = await service.send_request(alice.id, bob.id)
        incoming = await service.list_incoming(bob.id)
        accepted = await service.respond(bob.id, request["id"], accept=True)

        # Assert
        assert request["status"] == "pending"
        assert request["other_user"]["username"] == "bob"
        assert [r["id"] for r in incoming] == [request["id"]]
        assert accepted["status"] == "accepted"
        assert (alice.friend_count, bob.friend_count) == (1, 1)
        assert [f["username"] for f in await service.list_friends(alice.id)] == ["bob"]

        # Act
        await service.remove_friend(bob.id, alice.id)

        # Assert
        assert (alice.friend_count, bob.friend_count) == (0, 0)
        assert await service.list_friends(alice.id) == []
        with pytest.raises(NotFoundError):
            await service.remove_friend(bob.id, alice.id)

    @pytest.mark.asyncio
    async def test_request_conflicts(self, test_async_db, make_profile) -> None:
        # Arrange
        alice = await make_profile()
        bob = await make_profile()
        service = FriendService(test_async_db)
        await service.send_request(alice.id, bob.id)

        # Act / Assert
        with pytest.raises(ConflictError, match="pending"):
            await service.send_request(bob.id, alice.id)
        with pytest.raises(ValidationError):
            await service.send_request(alice.id, alice.id)
        with pytest.raises(NotFoundError):
            await service.send_request(alice.id, uuid.uuid4())

    @pytest.mark.asyncio
    async def test_only_recipient_can_respond_once(self, test_async_db, make_profile) -> None:
        # Arrange
        alice = await make_profile()
        bob = await make_profile()
        service = FriendService(test_async_db)
        request = await service.send_request(alice.id, bob.id)

        # Act / Assert
        with pytest.raises(PermissionDeniedError):
            await service.respond(alice.id, request["id"], accept=True)
        rejected = await service.respond(bob.id, request["id"], accept=False)
        assert rejected["status"] == "rejected"
        with pytest.raises(ConflictError):
            await service.respond(bob.id, request["id"], accept=True)

    @pytest.mark.asyncio
    async def test_search_excludes_caller(self, test_async_db, make_profile) -> None:
        # Arrange
        caller = await make_profile("sam")
        await make_profile("samira")

        # Act
        found = await FriendService(test_async_db).search_users(caller.id, "SAM")

        # Assert
        assert [p["username"] for p in found] == ["samira"]
        assert await FriendService(test_async_db).search_users(caller.id, "   ") == []


class TestLeaderboardService:
    @pytest.mark.asyncio
    async def test_ranked_and_filtered(self, test_async_db, make_profile) -> None:
        # Arrange
        users = [await make_profile(name) for name in ("ana", "ben", "cy")]
        rows = [
            (users[0], "6th", 80.0, 10, 100),
            (users[1], "6th", 95.0, 4, 40),
            (users[2], "7th", 99.0, 2, 10),
        ]
        for user, grade, average, attempts, points in rows:
            await leaderboard_crud.create(
                test_async_db,
                user_id=user.id,
                username=user.username,
                grade_level=grade,
                division="Algebra",
                topic="Lines",
                average_score=average,
                attempts=attempts,
                points=points,
            )
        service = LeaderboardService(test_async_db)

        # Act
        by_score = await service.get_leaderboard(grade_level="6th")
        by_points = await service.get_leaderboard(order_by="points", limit=2)
        filters = await service.get_filter_options()

        # Assert
        assert [(r["rank"], r["username"]) for r in by_score] == [(1, "ben"), (2, "ana")]
        assert [r["username"] for r in by_points] == ["ana", "ben"]
        assert filters == {"divisions": ["Algebra"], "topics": ["Lines"], "grade_levels": ["6th", "7th"]}

    @pytest.mark.asyncio
    async def test_rejects_unknown_order(self, test_async_db) -> None:
        with pytest.raises(ValidationError):
            await LeaderboardService(test_async_db).get_leaderboard(order_by="username")


class TestRewardService:
    @pytest.mark.asyncio
    async def test_lists_badges_and_achievement_stats(self, test_async_db, make_profile) -> None:
        # Arrange
        user = await make_profile()
        badge = await badge_crud.create(
            test_async_db, name="Week Warrior", description="7 days", icon="🔥",
            requirements={"type": "streak", "days": 7},
        )
        await user_badge_crud.create(test_async_db, user_id=user.id, badge_id=badge.id)
        await achievement_crud.create(
            test_async_db,
            user_id=user.id,
            achievement_type="first_practice",
            achievement_name="First Steps",
            description="Complete your first practice session",
            points_awarded=10,
            icon="🎯",
            unlocked_at=datetime(2024, 3, 1, tzinfo=timezone.utc),
        )
        await test_async_db.commit()
        service = RewardService(test_async_db)

        # Act
        badges = await service.list_user_badges(user.id)
        catalog = await service.list_badge_catalog()
        achievements = await service.list_achievements(user.id)

        # Assert
        assert [b["badge"]["name"] for b in badges] == ["Week Warrior"]
        assert catalog[0]["requirements"] == {"type": "streak", "days": 7}
        assert achievements["stats"] == {
            "total_achievements": 1,
            "total_points_earned": 10,
            "completion_percentage": 20,
        }


class TestAdminService:
    @pytest.mark.asyncio
    async def test_promote_and_list(self, test_async_db, make_profile) -> None:
        # Arrange
        admin = await make_profile("root", role=UserRole.ADMIN)
        user = await make_profile("pupil")
        service = AdminService(test_async_db)

        # Act
        promoted = await service.update_role(admin.id, user.id, UserRole.ADMIN)

        # Assert
        assert promoted["role"] == UserRole.ADMIN
        assert await service.is_admin(user.id) is True
        assert [a["username"] for a in await service.list_admins()] == ["pupil", "root"]
        assert len(await service.list_users()) == 2

    @pytest.mark.asyncio
    async def test_admin_cannot_demote_self(self, test_async_db, make_profile) -> None:
        admin = await make_profile(role=UserRole.ADMIN)

        with pytest.raises(ValidationError):
            await AdminService(test_async_db).update_role(admin.id, admin.id, UserRole.USER)

    @pytest.mark.asyncio
    async def test_unknown_user(self, test_async_db, make_profile) -> None:
        admin = await make_profile(role=UserRole.ADMIN)

        with pytest.raises(NotFoundError):
            await AdminService(test_async_db).update_role(admin.id, uuid.uuid4(), UserRole.ADMIN)

    @pytest.mark.asyncio
    async def test_is_admin_for_unknown_user(self, test_async_db) -> None:
        assert await AdminService(test_async_db).is_admin(uuid.uuid4()) is False

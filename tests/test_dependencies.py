"""
Test suite for dependency injection container.

Tests identity header parsing, the admin gate and the per-request
service factories.

System role: Verification of DI container
"""

import uuid
from unittest.mock import AsyncMock

import pytest
from fastapi import HTTPException
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.requests import Request

from mathprep.api.deps import (
    get_admin_service,
    get_current_user_id,
    get_flag_service,
    get_friend_service,
    get_leaderboard_service,
    get_practice_service,
    get_profile_service,
    get_question_service,
    get_reward_service,
    get_settings_dependency,
    get_test_service,
    require_admin,
)
from mathprep.api.deps.dependencies import get_caller_metadata
from mathprep.application.services import (
    AdminService,
    FlagService,
    FriendService,
    LeaderboardService,
    PracticeService,
    ProfileService,
    QuestionService,
    RewardService,
    TestService,
)
from mathprep.configs import Settings


def make_request(headers: dict[str, str]) -> Request:
    raw = [(k.lower().encode(), v.encode()) for k, v in headers.items()]
    return Request({"type": "http", "method": "GET", "path": "/", "headers": raw})


@pytest.fixture
def settings() -> Settings:
    return Settings()


@pytest.fixture
def mock_db_session() -> AsyncSession:
    """Provide mock async database session."""
    return AsyncMock(spec=AsyncSession)


class TestGetCurrentUserId:
    """Test suite for the identity header dependency."""

    def test_returns_uuid_from_header(self, settings: Settings) -> None:
        # Arrange
        user_id = uuid.uuid4()

        # Act
        result = get_current_user_id(make_request({"X-User-ID": str(user_id)}), settings)

        # Assert
        assert result == user_id

    def test_missing_header_is_unauthorized(self, settings: Settings) -> None:
        with pytest.raises(HTTPException) as exc_info:
            get_current_user_id(make_request({}), settings)

        assert exc_info.value.status_code == 401

    def test_malformed_header_is_unauthorized(self, settings: Settings) -> None:
        with pytest.raises(HTTPException) as exc_info:
            get_current_user_id(make_request({"X-User-ID": "not-a-uuid"}), settings)

        assert exc_info.value.status_code == 401
        assert exc_info.value.detail == "Invalid user id"


def test_caller_metadata_reads_optional_headers(settings: Settings) -> None:
    metadata = get_caller_metadata(make_request({"X-User-Name": "ana", "X-User-Grade": "6th"}), settings)

    assert metadata.username == "ana"
    assert metadata.grade_level == "6th"


def test_caller_metadata_defaults_to_none(settings: Settings) -> None:
    metadata = get_caller_metadata(make_request({}), settings)

    assert metadata.username is None
    assert metadata.grade_level is None


def test_settings_dependency_is_cached() -> None:
    assert get_settings_dependency() is get_settings_dependency()


class TestServiceFactories:
    """Test suite for per-request service factories."""

    @pytest.mark.parametrize(
        ("factory", "expected"),
        [
            (get_profile_service, ProfileService),
            (get_leaderboard_service, LeaderboardService),
            (get_reward_service, RewardService),
            (get_flag_service, FlagService),
            (get_friend_service, FriendService),
            (get_admin_service, AdminService),
        ],
    )
    def test_db_only_factories(self, factory, expected, mock_db_session: AsyncSession) -> None:
        service = factory(db=mock_db_session)

        assert isinstance(service, expected)
        assert service.db is mock_db_session

    @pytest.mark.parametrize(
        ("factory", "expected"),
        [
            (get_practice_service, PracticeService),
            (get_test_service, TestService),
            (get_question_service, QuestionService),
        ],
    )
    def test_settings_aware_factories(
        self, factory, expected, mock_db_session: AsyncSession, settings: Settings
    ) -> None:
        service = factory(db=mock_db_session, settings=settings)

        assert isinstance(service, expected)


class TestRequireAdmin:
    """Test suite for the admin gate."""

    async def test_admin_passes_through(self) -> None:
        # Arrange
        user_id = uuid.uuid4()
        admin_service = AsyncMock()
        admin_service.is_admin.return_value = True

        # Act
        result = await require_admin(user_id=user_id, admin_service=admin_service)

        # Assert
        assert result == user_id
        admin_service.is_admin.assert_awaited_once_with(user_id)

    async def test_non_admin_is_forbidden(self) -> None:
        admin_service = AsyncMock()
        admin_service.is_admin.return_value = False

        with pytest.raises(HTTPException) as exc_info:
            await require_admin(user_id=uuid.uuid4(), admin_service=admin_service)

        assert exc_info.value.status_code == 403

"""
Dependency injection container.

Factory functions for FastAPI dependencies: settings, caller identity,
admin gate and per-request services.

Dependencies: mathprep.configs, mathprep.application, mathprep.boundary
System role: DI container for service injection
"""

import logging
from dataclasses import dataclass
from uuid import UUID

from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

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
from mathprep.boundary.db import get_async_db
from mathprep.configs import Settings, get_settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CallerMetadata:
    """Profile hints forwarded by the auth service."""

    username: str | None
    grade_level: str | None


def get_settings_dependency() -> Settings:
    """Get settings singleton."""
    return get_settings()


def get_current_user_id(
    request: Request,
    settings: Settings = Depends(get_settings_dependency),
) -> UUID:
    """
    Read the authenticated user id from the trusted identity header.

    Raises:
        HTTPException(401): Header missing or not a UUID
    """
    raw = request.headers.get(settings.auth.user_id_header)
    if not raw:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Authentication required")
    try:
        return UUID(raw)
    except ValueError:
        logger.warning("Rejected malformed user id header", extra={"value": raw[:64]})
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid user id")


def get_caller_metadata(
    request: Request,
    settings: Settings = Depends(get_settings_dependency),
) -> CallerMetadata:
    return CallerMetadata(
        username=request.headers.get(settings.auth.username_header),
        grade_level=request.headers.get(settings.auth.grade_level_header),
    )


def get_profile_service(db: AsyncSession = Depends(get_async_db)) -> ProfileService:
    return ProfileService(db=db)


def get_question_service(
    db: AsyncSession = Depends(get_async_db),
    settings: Settings = Depends(get_settings_dependency),
) -> QuestionService:
    return QuestionService(db=db, import_batch_size=settings.practice.import_batch_size)


def get_practice_service(
    db: AsyncSession = Depends(get_async_db),
    settings: Settings = Depends(get_settings_dependency),
) -> PracticeService:
    return PracticeService(db=db, settings=settings.practice)


def get_test_service(
    db: AsyncSession = Depends(get_async_db),
    settings: Settings = Depends(get_settings_dependency),
) -> TestService:
    return TestService(db=db, settings=settings.practice)


def get_leaderboard_service(db: AsyncSession = Depends(get_async_db)) -> LeaderboardService:
    return LeaderboardService(db=db)


def get_reward_service(db: AsyncSession = Depends(get_async_db)) -> RewardService:
    return RewardService(db=db)


def get_flag_service(db: AsyncSession = Depends(get_async_db)) -> FlagService:
    return FlagService(db=db)


def get_friend_service(db: AsyncSession = Depends(get_async_db)) -> FriendService:
    return FriendService(db=db)


def get_admin_service(db: AsyncSession = Depends(get_async_db)) -> AdminService:
    return AdminService(db=db)


async def require_admin(
    user_id: UUID = Depends(get_current_user_id),
    admin_service: AdminService = Depends(get_admin_service),
) -> UUID:
    """
    Gate a route to admins.

    Returns:
        UUID: The admin's user id

    Raises:
        HTTPException(403): Caller is not an admin
    """
    if not await admin_service.is_admin(user_id):
        logger.warning("Admin route denied", extra={"user_id": str(user_id)})
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Admin access required")
    return user_id

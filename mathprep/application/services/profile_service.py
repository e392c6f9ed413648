"""
Profile service orchestrator.

Coordinates profile lifecycle, grade level changes and profile stats.

Dependencies: mathprep.boundary.db.CRUD, mathprep.core
System role: Profile use case orchestration
"""

import logging
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from mathprep.boundary.db.CRUD import attempt_crud, profile_crud, progress_crud
from mathprep.boundary.db.models import GRADE_LEVELS, ProfileModel
from mathprep.core.clock import utcnow
from mathprep.core.exceptions import NotFoundError, ValidationError
from mathprep.core.leveling import xp_for_next_level
from mathprep.core.scoring import accuracy_percent
from mathprep.core.streaks import StreakSummary, compute_streak

logger = logging.getLogger(__name__)

DEFAULT_USERNAME = "user"


def profile_to_dict(profile: ProfileModel) -> dict:
    return {
        "id": profile.id,
        "username": profile.username,
        "grade_level": profile.grade_level,
        "role": profile.role.value,
        "level": profile.level,
        "xp": profile.xp,
        "xp_to_next_level": xp_for_next_level(profile.level),
        "accuracy": profile.accuracy,
        "stamina": profile.stamina,
        "total_points": profile.total_points,
        "friend_count": profile.friend_count,
        "created_at": profile.created_at,
    }


def streak_to_dict(summary: StreakSummary) -> dict:
    return {
        "current_streak": summary.current_streak,
        "best_streak": summary.best_streak,
        "last_practice_date": summary.last_practice_date,
    }


def validate_grade_level(grade_level: str | None) -> None:
    if grade_level is not None and grade_level not in GRADE_LEVELS:
        raise ValidationError(
            f"Invalid grade level: {grade_level}",
            field="grade_level",
            details={"allowed": list(GRADE_LEVELS)},
        )


class ProfileService:
    """Profile service orchestrator."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def require_profile(self, user_id: UUID) -> ProfileModel:
        profile = await profile_crud.get_by_id(self.db, user_id)
        if profile is None:
            raise NotFoundError("Profile", user_id)
        return profile

    async def get_or_create_profile(
        self,
        user_id: UUID,
        username: str | None = None,
        grade_level: str | None = None,
    ) -> dict:
        """
        Return the caller's profile, creating it on first sight.

        A username already taken by someone else gets the first eight hex
        digits of the user id appended.

        Args:
            user_id: Authenticated user id
            username: Display name from the auth metadata
            grade_level: Grade level from the auth metadata (ignored if unknown)

        Returns:
            dict: Profile data
        """
        profile = await profile_crud.get_by_id(self.db, user_id)
        if profile is not None:
            return profile_to_dict(profile)

        name = (username or "").strip() or DEFAULT_USERNAME
        if await profile_crud.get_by_username(self.db, name) is not None:
            name = f"{name}-{user_id.hex[:8]}"

        if grade_level not in GRADE_LEVELS:
            grade_level = None

        try:
            profile = await profile_crud.create(
                self.db,
                id=user_id,
                username=name,
                grade_level=grade_level,
            )
            await self.db.commit()
        except Exception as e:
            logger.error(
                "Failed to create profile",
                extra={"error": str(e), "user_id": str(user_id)},
            )
            raise

        logger.info("Profile created", extra={"user_id": str(user_id), "username": name})
        return profile_to_dict(profile)

    async def update_grade_level(self, user_id: UUID, grade_level: str) -> dict:
        validate_grade_level(grade_level)
        profile = await profile_crud.update_by_id(self.db, user_id, grade_level=grade_level)
        if profile is None:
            raise NotFoundError("Profile", user_id)
        await self.db.commit()

        logger.info("Grade level updated", extra={"user_id": str(user_id), "grade_level": grade_level})
        return profile_to_dict(profile)

    async def get_streak(self, user_id: UUID) -> StreakSummary:
        completed = await progress_crud.completion_times(self.db, user_id)
        return compute_streak(completed, utcnow().date())

    async def get_stats(self, user_id: UUID) -> dict:
        """
        Aggregate profile stats from attempts and session progress.

        Returns:
            dict: Answer totals, accuracy, points, sessions, level and streak
        """
        profile = await self.require_profile(user_id)
        answered, correct = await attempt_crud.totals_for_user(self.db, user_id)
        sessions = await progress_crud.count_completed(self.db, user_id)
        streak = await self.get_streak(user_id)

        return {
            "questions_answered": answered,
            "correct_answers": correct,
            "accuracy": round(accuracy_percent(correct, answered), 2),
            "total_points": profile.total_points,
            "sessions_completed": sessions,
            "level": profile.level,
            "xp": profile.xp,
            "xp_to_next_level": xp_for_next_level(profile.level),
            "streak": streak_to_dict(streak),
        }

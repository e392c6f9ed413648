"""
Reward service orchestrator.

Lists earned badges and achievements and awards new ones after a session.

Dependencies: mathprep.boundary.db.CRUD, mathprep.core.rewards
System role: Badge and achievement use case orchestration
"""

import logging
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from mathprep.boundary.db.CRUD import (
    achievement_crud,
    attempt_crud,
    badge_crud,
    progress_crud,
    user_badge_crud,
)
from mathprep.boundary.db.models import BadgeModel, UserAchievementModel
from mathprep.core.rewards import (
    PracticeSnapshot,
    RewardContext,
    achievement_stats,
    achievements_to_unlock,
    badges_to_award,
)

logger = logging.getLogger(__name__)


def badge_to_dict(badge: BadgeModel) -> dict:
    return {
        "id": badge.id,
        "name": badge.name,
        "description": badge.description,
        "icon": badge.icon,
        "requirements": dict(badge.requirements or {}),
    }


def achievement_to_dict(achievement: UserAchievementModel) -> dict:
    return {
        "achievement_type": achievement.achievement_type,
        "achievement_name": achievement.achievement_name,
        "description": achievement.description,
        "points_awarded": achievement.points_awarded,
        "icon": achievement.icon,
        "unlocked_at": achievement.unlocked_at,
    }


class RewardService:
    """Reward service orchestrator."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def list_user_badges(self, user_id: UUID) -> list[dict]:
        rows = await user_badge_crud.list_with_badges(self.db, user_id)
        return [{"badge": badge_to_dict(badge), "earned_at": earned.earned_at} for earned, badge in rows]

    async def list_badge_catalog(self) -> list[dict]:
        return [badge_to_dict(b) for b in await badge_crud.list_catalog(self.db)]

    async def list_achievements(self, user_id: UUID) -> dict:
        achievements = await achievement_crud.list_for_user(self.db, user_id)
        stats = achievement_stats(a.points_awarded for a in achievements)
        return {
            "achievements": [achievement_to_dict(a) for a in achievements],
            "stats": {
                "total_achievements": stats.total_achievements,
                "total_points_earned": stats.total_points_earned,
                "completion_percentage": stats.completion_percentage,
            },
        }

    async def snapshot(self, user_id: UUID) -> PracticeSnapshot:
        return PracticeSnapshot(
            sessions_completed=await progress_crud.count_completed(self.db, user_id),
            perfect_session=await progress_crud.has_perfect_session(self.db, user_id),
            distinct_topics=await attempt_crud.distinct_topic_count(self.db, user_id),
            division_accuracy=await attempt_crud.division_accuracy(self.db, user_id),
        )

    async def award_session_rewards(self, user_id: UUID, context: RewardContext) -> dict:
        """
        Award badges and achievements unlocked by the latest session.

        Flushes new rows; the caller commits.

        Args:
            user_id: Profile id
            context: Accuracy, streak and completion count of the session

        Returns:
            dict: {"badges": [...], "achievements": [...]} newly earned
        """
        catalog = await badge_crud.list_catalog(self.db)
        earned_ids = await user_badge_crud.earned_badge_ids(self.db, user_id)
        new_badges = badges_to_award(catalog, earned_ids, context)
        for badge in new_badges:
            await user_badge_crud.create(self.db, user_id=user_id, badge_id=badge.id)

        unlocked = await achievement_crud.unlocked_types(self.db, user_id)
        new_achievements = achievements_to_unlock(unlocked, await self.snapshot(user_id))
        for definition in new_achievements:
            await achievement_crud.create(
                self.db,
                user_id=user_id,
                achievement_type=definition.achievement_type,
                achievement_name=definition.name,
                description=definition.description,
                points_awarded=definition.points,
                icon=definition.icon,
            )

        if new_badges or new_achievements:
            logger.info(
                "Rewards earned",
                extra={
                    "user_id": str(user_id),
                    "badges": [b.name for b in new_badges],
                    "achievements": [a.achievement_type for a in new_achievements],
                },
            )

        return {
            "badges": [
                {"id": b.id, "name": b.name, "description": b.description, "icon": b.icon} for b in new_badges
            ],
            "achievements": [
                {
                    "achievement_type": a.achievement_type,
                    "achievement_name": a.name,
                    "description": a.description,
                    "points_awarded": a.points,
                    "icon": a.icon,
                }
                for a in new_achievements
            ],
        }

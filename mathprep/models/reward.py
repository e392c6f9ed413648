"""
Reward schemas.

Dependencies: pydantic
System role: Badge and achievement API contracts
"""

import uuid
from datetime import datetime

from pydantic import BaseModel


class BadgeResponse(BaseModel):
    id: uuid.UUID
    name: str
    description: str
    icon: str | None
    requirements: dict


class UserBadgeResponse(BaseModel):
    badge: BadgeResponse
    earned_at: datetime


class AchievementResponse(BaseModel):
    achievement_type: str
    achievement_name: str
    description: str
    points_awarded: int
    icon: str | None
    unlocked_at: datetime


class AchievementStatsResponse(BaseModel):
    total_achievements: int
    total_points_earned: int
    completion_percentage: int


class AchievementsResponse(BaseModel):
    achievements: list[AchievementResponse]
    stats: AchievementStatsResponse

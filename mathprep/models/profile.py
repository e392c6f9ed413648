"""
Profile schemas.

Dependencies: pydantic
System role: Profile API contracts
"""

import uuid
from datetime import datetime

from pydantic import BaseModel, Field


class ProfileResponse(BaseModel):
    id: uuid.UUID
    username: str
    grade_level: str | None
    role: str
    level: int
    xp: int
    xp_to_next_level: int
    accuracy: float
    stamina: int
    total_points: int
    friend_count: int
    created_at: datetime


class UpdateProfileRequest(BaseModel):
    """Only the grade level is user-editable."""

    grade_level: str = Field(..., description="Below 6th, 6th ... 12th, or Post-High School")


class StreakResponse(BaseModel):
    current_streak: int
    best_streak: int
    last_practice_date: datetime | None


class ProfileStatsResponse(BaseModel):
    questions_answered: int
    correct_answers: int
    accuracy: float
    total_points: int
    sessions_completed: int
    level: int
    xp: int
    xp_to_next_level: int
    streak: StreakResponse

"""
Leaderboard schemas.

Dependencies: pydantic
System role: Leaderboard API contracts
"""

import uuid
from datetime import datetime

from pydantic import BaseModel


class LeaderboardEntryResponse(BaseModel):
    rank: int
    user_id: uuid.UUID
    username: str
    grade_level: str | None
    division: str
    topic: str
    average_score: float
    attempts: int
    perfect_scores: int
    questions_attempted: int
    points: int
    last_updated: datetime


class LeaderboardFiltersResponse(BaseModel):
    divisions: list[str]
    topics: list[str]
    grade_levels: list[str]

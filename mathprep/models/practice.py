"""
Practice schemas.

Dependencies: pydantic
System role: Practice session, answer and completion API contracts
"""

import uuid
from datetime import datetime

from pydantic import BaseModel, Field

from mathprep.models.profile import StreakResponse


class QuestionHistoryResponse(BaseModel):
    attempts: int
    last_attempt: datetime | None
    last_correct: bool
    is_completed: bool
    user_answers: list[str]


class PracticeQuestionResponse(BaseModel):
    """A question as served to a learner: no answer included."""

    id: uuid.UUID
    question_text: str
    options: list[str]
    division: str
    topic: str
    difficulty: int
    history: QuestionHistoryResponse | None = None


class StandardSessionRequest(BaseModel):
    division: str = Field(..., min_length=1)
    topic: str = Field("All Topics", min_length=1)
    limit: int | None = Field(None, ge=1, le=100)


class AdaptiveSessionRequest(BaseModel):
    division: str = Field(..., min_length=1)
    topics: list[str] | None = None


class DifficultyRangeResponse(BaseModel):
    min: int
    max: int
    target: int


class PracticeSessionResponse(BaseModel):
    session_id: str
    division: str
    questions: list[PracticeQuestionResponse]


class AdaptiveSessionResponse(PracticeSessionResponse):
    difficulty_range: DifficultyRangeResponse
    new_questions: int
    review_questions: int
    fallback: bool


class SubmitAnswerRequest(BaseModel):
    session_id: str = Field(..., min_length=1, max_length=64)
    question_id: uuid.UUID
    answer: str = Field(..., min_length=1)
    answer_streak: int = Field(0, ge=0, description="Correct answers in a row before this one")


class SubmitAnswerResponse(BaseModel):
    is_correct: bool
    feedback: str
    attempts_remaining: int
    correct_answer: str | None
    xp_gained: int
    level: int
    xp: int
    xp_to_next_level: int
    leveled_up: bool
    answer_streak: int


class CompleteSessionRequest(BaseModel):
    division: str = Field(..., min_length=1)
    topic: str = Field(..., min_length=1)
    score: int
    total_questions: int
    answer_streak: int = 0


class EarnedBadgeResponse(BaseModel):
    id: uuid.UUID
    name: str
    description: str
    icon: str | None


class EarnedAchievementResponse(BaseModel):
    achievement_type: str
    achievement_name: str
    description: str
    points_awarded: int
    icon: str | None


class CompleteSessionResponse(BaseModel):
    session_id: str
    points: int
    total_points: int
    streak: StreakResponse
    new_badges: list[EarnedBadgeResponse]
    new_achievements: list[EarnedAchievementResponse]


class AttemptResponse(BaseModel):
    question_id: uuid.UUID
    user_answer: str
    is_correct: bool
    created_at: datetime


class SessionResultsResponse(BaseModel):
    session_id: str
    attempts: list[AttemptResponse]
    total: int
    correct: int
    percentage: float

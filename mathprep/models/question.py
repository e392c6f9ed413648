"""
Question schemas.

Dependencies: pydantic
System role: Question catalogue API contracts
"""

import uuid

from pydantic import BaseModel, Field


class QuestionResponse(BaseModel):
    id: uuid.UUID
    question_text: str
    options: list[str]
    answer: str
    division: str
    topic: str
    difficulty: int
    level: int
    xp_reward: int
    accuracy_bonus: int
    stamina_bonus: int


class CreateQuestionRequest(BaseModel):
    question_text: str = Field(..., min_length=1)
    options: list[str] = Field(..., min_length=2)
    answer: str = Field(..., min_length=1, description="Correct option text or its letter")
    division: str = Field(..., min_length=1, max_length=255)
    topic: str = Field(..., min_length=1, max_length=255)
    difficulty: int = Field(1, ge=1, le=10)
    level: int = Field(1, ge=1)
    xp_reward: int = Field(10, ge=0)
    accuracy_bonus: int = Field(0, ge=0)
    stamina_bonus: int = Field(0, ge=0)


class UpdateQuestionRequest(BaseModel):
    """Partial update; omitted fields keep their values."""

    question_text: str | None = Field(None, min_length=1)
    options: list[str] | None = Field(None, min_length=2)
    answer: str | None = Field(None, min_length=1)
    division: str | None = Field(None, min_length=1, max_length=255)
    topic: str | None = Field(None, min_length=1, max_length=255)
    difficulty: int | None = Field(None, ge=1, le=10)
    level: int | None = Field(None, ge=1)
    xp_reward: int | None = Field(None, ge=0)
    accuracy_bonus: int | None = Field(None, ge=0)
    stamina_bonus: int | None = Field(None, ge=0)


class ImportQuestionsResponse(BaseModel):
    imported: int
    batches: int

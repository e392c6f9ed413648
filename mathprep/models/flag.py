"""
Question flag schemas.

Dependencies: pydantic
System role: Flagging and admin review API contracts
"""

import uuid
from datetime import datetime

from pydantic import BaseModel, Field

from mathprep.boundary.db.models.flag_model import FlagStatus, FlagType


class CreateFlagRequest(BaseModel):
    question_id: uuid.UUID
    flag_type: FlagType
    description: str | None = Field(None, max_length=2000)


class UpdateFlagRequest(BaseModel):
    status: FlagStatus
    admin_notes: str | None = Field(None, max_length=4000)


class FlagResponse(BaseModel):
    id: uuid.UUID
    question_id: uuid.UUID
    user_id: uuid.UUID
    flag_type: FlagType
    description: str | None
    status: FlagStatus
    admin_notes: str | None
    reviewed_by: uuid.UUID | None
    reviewed_at: datetime | None
    created_at: datetime

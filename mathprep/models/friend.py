"""
Friend schemas.

Dependencies: pydantic
System role: Friend request and friendship API contracts
"""

import uuid
from datetime import datetime
from typing import Literal

from pydantic import BaseModel


class FriendRequestCreate(BaseModel):
    recipient_id: uuid.UUID


class FriendRequestRespond(BaseModel):
    action: Literal["accept", "reject"]


class FriendProfileResponse(BaseModel):
    id: uuid.UUID
    username: str
    grade_level: str | None
    level: int
    total_points: int


class FriendRequestResponse(BaseModel):
    id: uuid.UUID
    requester_id: uuid.UUID
    recipient_id: uuid.UUID
    status: str
    created_at: datetime
    other_user: FriendProfileResponse | None = None

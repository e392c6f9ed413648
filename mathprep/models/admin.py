"""
Admin schemas.

Dependencies: pydantic
System role: User administration API contracts
"""

import uuid
from datetime import datetime

from pydantic import BaseModel

from mathprep.boundary.db.models.profile_model import UserRole


class AdminUserResponse(BaseModel):
    id: uuid.UUID
    username: str
    grade_level: str | None
    role: UserRole
    level: int
    total_points: int
    created_at: datetime


class UpdateRoleRequest(BaseModel):
    role: UserRole

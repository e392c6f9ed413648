"""
Common response models.

Dependencies: pydantic
System role: Shared API response structures
"""

from pydantic import BaseModel


class HealthResponse(BaseModel):
    status: str
    service: str | None = None
    database: str | None = None

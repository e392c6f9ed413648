"""
Profile ORM model.

One row per authenticated user; the id is the upstream auth user id.

Dependencies: sqlalchemy, mathprep.boundary.db.base
System role: User progression (level, XP, points) and role persistence
"""

import enum

from sqlalchemy import Float, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from mathprep.boundary.db.base import Base, TimestampMixin, UUIDMixin, enum_column


class UserRole(str, enum.Enum):
    USER = "user"
    ADMIN = "admin"


GRADE_LEVELS: tuple[str, ...] = (
    "Below 6th",
    "6th",
    "7th",
    "8th",
    "9th",
    "10th",
    "11th",
    "12th",
    "Post-High School",
)


class ProfileModel(Base, UUIDMixin, TimestampMixin):
    """
    Profile ORM model.

    Attributes:
        id: Auth user id (supplied, not generated)
        username: Display name, unique across profiles
        grade_level: One of GRADE_LEVELS, optional
        role: user or admin
        level: Current level (starts at 1)
        xp: XP carried within the current level
        accuracy: Running accuracy stat
        stamina: Running stamina stat
        total_points: Points from completed sessions
        friend_count: Accepted friendships
    """

    __tablename__ = "profiles"

    username: Mapped[str] = mapped_column(String(255), nullable=False, unique=True, index=True)
    grade_level: Mapped[str | None] = mapped_column(String(50), nullable=True, default=None)
    role: Mapped[UserRole] = mapped_column(enum_column(UserRole), nullable=False, default=UserRole.USER)
    level: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    xp: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    accuracy: Mapped[float] = mapped_column(Float, nullable=False, default=0)
    stamina: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    total_points: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    friend_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

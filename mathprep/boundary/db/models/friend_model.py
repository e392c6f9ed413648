"""
Friend relationship ORM model.

Dependencies: sqlalchemy, mathprep.boundary.db.base
System role: Friend requests and friendships between profiles
"""

import enum
import uuid

from sqlalchemy import ForeignKey, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from mathprep.boundary.db.base import Base, TimestampMixin, UUIDMixin, enum_column


class FriendStatus(str, enum.Enum):
    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"


class FriendRelationshipModel(Base, UUIDMixin, TimestampMixin):
    """
    Directed friend request; an accepted row is a friendship both ways.
    """

    __tablename__ = "friend_relationships"

    requester_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False, index=True
    )
    recipient_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False, index=True
    )
    status: Mapped[FriendStatus] = mapped_column(
        enum_column(FriendStatus), nullable=False, default=FriendStatus.PENDING
    )

"""
Admin service orchestrator.

Dependencies: mathprep.boundary.db.CRUD
System role: User listing and role management
"""

import logging
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from mathprep.boundary.db.CRUD import profile_crud
from mathprep.boundary.db.models import ProfileModel, UserRole
from mathprep.core.exceptions import NotFoundError, ValidationError

logger = logging.getLogger(__name__)


def admin_user_to_dict(profile: ProfileModel) -> dict:
    return {
        "id": profile.id,
        "username": profile.username,
        "grade_level": profile.grade_level,
        "role": profile.role,
        "level": profile.level,
        "total_points": profile.total_points,
        "created_at": profile.created_at,
    }


class AdminService:
    """Admin service orchestrator."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def is_admin(self, user_id: UUID) -> bool:
        profile = await profile_crud.get_by_id(self.db, user_id)
        return profile is not None and profile.role == UserRole.ADMIN

    async def list_users(self, limit: int | None = 100) -> list[dict]:
        return [admin_user_to_dict(p) for p in await profile_crud.list_newest(self.db, limit=limit)]

    async def list_admins(self) -> list[dict]:
        return [admin_user_to_dict(p) for p in await profile_crud.list_by_role(self.db, UserRole.ADMIN)]

    async def update_role(self, acting_admin_id: UUID, user_id: UUID, role: UserRole) -> dict:
        """
        Change a user's role.

        Raises:
            ValidationError: An admin demoting themselves
            NotFoundError: Unknown user
        """
        if acting_admin_id == user_id and role != UserRole.ADMIN:
            raise ValidationError("Admins cannot remove their own admin role", field="role")

        profile = await profile_crud.update_by_id(self.db, user_id, role=role)
        if profile is None:
            raise NotFoundError("Profile", user_id)
        await self.db.commit()

        logger.info(
            "User role updated",
            extra={"user_id": str(user_id), "role": role.value, "by": str(acting_admin_id)},
        )
        return admin_user_to_dict(profile)

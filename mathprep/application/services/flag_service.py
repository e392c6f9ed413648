"""
Question flag service orchestrator.

Dependencies: mathprep.boundary.db.CRUD, mathprep.application.services.question_service
System role: Question reports and their admin review
"""

import logging
from typing import Any
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from mathprep.application.services.question_service import QuestionService
from mathprep.boundary.db.CRUD import flag_crud, question_crud
from mathprep.boundary.db.models import FlagStatus, FlagType, QuestionFlagModel
from mathprep.core.clock import utcnow
from mathprep.core.exceptions import ConflictError, NotFoundError

logger = logging.getLogger(__name__)


def flag_to_dict(flag: QuestionFlagModel) -> dict:
    return {
        "id": flag.id,
        "question_id": flag.question_id,
        "user_id": flag.user_id,
        "flag_type": flag.flag_type,
        "description": flag.description,
        "status": flag.status,
        "admin_notes": flag.admin_notes,
        "reviewed_by": flag.reviewed_by,
        "reviewed_at": flag.reviewed_at,
        "created_at": flag.created_at,
    }


class FlagService:
    """Question flag service orchestrator."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def flag_question(
        self,
        user_id: UUID,
        question_id: UUID,
        flag_type: FlagType,
        description: str | None = None,
    ) -> dict:
        """
        Record a user's report against a question.

        Raises:
            NotFoundError: Unknown question
            ConflictError: The user already flagged this question
        """
        if not await question_crud.exists(self.db, question_id):
            raise NotFoundError("Question", question_id)
        if await flag_crud.get_for_user(self.db, question_id, user_id) is not None:
            raise ConflictError(
                "You have already flagged this question",
                details={"question_id": str(question_id)},
            )

        flag = await flag_crud.create(
            self.db,
            question_id=question_id,
            user_id=user_id,
            flag_type=flag_type,
            description=(description or "").strip() or None,
        )
        await self.db.commit()

        logger.info(
            "Question flagged",
            extra={"flag_id": str(flag.id), "question_id": str(question_id), "flag_type": flag_type.value},
        )
        return flag_to_dict(flag)

    async def list_flags(
        self,
        status: FlagStatus | None = None,
        flag_type: FlagType | None = None,
        limit: int | None = 100,
    ) -> list[dict]:
        flags = await flag_crud.list_filtered(self.db, status=status, flag_type=flag_type, limit=limit)
        return [flag_to_dict(f) for f in flags]

    async def review_flag(
        self,
        flag_id: UUID,
        reviewer_id: UUID,
        status: FlagStatus,
        admin_notes: str | None = None,
    ) -> dict:
        changes: dict[str, Any] = {"status": status, "reviewed_by": reviewer_id, "reviewed_at": utcnow()}
        if admin_notes is not None:
            changes["admin_notes"] = admin_notes

        flag = await flag_crud.update_by_id(self.db, flag_id, **changes)
        if flag is None:
            raise NotFoundError("Flag", flag_id)
        await self.db.commit()

        logger.info(
            "Flag reviewed",
            extra={"flag_id": str(flag_id), "status": status.value, "reviewer_id": str(reviewer_id)},
        )
        return flag_to_dict(flag)

    async def edit_flagged_question(self, flag_id: UUID, **fields: Any) -> dict:
        flag = await flag_crud.get_by_id(self.db, flag_id)
        if flag is None:
            raise NotFoundError("Flag", flag_id)
        return await QuestionService(self.db).update_question(flag.question_id, **fields)

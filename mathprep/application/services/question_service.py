"""
Question service orchestrator.

Catalogue browsing, question queries, admin edits and bulk import.

Dependencies: mathprep.boundary.db.CRUD, mathprep.core
System role: Question bank use case orchestration
"""

import logging
from typing import Any, Sequence
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from mathprep.boundary.db.CRUD import question_crud
from mathprep.boundary.db.models import QuestionModel
from mathprep.core.exceptions import NotFoundError, ValidationError
from mathprep.core.importer import batched, normalize_questions
from mathprep.core.scoring import resolve_choice

logger = logging.getLogger(__name__)


def question_to_dict(question: QuestionModel) -> dict:
    return {
        "id": question.id,
        "question_text": question.question_text,
        "options": list(question.options or []),
        "answer": question.answer,
        "division": question.division,
        "topic": question.topic,
        "difficulty": question.difficulty,
        "level": question.level,
        "xp_reward": question.xp_reward,
        "accuracy_bonus": question.accuracy_bonus,
        "stamina_bonus": question.stamina_bonus,
    }


def _checked_answer(options: list[str], answer: str) -> str:
    """Resolve a letter answer and require it to be one of the options."""
    resolved = resolve_choice(options, answer)
    if resolved not in [option.strip() for option in options]:
        raise ValidationError(
            "Answer must match one of the options",
            field="answer",
            details={"answer": answer},
        )
    return resolved


class QuestionService:
    """Question service orchestrator."""

    def __init__(self, db: AsyncSession, import_batch_size: int = 100) -> None:
        self.db = db
        self.import_batch_size = import_batch_size

    async def list_divisions(self) -> list[str]:
        return await question_crud.list_divisions(self.db)

    async def list_topics(self, division: str) -> list[str]:
        return await question_crud.list_topics(self.db, division)

    async def query_questions(
        self,
        division: str | None = None,
        topics: Sequence[str] | None = None,
        min_difficulty: int = 1,
        max_difficulty: int = 10,
        limit: int | None = 50,
    ) -> list[dict]:
        questions = await question_crud.query(
            self.db,
            division=division,
            topics=topics,
            min_difficulty=min_difficulty,
            max_difficulty=max_difficulty,
            limit=limit,
        )
        return [question_to_dict(q) for q in questions]

    async def get_question(self, question_id: UUID) -> dict:
        question = await question_crud.get_by_id(self.db, question_id)
        if question is None:
            raise NotFoundError("Question", question_id)
        return question_to_dict(question)

    async def create_question(self, **fields: Any) -> dict:
        fields["answer"] = _checked_answer(fields["options"], fields["answer"])
        question = await question_crud.create(self.db, **fields)
        await self.db.commit()

        logger.info(
            "Question created",
            extra={"question_id": str(question.id), "division": question.division, "topic": question.topic},
        )
        return question_to_dict(question)

    async def update_question(self, question_id: UUID, **fields: Any) -> dict:
        """
        Apply a partial update; None values are ignored.

        Raises:
            NotFoundError: Question does not exist
            ValidationError: Resulting answer is not one of the options
        """
        question = await question_crud.get_by_id(self.db, question_id)
        if question is None:
            raise NotFoundError("Question", question_id)

        changes = {key: value for key, value in fields.items() if value is not None}
        if "options" in changes or "answer" in changes:
            options = changes.get("options", question.options)
            changes["answer"] = _checked_answer(options, changes.get("answer", question.answer))

        updated = await question_crud.update_by_id(self.db, question_id, **changes)
        await self.db.commit()

        logger.info("Question updated", extra={"question_id": str(question_id), "fields": sorted(changes)})
        return question_to_dict(updated)

    async def delete_question(self, question_id: UUID) -> None:
        deleted = await question_crud.delete_by_id(self.db, question_id)
        if not deleted:
            raise NotFoundError("Question", question_id)
        await self.db.commit()
        logger.info("Question deleted", extra={"question_id": str(question_id)})

    async def import_questions(self, payload: Any) -> dict:
        """
        Normalize and insert an uploaded question list in batches.

        The whole payload is validated before anything is written; the
        batches are committed together.

        Returns:
            dict: {"imported": rows inserted, "batches": batch count}
        """
        rows = normalize_questions(payload)
        imported = 0
        batches = 0
        try:
            for batch in batched(rows, self.import_batch_size):
                imported += await question_crud.bulk_create(self.db, batch)
                batches += 1
                logger.info("Imported question batch", extra={"batch": batches, "rows": len(batch)})
            await self.db.commit()
        except Exception as e:
            logger.error("Question import failed", extra={"error": str(e), "batches_done": batches})
            raise

        logger.info("Question import complete", extra={"imported": imported, "batches": batches})
        return {"imported": imported, "batches": batches}

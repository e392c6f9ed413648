"""
Question catalogue API endpoints.

Routes:
- GET /questions/divisions - Distinct divisions
- GET /questions/divisions/{division}/topics - Topics in a division
- GET /questions - Query questions
- GET /questions/{id} - Get one question
- POST /questions - Create (admin)
- POST /questions/import - Bulk import (admin)
- PUT /questions/{id} - Update (admin)
- DELETE /questions/{id} - Delete (admin)

Dependencies: mathprep.application.services, mathprep.models
System role: Question bank HTTP API
"""

import logging
from typing import Any
from uuid import UUID

from fastapi import APIRouter, Body, Depends, Query

from mathprep.api.deps.dependencies import get_current_user_id, get_question_service, require_admin
from mathprep.api.routers.router_utils import handle_domain_errors
from mathprep.application.services import QuestionService
from mathprep.core.test_builder import validate_difficulty_range
from mathprep.models.question import (
    CreateQuestionRequest,
    ImportQuestionsResponse,
    QuestionResponse,
    UpdateQuestionRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/questions", tags=["questions"])


@router.get("/divisions", response_model=list[str])
@handle_domain_errors
async def list_divisions(
    _: UUID = Depends(get_current_user_id),
    question_service: QuestionService = Depends(get_question_service),
) -> list[str]:
    return await question_service.list_divisions()


@router.get("/divisions/{division}/topics", response_model=list[str])
@handle_domain_errors
async def list_topics(
    division: str,
    _: UUID = Depends(get_current_user_id),
    question_service: QuestionService = Depends(get_question_service),
) -> list[str]:
    return await question_service.list_topics(division)


@router.get("", response_model=list[QuestionResponse])
@handle_domain_errors
async def query_questions(
    division: str | None = None,
    topics: list[str] | None = Query(None),
    min_difficulty: int = Query(1, ge=1, le=10),
    max_difficulty: int = Query(10, ge=1, le=10),
    limit: int = Query(50, ge=1, le=500),
    _: UUID = Depends(get_current_user_id),
    question_service: QuestionService = Depends(get_question_service),
) -> list[QuestionResponse]:
    validate_difficulty_range(min_difficulty, max_difficulty)
    questions = await question_service.query_questions(
        division=division,
        topics=topics,
        min_difficulty=min_difficulty,
        max_difficulty=max_difficulty,
        limit=limit,
    )
    return [QuestionResponse(**q) for q in questions]


@router.post("/import", response_model=ImportQuestionsResponse, status_code=201)
@handle_domain_errors
async def import_questions(
    payload: Any = Body(...),
    admin_id: UUID = Depends(require_admin),
    question_service: QuestionService = Depends(get_question_service),
) -> ImportQuestionsResponse:
    """Bulk import a JSON array of questions."""
    logger.info(
        "Importing questions",
        extra={"admin_id": str(admin_id), "records": len(payload) if isinstance(payload, list) else None},
    )
    return ImportQuestionsResponse(**await question_service.import_questions(payload))


@router.get("/{question_id}", response_model=QuestionResponse)
@handle_domain_errors
async def get_question(
    question_id: UUID,
    _: UUID = Depends(get_current_user_id),
    question_service: QuestionService = Depends(get_question_service),
) -> QuestionResponse:
    return QuestionResponse(**await question_service.get_question(question_id))


@router.post("", response_model=QuestionResponse, status_code=201)
@handle_domain_errors
async def create_question(
    request: CreateQuestionRequest,
    admin_id: UUID = Depends(require_admin),
    question_service: QuestionService = Depends(get_question_service),
) -> QuestionResponse:
    logger.info("Creating question", extra={"admin_id": str(admin_id), "division": request.division})
    return QuestionResponse(**await question_service.create_question(**request.model_dump()))


@router.put("/{question_id}", response_model=QuestionResponse)
@handle_domain_errors
async def update_question(
    question_id: UUID,
    request: UpdateQuestionRequest,
    admin_id: UUID = Depends(require_admin),
    question_service: QuestionService = Depends(get_question_service),
) -> QuestionResponse:
    question = await question_service.update_question(question_id, **request.model_dump(exclude_unset=True))
    return QuestionResponse(**question)


@router.delete("/{question_id}", status_code=204)
@handle_domain_errors
async def delete_question(
    question_id: UUID,
    admin_id: UUID = Depends(require_admin),
    question_service: QuestionService = Depends(get_question_service),
) -> None:
    logger.info("Deleting question", extra={"admin_id": str(admin_id), "question_id": str(question_id)})
    await question_service.delete_question(question_id)

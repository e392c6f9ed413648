"""
Question flag API endpoints.

Routes:
- POST /flags - Flag a question
- GET /flags - List flags (admin)
- PATCH /flags/{id} - Review a flag (admin)
- PUT /flags/{id}/question - Edit the flagged question (admin)

Dependencies: mathprep.application.services, mathprep.models
System role: Question flag HTTP API
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, Query

from mathprep.api.deps.dependencies import get_current_user_id, get_flag_service, require_admin
from mathprep.api.routers.router_utils import handle_domain_errors
from mathprep.application.services import FlagService
from mathprep.boundary.db.models import FlagStatus, FlagType
from mathprep.models.flag import CreateFlagRequest, FlagResponse, UpdateFlagRequest
from mathprep.models.question import QuestionResponse, UpdateQuestionRequest

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/flags", tags=["flags"])


@router.post("", response_model=FlagResponse, status_code=201)
@handle_domain_errors
async def flag_question(
    request: CreateFlagRequest,
    user_id: UUID = Depends(get_current_user_id),
    flag_service: FlagService = Depends(get_flag_service),
) -> FlagResponse:
    flag = await flag_service.flag_question(
        user_id, request.question_id, request.flag_type, request.description
    )
    return FlagResponse(**flag)


@router.get("", response_model=list[FlagResponse])
@handle_domain_errors
async def list_flags(
    status: FlagStatus | None = None,
    flag_type: FlagType | None = None,
    limit: int = Query(100, ge=1, le=500),
    _: UUID = Depends(require_admin),
    flag_service: FlagService = Depends(get_flag_service),
) -> list[FlagResponse]:
    flags = await flag_service.list_flags(status=status, flag_type=flag_type, limit=limit)
    return [FlagResponse(**f) for f in flags]


@router.patch("/{flag_id}", response_model=FlagResponse)
@handle_domain_errors
async def review_flag(
    flag_id: UUID,
    request: UpdateFlagRequest,
    admin_id: UUID = Depends(require_admin),
    flag_service: FlagService = Depends(get_flag_service),
) -> FlagResponse:
    flag = await flag_service.review_flag(flag_id, admin_id, request.status, request.admin_notes)
    return FlagResponse(**flag)


@router.put("/{flag_id}/question", response_model=QuestionResponse)
@handle_domain_errors
async def edit_flagged_question(
    flag_id: UUID,
    request: UpdateQuestionRequest,
    admin_id: UUID = Depends(require_admin),
    flag_service: FlagService = Depends(get_flag_service),
) -> QuestionResponse:
    logger.info("Editing flagged question", extra={"flag_id": str(flag_id), "admin_id": str(admin_id)})
    question = await flag_service.edit_flagged_question(flag_id, **request.model_dump(exclude_unset=True))
    return QuestionResponse(**question)

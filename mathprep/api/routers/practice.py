"""
Practice API endpoints.

Routes:
- POST /practice/sessions - Standard session
- POST /practice/adaptive - Adaptive session
- POST /practice/attempts - Submit an answer
- POST /practice/sessions/{session_id}/complete - Complete a session
- GET /practice/sessions/{session_id} - Session results
- GET /practice/streak - Streak summary

Dependencies: mathprep.application.services, mathprep.models
System role: Practice HTTP API
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends

from mathprep.api.deps.dependencies import get_current_user_id, get_practice_service
from mathprep.api.routers.router_utils import handle_domain_errors
from mathprep.application.services import PracticeService
from mathprep.models.practice import (
    AdaptiveSessionRequest,
    AdaptiveSessionResponse,
    CompleteSessionRequest,
    CompleteSessionResponse,
    PracticeSessionResponse,
    SessionResultsResponse,
    StandardSessionRequest,
    SubmitAnswerRequest,
    SubmitAnswerResponse,
)
from mathprep.models.profile import StreakResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/practice", tags=["practice"])


@router.post("/sessions", response_model=PracticeSessionResponse, status_code=201)
@handle_domain_errors
async def start_standard_session(
    request: StandardSessionRequest,
    user_id: UUID = Depends(get_current_user_id),
    practice_service: PracticeService = Depends(get_practice_service),
) -> PracticeSessionResponse:
    session = await practice_service.start_standard_session(
        user_id, request.division, request.topic, request.limit
    )
    return PracticeSessionResponse(**session)


@router.post("/adaptive", response_model=AdaptiveSessionResponse, status_code=201)
@handle_domain_errors
async def start_adaptive_session(
    request: AdaptiveSessionRequest,
    user_id: UUID = Depends(get_current_user_id),
    practice_service: PracticeService = Depends(get_practice_service),
) -> AdaptiveSessionResponse:
    """
    Start an adaptive session.

    Picks questions near the caller's optimal difficulty, favouring new
    questions and ones due for review.
    """
    session = await practice_service.start_adaptive_session(user_id, request.division, request.topics)
    return AdaptiveSessionResponse(**session)


@router.post("/attempts", response_model=SubmitAnswerResponse)
@handle_domain_errors
async def submit_answer(
    request: SubmitAnswerRequest,
    user_id: UUID = Depends(get_current_user_id),
    practice_service: PracticeService = Depends(get_practice_service),
) -> SubmitAnswerResponse:
    result = await practice_service.submit_answer(
        user_id,
        session_id=request.session_id,
        question_id=request.question_id,
        answer=request.answer,
        answer_streak=request.answer_streak,
    )
    return SubmitAnswerResponse(**result)


@router.post("/sessions/{session_id}/complete", response_model=CompleteSessionResponse)
@handle_domain_errors
async def complete_session(
    session_id: str,
    request: CompleteSessionRequest,
    user_id: UUID = Depends(get_current_user_id),
    practice_service: PracticeService = Depends(get_practice_service),
) -> CompleteSessionResponse:
    logger.info(
        "Completing practice session",
        extra={"user_id": str(user_id), "session_id": session_id, "score": request.score},
    )
    result = await practice_service.complete_session(
        user_id,
        session_id=session_id,
        division=request.division,
        topic=request.topic,
        score=request.score,
        total_questions=request.total_questions,
        answer_streak=request.answer_streak,
    )
    return CompleteSessionResponse(**result)


@router.get("/sessions/{session_id}", response_model=SessionResultsResponse)
@handle_domain_errors
async def get_session_results(
    session_id: str,
    user_id: UUID = Depends(get_current_user_id),
    practice_service: PracticeService = Depends(get_practice_service),
) -> SessionResultsResponse:
    return SessionResultsResponse(**await practice_service.get_session_results(user_id, session_id))


@router.get("/streak", response_model=StreakResponse)
@handle_domain_errors
async def get_streak(
    user_id: UUID = Depends(get_current_user_id),
    practice_service: PracticeService = Depends(get_practice_service),
) -> StreakResponse:
    return StreakResponse(**await practice_service.get_streak(user_id))

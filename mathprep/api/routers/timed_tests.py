"""
Timed test API endpoints.

Routes:
- POST /tests - Generate a test
- POST /tests/grade - Grade a submitted test

Dependencies: mathprep.application.services, mathprep.models
System role: Test HTTP API
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends

from mathprep.api.deps.dependencies import get_current_user_id, get_test_service
from mathprep.api.routers.router_utils import handle_domain_errors
from mathprep.application.services import TestService
from mathprep.models.timed_test import (
    GeneratedTestResponse,
    GenerateTestRequest,
    GradeTestRequest,
    GradeTestResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/tests", tags=["tests"])


@router.post("", response_model=GeneratedTestResponse, status_code=201)
@handle_domain_errors
async def generate_test(
    request: GenerateTestRequest,
    user_id: UUID = Depends(get_current_user_id),
    test_service: TestService = Depends(get_test_service),
) -> GeneratedTestResponse:
    test = await test_service.generate_test(
        user_id,
        division=request.division,
        topics=request.topics,
        min_difficulty=request.min_difficulty,
        max_difficulty=request.max_difficulty,
        num_problems=request.num_problems,
    )
    return GeneratedTestResponse(**test)


@router.post("/grade", response_model=GradeTestResponse)
@handle_domain_errors
async def grade_test(
    request: GradeTestRequest,
    user_id: UUID = Depends(get_current_user_id),
    test_service: TestService = Depends(get_test_service),
) -> GradeTestResponse:
    result = await test_service.grade_submitted_test(
        user_id,
        test_id=request.test_id,
        division=request.division,
        topic=request.topic,
        answers=request.answers,
    )
    return GradeTestResponse(**result)

"""
Profile API endpoints.

Routes:
- GET /profiles/me - Get (or create) the caller's profile
- PATCH /profiles/me - Update grade level
- GET /profiles/me/stats - Profile stats

Dependencies: mathprep.application.services, mathprep.models
System role: Profile HTTP API
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends

from mathprep.api.deps.dependencies import (
    CallerMetadata,
    get_caller_metadata,
    get_current_user_id,
    get_profile_service,
)
from mathprep.api.routers.router_utils import handle_domain_errors
from mathprep.application.services import ProfileService
from mathprep.models.profile import ProfileResponse, ProfileStatsResponse, UpdateProfileRequest

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/profiles", tags=["profiles"])


@router.get("/me", response_model=ProfileResponse)
@handle_domain_errors
async def get_my_profile(
    user_id: UUID = Depends(get_current_user_id),
    metadata: CallerMetadata = Depends(get_caller_metadata),
    profile_service: ProfileService = Depends(get_profile_service),
) -> ProfileResponse:
    """Return the caller's profile, creating it on first request."""
    profile = await profile_service.get_or_create_profile(
        user_id, username=metadata.username, grade_level=metadata.grade_level
    )
    return ProfileResponse(**profile)


@router.patch("/me", response_model=ProfileResponse)
@handle_domain_errors
async def update_my_profile(
    request: UpdateProfileRequest,
    user_id: UUID = Depends(get_current_user_id),
    profile_service: ProfileService = Depends(get_profile_service),
) -> ProfileResponse:
    logger.info("Updating grade level", extra={"user_id": str(user_id), "grade_level": request.grade_level})
    profile = await profile_service.update_grade_level(user_id, request.grade_level)
    return ProfileResponse(**profile)


@router.get("/me/stats", response_model=ProfileStatsResponse)
@handle_domain_errors
async def get_my_stats(
    user_id: UUID = Depends(get_current_user_id),
    profile_service: ProfileService = Depends(get_profile_service),
) -> ProfileStatsResponse:
    return ProfileStatsResponse(**await profile_service.get_stats(user_id))

"""
Reward API endpoints.

Routes:
- GET /rewards/badges - Caller's badges
- GET /rewards/badges/catalog - All badges
- GET /rewards/achievements - Caller's achievements with stats

Dependencies: mathprep.application.services, mathprep.models
System role: Reward HTTP API
"""

from uuid import UUID

from fastapi import APIRouter, Depends

from mathprep.api.deps.dependencies import get_current_user_id, get_reward_service
from mathprep.api.routers.router_utils import handle_domain_errors
from mathprep.application.services import RewardService
from mathprep.models.reward import AchievementsResponse, BadgeResponse, UserBadgeResponse

router = APIRouter(prefix="/rewards", tags=["rewards"])


@router.get("/badges", response_model=list[UserBadgeResponse])
@handle_domain_errors
async def list_my_badges(
    user_id: UUID = Depends(get_current_user_id),
    reward_service: RewardService = Depends(get_reward_service),
) -> list[UserBadgeResponse]:
    return [UserBadgeResponse(**b) for b in await reward_service.list_user_badges(user_id)]


@router.get("/badges/catalog", response_model=list[BadgeResponse])
@handle_domain_errors
async def list_badge_catalog(
    _: UUID = Depends(get_current_user_id),
    reward_service: RewardService = Depends(get_reward_service),
) -> list[BadgeResponse]:
    return [BadgeResponse(**b) for b in await reward_service.list_badge_catalog()]


@router.get("/achievements", response_model=AchievementsResponse)
@handle_domain_errors
async def list_my_achievements(
    user_id: UUID = Depends(get_current_user_id),
    reward_service: RewardService = Depends(get_reward_service),
) -> AchievementsResponse:
    return AchievementsResponse(**await reward_service.list_achievements(user_id))

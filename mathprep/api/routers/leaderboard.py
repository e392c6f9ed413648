"""
Leaderboard API endpoints.

Routes:
- GET /leaderboard - Ranked entries
- GET /leaderboard/filters - Available filter values

Dependencies: mathprep.application.services, mathprep.models
System role: Leaderboard HTTP API
"""

from typing import Literal
from uuid import UUID

from fastapi import APIRouter, Depends, Query

from mathprep.api.deps.dependencies import get_current_user_id, get_leaderboard_service
from mathprep.api.routers.router_utils import handle_domain_errors
from mathprep.application.services import LeaderboardService
from mathprep.models.leaderboard import LeaderboardEntryResponse, LeaderboardFiltersResponse

router = APIRouter(prefix="/leaderboard", tags=["leaderboard"])


@router.get("", response_model=list[LeaderboardEntryResponse])
@handle_domain_errors
async def get_leaderboard(
    grade_level: str | None = None,
    division: str | None = None,
    topic: str | None = None,
    order_by: Literal["average_score", "points"] = "average_score",
    limit: int = Query(100, ge=1, le=500),
    _: UUID = Depends(get_current_user_id),
    leaderboard_service: LeaderboardService = Depends(get_leaderboard_service),
) -> list[LeaderboardEntryResponse]:
    entries = await leaderboard_service.get_leaderboard(
        grade_level=grade_level,
        division=division,
        topic=topic,
        order_by=order_by,
        limit=limit,
    )
    return [LeaderboardEntryResponse(**e) for e in entries]


@router.get("/filters", response_model=LeaderboardFiltersResponse)
@handle_domain_errors
async def get_leaderboard_filters(
    _: UUID = Depends(get_current_user_id),
    leaderboard_service: LeaderboardService = Depends(get_leaderboard_service),
) -> LeaderboardFiltersResponse:
    return LeaderboardFiltersResponse(**await leaderboard_service.get_filter_options())

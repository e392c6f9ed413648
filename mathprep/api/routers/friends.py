"""
Friend API endpoints.

Routes:
- GET /friends - Caller's friends
- GET /friends/search?q= - Search users by username prefix
- GET /friends/requests/incoming - Pending requests received
- GET /friends/requests/outgoing - Pending requests sent
- POST /friends/requests - Send a request
- POST /friends/requests/{id}/respond - Accept or reject
- DELETE /friends/{friend_id} - Remove a friend

Dependencies: mathprep.application.services, mathprep.models
System role: Friends HTTP API
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Query

from mathprep.api.deps.dependencies import get_current_user_id, get_friend_service
from mathprep.api.routers.router_utils import handle_domain_errors
from mathprep.application.services import FriendService
from mathprep.models.friend import (
    FriendProfileResponse,
    FriendRequestCreate,
    FriendRequestRespond,
    FriendRequestResponse,
)

router = APIRouter(prefix="/friends", tags=["friends"])


@router.get("", response_model=list[FriendProfileResponse])
@handle_domain_errors
async def list_friends(
    user_id: UUID = Depends(get_current_user_id),
    friend_service: FriendService = Depends(get_friend_service),
) -> list[FriendProfileResponse]:
    return [FriendProfileResponse(**f) for f in await friend_service.list_friends(user_id)]


@router.get("/search", response_model=list[FriendProfileResponse])
@handle_domain_errors
async def search_users(
    q: str = Query(..., min_length=1, max_length=255),
    limit: int = Query(20, ge=1, le=100),
    user_id: UUID = Depends(get_current_user_id),
    friend_service: FriendService = Depends(get_friend_service),
) -> list[FriendProfileResponse]:
    return [FriendProfileResponse(**p) for p in await friend_service.search_users(user_id, q, limit)]


@router.get("/requests/incoming", response_model=list[FriendRequestResponse])
@handle_domain_errors
async def list_incoming_requests(
    user_id: UUID = Depends(get_current_user_id),
    friend_service: FriendService = Depends(get_friend_service),
) -> list[FriendRequestResponse]:
    return [FriendRequestResponse(**r) for r in await friend_service.list_incoming(user_id)]


@router.get("/requests/outgoing", response_model=list[FriendRequestResponse])
@handle_domain_errors
async def list_outgoing_requests(
    user_id: UUID = Depends(get_current_user_id),
    friend_service: FriendService = Depends(get_friend_service),
) -> list[FriendRequestResponse]:
    return [FriendRequestResponse(**r) for r in await friend_service.list_outgoing(user_id)]


@router.post("/requests", response_model=FriendRequestResponse, status_code=201)
@handle_domain_errors
async def send_friend_request(
    request: FriendRequestCreate,
    user_id: UUID = Depends(get_current_user_id),
    friend_service: FriendService = Depends(get_friend_service),
) -> FriendRequestResponse:
    return FriendRequestResponse(**await friend_service.send_request(user_id, request.recipient_id))


@router.post("/requests/{request_id}/respond", response_model=FriendRequestResponse)
@handle_domain_errors
async def respond_to_request(
    request_id: UUID,
    request: FriendRequestRespond,
    user_id: UUID = Depends(get_current_user_id),
    friend_service: FriendService = Depends(get_friend_service),
) -> FriendRequestResponse:
    result = await friend_service.respond(user_id, request_id, accept=request.action == "accept")
    return FriendRequestResponse(**result)


@router.delete("/{friend_id}", status_code=204)
@handle_domain_errors
async def remove_friend(
    friend_id: UUID,
    user_id: UUID = Depends(get_current_user_id),
    friend_service: FriendService = Depends(get_friend_service),
) -> None:
    await friend_service.remove_friend(user_id, friend_id)

"""
Admin API endpoints.

Routes:
- GET /admin/users - Users, newest first
- GET /admin/users/admins - Admin users
- PATCH /admin/users/{user_id}/role - Change a user's role

Dependencies: mathprep.application.services, mathprep.models
System role: User administration HTTP API
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, Query

from mathprep.api.deps.dependencies import get_admin_service, require_admin
from mathprep.api.routers.router_utils import handle_domain_errors
from mathprep.application.services import AdminService
from mathprep.models.admin import AdminUserResponse, UpdateRoleRequest

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["admin"])


@router.get("/users", response_model=list[AdminUserResponse])
@handle_domain_errors
async def list_users(
    limit: int = Query(100, ge=1, le=1000),
    _: UUID = Depends(require_admin),
    admin_service: AdminService = Depends(get_admin_service),
) -> list[AdminUserResponse]:
    return [AdminUserResponse(**u) for u in await admin_service.list_users(limit)]


@router.get("/users/admins", response_model=list[AdminUserResponse])
@handle_domain_errors
async def list_admins(
    _: UUID = Depends(require_admin),
    admin_service: AdminService = Depends(get_admin_service),
) -> list[AdminUserResponse]:
    return [AdminUserResponse(**u) for u in await admin_service.list_admins()]


@router.patch("/users/{user_id}/role", response_model=AdminUserResponse)
@handle_domain_errors
async def update_user_role(
    user_id: UUID,
    request: UpdateRoleRequest,
    admin_id: UUID = Depends(require_admin),
    admin_service: AdminService = Depends(get_admin_service),
) -> AdminUserResponse:
    logger.info(
        "Changing user role",
        extra={"admin_id": str(admin_id), "user_id": str(user_id), "role": request.role.value},
    )
    return AdminUserResponse(**await admin_service.update_role(admin_id, user_id, request.role))

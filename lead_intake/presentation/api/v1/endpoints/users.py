"""User registration and admin-side user management endpoints."""

from fastapi import APIRouter, Depends, status

from lead_intake.application.schemas.user import (
    UserCreate,
    UserDeleteResponse,
    UserListResponse,
    UserResponse,
    UserUpdate,
    UserUpdateResponse,
)
from lead_intake.application.services import UserAdminService
from lead_intake.domain.entities import Principal
from lead_intake.infrastructure.dependencies import get_current_principal, get_user_admin_service

router = APIRouter(tags=["Users"])


@router.post("/users", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def register_user(
    data: UserCreate,
    service: UserAdminService = Depends(get_user_admin_service),
) -> UserResponse:
    """Register a plain user account. Credentials are handled upstream."""
    user = await service.register_user(data.name, data.email)
    return UserResponse.model_validate(user)


@router.get("/admin/users", response_model=UserListResponse)
async def list_users(
    principal: Principal = Depends(get_current_principal),
    service: UserAdminService = Depends(get_user_admin_service),
) -> UserListResponse:
    """List every account (admin only)."""
    users = await service.list_users(principal)
    return UserListResponse(
        users=[UserResponse.model_validate(u) for u in users],
        total=len(users),
    )


@router.put("/admin/users/{user_id}", response_model=UserUpdateResponse)
async def update_user(
    user_id: str,
    data: UserUpdate,
    principal: Principal = Depends(get_current_principal),
    service: UserAdminService = Depends(get_user_admin_service),
) -> UserUpdateResponse:
    """Change a user's role or active flag (admin only, never one's own role)."""
    user = await service.update_user(
        principal, user_id, role=data.role, is_active=data.is_active
    )
    return UserUpdateResponse(user=UserResponse.model_validate(user))


@router.delete("/admin/users/{user_id}", response_model=UserDeleteResponse)
async def delete_user(
    user_id: str,
    principal: Principal = Depends(get_current_principal),
    service: UserAdminService = Depends(get_user_admin_service),
) -> UserDeleteResponse:
    """Delete a user; their buyers move to another admin or become orphaned."""
    deletion = await service.delete_user(principal, user_id)
    return UserDeleteResponse(
        deleted_user=UserResponse.model_validate(deletion.user),
        transferred_buyers=deletion.owned_buyers,
        message=deletion.message,
    )

"""
Users router — account management endpoints.

All endpoints require a valid JWT. Who may do what is decided by
UserService; see the authorization matrix in services/user_service.py.

Endpoints:
  GET    /users                   — List all accounts (admin/moderator)
  GET    /users/me                — The caller's own account
  GET    /users/{user_id}         — One account (self, or admin/moderator)
  PATCH  /users/{user_id}         — Update first/last name (self or admin)
  DELETE /users/{user_id}         — Delete an account (self or admin)
  PATCH  /users/{user_id}/{action} — "enable" or "disable" (admin/moderator)
"""

import uuid

from fastapi import APIRouter, Depends, Response, status

from pet_tracker.dependencies import get_current_user, get_user_service
from pet_tracker.models.user import User
from pet_tracker.schemas.user import UserResponse, UserUpdateRequest
from pet_tracker.services.user_service import UserService

router = APIRouter()


@router.get(
    "",
    response_model=list[UserResponse],
    summary="List all users",
)
async def list_users(
    caller: User = Depends(get_current_user),
    service: UserService = Depends(get_user_service),
):
    return await service.list_all(caller)


@router.get(
    "/me",
    response_model=UserResponse,
    summary="Get the current user",
)
async def get_me(caller: User = Depends(get_current_user)):
    return caller


@router.get(
    "/{user_id}",
    response_model=UserResponse,
    summary="Get a user by id",
)
async def get_user(
    user_id: uuid.UUID,
    caller: User = Depends(get_current_user),
    service: UserService = Depends(get_user_service),
):
    return await service.get_by_id(user_id, caller)


@router.patch(
    "/{user_id}",
    response_model=UserResponse,
    summary="Update a user's name",
)
async def update_user(
    user_id: uuid.UUID,
    updates: UserUpdateRequest,
    caller: User = Depends(get_current_user),
    service: UserService = Depends(get_user_service),
):
    """
    Update first and/or last name.

    Only provided (non-null) fields are updated — omitted fields remain
    unchanged. Email, username, role and password cannot be changed here.
    """
    return await service.update_profile(
        user_id,
        caller,
        first_name=updates.firstname,
        last_name=updates.lastname,
    )


@router.delete(
    "/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a user",
)
async def delete_user(
    user_id: uuid.UUID,
    caller: User = Depends(get_current_user),
    service: UserService = Depends(get_user_service),
):
    await service.delete_by_id(user_id, caller)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.patch(
    "/{user_id}/{action}",
    response_model=UserResponse,
    summary="Enable or disable a user",
)
async def set_user_enabled(
    user_id: uuid.UUID,
    action: str,
    caller: User = Depends(get_current_user),
    service: UserService = Depends(get_user_service),
):
    """Ban (`disable`) or unban (`enable`) an account. Case-insensitive."""
    return await service.set_enabled(user_id, caller, action)

"""User management endpoints"""

from typing import List
from uuid import UUID
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from fieldops.api.dependencies import get_actor
from fieldops.database import get_db
from fieldops.schemas.auth import AckResponse
from fieldops.schemas.user import (
    RoleUpdate,
    UserCreate,
    UserDeleteRequest,
    UserResponse,
    UserUpdate,
)
from fieldops.services.access_control import ActorContext
from fieldops.services.user_service import UserService

router = APIRouter(prefix="/api/v1/users", tags=["Users"])


@router.get("", response_model=List[UserResponse])
async def list_users(
    actor: ActorContext = Depends(get_actor),
    db: AsyncSession = Depends(get_db),
):
    """List every user; available to any authenticated user"""
    return await UserService(db).list_users()


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def create_user(
    data: UserCreate,
    actor: ActorContext = Depends(get_actor),
    db: AsyncSession = Depends(get_db),
):
    """Create a user (admin only)"""
    return await UserService(db).create_user(actor, data)


@router.put("/{user_id}", response_model=UserResponse)
async def update_user(
    user_id: UUID,
    data: UserUpdate,
    actor: ActorContext = Depends(get_actor),
    db: AsyncSession = Depends(get_db),
):
    return await UserService(db).update_user(actor, user_id, data)


@router.put("/{user_id}/role", response_model=UserResponse)
async def update_role(
    user_id: UUID,
    data: RoleUpdate,
    actor: ActorContext = Depends(get_actor),
    db: AsyncSession = Depends(get_db),
):
    return await UserService(db).set_role(actor, user_id, data.role)


@router.delete("/{user_id}", response_model=AckResponse)
async def delete_user(
    user_id: UUID,
    data: UserDeleteRequest,
    actor: ActorContext = Depends(get_actor),
    db: AsyncSession = Depends(get_db),
):
    """
    Delete a user and everything they own (admin only)

    The admin must re-enter their own password. Deleting one's own account
    is always refused.
    """
    await UserService(db).delete_user(actor, user_id, data.admin_password)
    return AckResponse(message="User deleted")

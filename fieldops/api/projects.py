"""Project management endpoints"""

from typing import List
from uuid import UUID
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from fieldops.api.dependencies import get_actor
from fieldops.database import get_db
from fieldops.schemas.auth import AckResponse
from fieldops.schemas.project import (
    ProjectCreate,
    ProjectDetailResponse,
    ProjectMemberAdd,
    ProjectMemberResponse,
    ProjectMessageCreate,
    ProjectMessageResponse,
    ProjectResponse,
    ProjectUpdate,
)
from fieldops.services.access_control import ActorContext
from fieldops.services.project_service import ProjectService

router = APIRouter(prefix="/api/v1/projects", tags=["Projects"])


@router.get("", response_model=List[ProjectDetailResponse], status_code=status.HTTP_200_OK)
async def get_projects(
    actor: ActorContext = Depends(get_actor),
    db: AsyncSession = Depends(get_db),
):
    """
    Get all projects, newest first

    Each project carries its photo count
    """
    return await ProjectService(db).list_projects()


@router.post("", response_model=ProjectResponse, status_code=status.HTTP_201_CREATED)
async def create_project(
    data: ProjectCreate,
    actor: ActorContext = Depends(get_actor),
    db: AsyncSession = Depends(get_db),
):
    return await ProjectService(db).create(actor, data)


@router.get("/{project_id}", response_model=ProjectDetailResponse, status_code=status.HTTP_200_OK)
async def get_project(
    project_id: UUID,
    actor: ActorContext = Depends(get_actor),
    db: AsyncSession = Depends(get_db),
):
    """
    Get project details by ID

    Returns project with photo count and last photo timestamp
    """
    return await ProjectService(db).get_detail(project_id)


@router.put("/{project_id}", response_model=ProjectResponse, status_code=status.HTTP_200_OK)
async def update_project(
    project_id: UUID,
    data: ProjectUpdate,
    actor: ActorContext = Depends(get_actor),
    db: AsyncSession = Depends(get_db),
):
    return await ProjectService(db).update(actor, project_id, data)


@router.delete("/{project_id}", response_model=AckResponse)
async def delete_project(
    project_id: UUID,
    actor: ActorContext = Depends(get_actor),
    db: AsyncSession = Depends(get_db),
):
    """Delete a project with its photos, members and chat (admin only)"""
    await ProjectService(db).delete(actor, project_id)
    return AckResponse(message="Project deleted")


@router.get("/{project_id}/members", response_model=List[ProjectMemberResponse])
async def list_members(
    project_id: UUID,
    actor: ActorContext = Depends(get_actor),
    db: AsyncSession = Depends(get_db),
):
    return await ProjectService(db).list_members(project_id)


@router.post(
    "/{project_id}/members",
    response_model=ProjectMemberResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_member(
    project_id: UUID,
    data: ProjectMemberAdd,
    actor: ActorContext = Depends(get_actor),
    db: AsyncSession = Depends(get_db),
):
    return await ProjectService(db).add_member(actor, project_id, data.user_id)


@router.delete("/{project_id}/members/{user_id}", response_model=AckResponse)
async def remove_member(
    project_id: UUID,
    user_id: UUID,
    actor: ActorContext = Depends(get_actor),
    db: AsyncSession = Depends(get_db),
):
    await ProjectService(db).remove_member(actor, project_id, user_id)
    return AckResponse(message="Member removed")


@router.get("/{project_id}/messages", response_model=List[ProjectMessageResponse])
async def list_messages(
    project_id: UUID,
    actor: ActorContext = Depends(get_actor),
    db: AsyncSession = Depends(get_db),
):
    """Latest 100 project chat messages, oldest first"""
    return await ProjectService(db).list_messages(actor, project_id)


@router.post(
    "/{project_id}/messages",
    response_model=ProjectMessageResponse,
    status_code=status.HTTP_201_CREATED,
)
async def send_message(
    project_id: UUID,
    data: ProjectMessageCreate,
    actor: ActorContext = Depends(get_actor),
    db: AsyncSession = Depends(get_db),
):
    return await ProjectService(db).send_message(actor, project_id, data.content)

"""Chat board endpoints"""

from typing import List
from uuid import UUID
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from fieldops.api.dependencies import get_actor
from fieldops.database import get_db
from fieldops.schemas.auth import AckResponse
from fieldops.schemas.board import (
    BoardCreate,
    BoardDetailResponse,
    BoardMemberAdd,
    BoardMemberResponse,
    BoardMemberUpdate,
    BoardResponse,
    BoardUpdate,
)
from fieldops.schemas.message import MessageResponse
from fieldops.services.access_control import ActorContext
from fieldops.services.board_service import BoardService
from fieldops.services.message_service import MessageService

router = APIRouter(prefix="/api/v1/boards", tags=["Boards"])


@router.get("", response_model=List[BoardDetailResponse])
async def list_boards(
    actor: ActorContext = Depends(get_actor),
    db: AsyncSession = Depends(get_db),
):
    """Boards visible to the caller, with their members"""
    return await BoardService(db).list_visible(actor)


@router.post("", response_model=BoardDetailResponse, status_code=status.HTTP_201_CREATED)
async def create_board(
    data: BoardCreate,
    actor: ActorContext = Depends(get_actor),
    db: AsyncSession = Depends(get_db),
):
    """Create a board (admin only); the creator joins with edit rights"""
    return await BoardService(db).create(actor, data)


@router.put("/{board_id}", response_model=BoardResponse)
async def update_board(
    board_id: UUID,
    data: BoardUpdate,
    actor: ActorContext = Depends(get_actor),
    db: AsyncSession = Depends(get_db),
):
    return await BoardService(db).update(actor, board_id, data)


@router.delete("/{board_id}", response_model=AckResponse)
async def delete_board(
    board_id: UUID,
    actor: ActorContext = Depends(get_actor),
    db: AsyncSession = Depends(get_db),
):
    await BoardService(db).delete(actor, board_id)
    return AckResponse(message="Board deleted")


@router.get("/{board_id}/members", response_model=List[BoardMemberResponse])
async def list_members(
    board_id: UUID,
    actor: ActorContext = Depends(get_actor),
    db: AsyncSession = Depends(get_db),
):
    return await BoardService(db).list_members(actor, board_id)


@router.post(
    "/{board_id}/members",
    response_model=BoardMemberResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_member(
    board_id: UUID,
    data: BoardMemberAdd,
    actor: ActorContext = Depends(get_actor),
    db: AsyncSession = Depends(get_db),
):
    return await BoardService(db).add_member(actor, board_id, data.user_id, data.can_edit)


@router.put("/{board_id}/members/{user_id}", response_model=BoardMemberResponse)
async def update_member(
    board_id: UUID,
    user_id: UUID,
    data: BoardMemberUpdate,
    actor: ActorContext = Depends(get_actor),
    db: AsyncSession = Depends(get_db),
):
    return await BoardService(db).update_member(actor, board_id, user_id, data.can_edit)


@router.delete("/{board_id}/members/{user_id}", response_model=AckResponse)
async def remove_member(
    board_id: UUID,
    user_id: UUID,
    actor: ActorContext = Depends(get_actor),
    db: AsyncSession = Depends(get_db),
):
    await BoardService(db).remove_member(actor, board_id, user_id)
    return AckResponse(message="Member removed")


@router.get("/{board_id}/messages", response_model=List[MessageResponse])
async def list_messages(
    board_id: UUID,
    actor: ActorContext = Depends(get_actor),
    db: AsyncSession = Depends(get_db),
):
    """Latest 100 board messages, oldest first"""
    return await MessageService(db).list_board_messages(actor, board_id)

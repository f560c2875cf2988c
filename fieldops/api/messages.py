"""Chat message endpoints"""

from typing import List
from uuid import UUID
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from fieldops.api.dependencies import get_actor
from fieldops.database import get_db
from fieldops.schemas.auth import AckResponse
from fieldops.schemas.message import MessageCreate, MessageLockUpdate, MessageResponse
from fieldops.services.access_control import ActorContext
from fieldops.services.message_service import MessageService

router = APIRouter(prefix="/api/v1/messages", tags=["Messages"])


@router.post("", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
async def send_message(
    data: MessageCreate,
    actor: ActorContext = Depends(get_actor),
    db: AsyncSession = Depends(get_db),
):
    """Post to a board (board_id) or directly to a user (receiver_id)"""
    return await MessageService(db).send(actor, data)


@router.get("/direct/{user_id}", response_model=List[MessageResponse])
async def direct_conversation(
    user_id: UUID,
    actor: ActorContext = Depends(get_actor),
    db: AsyncSession = Depends(get_db),
):
    """Latest 100 direct messages with one user, oldest first"""
    return await MessageService(db).list_direct_messages(actor, user_id)


@router.delete("/{message_id}", response_model=AckResponse)
async def delete_message(
    message_id: UUID,
    actor: ActorContext = Depends(get_actor),
    db: AsyncSession = Depends(get_db),
):
    await MessageService(db).delete(actor, message_id)
    return AckResponse(message="Message deleted")


@router.put("/{message_id}/lock", response_model=MessageResponse)
async def lock_message(
    message_id: UUID,
    data: MessageLockUpdate,
    actor: ActorContext = Depends(get_actor),
    db: AsyncSession = Depends(get_db),
):
    """Lock or unlock a message (admin only)"""
    return await MessageService(db).set_lock(actor, message_id, data.is_locked)

"""Chat message service: board messages and direct messages"""

import logging
from typing import List
from uuid import UUID

from sqlalchemy import and_, or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from fieldops.exceptions import InvalidInput, NotFound
from fieldops.models import Message, Photo, User
from fieldops.schemas.message import MessageCreate
from fieldops.services.access_control import (
    ActorContext,
    can_delete_message,
    ensure,
    require_admin,
)
from fieldops.services.board_service import BoardService

logger = logging.getLogger(__name__)

MESSAGE_LIMIT = 100


class MessageService:
    """
    Service for chat messages.
    Listings return the most recent messages, oldest first, so a polling
    client can render them top to bottom.
    """

    def __init__(self, db: AsyncSession):
        """Initialize with database session"""
        self.db = db
        self.boards = BoardService(db)

    def _with_relations(self, query):
        return query.options(selectinload(Message.sender), selectinload(Message.photo))

    async def get(self, message_id: UUID) -> Message:
        result = await self.db.execute(select(Message).where(Message.id == message_id))
        message = result.scalar_one_or_none()
        if not message:
            raise NotFound(f"Message {message_id} not found")
        return message

    async def _get_detail(self, message_id: UUID) -> Message:
        result = await self.db.execute(
            self._with_relations(select(Message).where(Message.id == message_id))
            .execution_options(populate_existing=True)
        )
        return result.scalar_one()

    async def list_board_messages(
        self, actor: ActorContext, board_id: UUID, limit: int = MESSAGE_LIMIT
    ) -> List[Message]:
        """
        Latest messages on a board, oldest first.

        Raises:
            NotFound: Board does not exist
            Forbidden: Actor is neither admin nor a member
        """
        await self.boards.ensure_board_access(actor, board_id)
        result = await self.db.execute(
            self._with_relations(
                select(Message)
                .where(Message.board_id == board_id)
                .order_by(Message.created_at.desc())
                .limit(limit)
            )
        )
        messages = list(result.scalars().all())
        messages.reverse()
        return messages

    async def list_direct_messages(
        self, actor: ActorContext, other_user_id: UUID, limit: int = MESSAGE_LIMIT
    ) -> List[Message]:
        """Latest direct messages between the actor and another user, oldest first"""
        conversation = or_(
            and_(Message.sender_id == actor.user_id, Message.receiver_id == other_user_id),
            and_(Message.sender_id == other_user_id, Message.receiver_id == actor.user_id),
        )
        result = await self.db.execute(
            self._with_relations(
                select(Message)
                .where(Message.board_id.is_(None), conversation)
                .order_by(Message.created_at.desc())
                .limit(limit)
            )
        )
        messages = list(result.scalars().all())
        messages.reverse()
        return messages

    async def send(self, actor: ActorContext, data: MessageCreate) -> Message:
        """
        Post a message to a board or directly to a user.

        Raises:
            Forbidden: Posting to, or attaching a photo from, a board the actor
                is not a member of
            NotFound: Board, receiver or photo does not exist
        """
        if data.board_id is not None:
            await self.boards.ensure_board_access(actor, data.board_id)
        else:
            if data.receiver_id == actor.user_id:
                raise InvalidInput("Cannot send a direct message to yourself")
            receiver = await self.db.get(User, data.receiver_id)
            if not receiver:
                raise NotFound(f"User {data.receiver_id} not found")

        if data.photo_id is not None:
            photo = await self.db.get(Photo, data.photo_id)
            if not photo:
                raise NotFound(f"Photo {data.photo_id} not found")
            if photo.board_id is not None:
                await self.boards.ensure_board_access(actor, photo.board_id)

        message = Message(
            sender_id=actor.user_id,
            board_id=data.board_id,
            receiver_id=data.receiver_id if data.board_id is None else None,
            content=data.content,
            photo_id=data.photo_id,
        )
        self.db.add(message)
        await self.db.commit()
        logger.info(f"User {actor.user_id} sent message {message.id}")
        return await self._get_detail(message.id)

    async def delete(self, actor: ActorContext, message_id: UUID) -> None:
        message = await self.get(message_id)
        ensure(can_delete_message(actor, message))
        await self.db.delete(message)
        await self.db.commit()
        logger.info(f"User {actor.user_id} deleted message {message_id}")

    async def set_lock(self, actor: ActorContext, message_id: UUID, is_locked: bool) -> Message:
        ensure(require_admin(actor))
        message = await self.get(message_id)
        message.is_locked = is_locked
        await self.db.commit()
        logger.info(f"Admin {actor.user_id} set lock={is_locked} on message {message_id}")
        return await self._get_detail(message.id)

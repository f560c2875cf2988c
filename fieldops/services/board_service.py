"""Chat board service: boards and their memberships"""

import logging
from typing import Iterable, List, Optional
from uuid import UUID

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from fieldops.exceptions import InvalidInput, NotFound
from fieldops.models import Board, BoardMember, Message, Photo, User
from fieldops.schemas.board import BoardCreate, BoardUpdate
from fieldops.services.access_control import (
    ActorContext,
    can_access_board,
    ensure,
    require_admin,
)

logger = logging.getLogger(__name__)


class BoardService:
    """
    Service for chat boards.
    Admins see and manage every board; other users see only boards they
    are members of.
    """

    def __init__(self, db: AsyncSession):
        """Initialize with database session"""
        self.db = db

    async def get(self, board_id: UUID) -> Board:
        result = await self.db.execute(select(Board).where(Board.id == board_id))
        board = result.scalar_one_or_none()
        if not board:
            raise NotFound(f"Board {board_id} not found")
        return board

    async def get_detail(self, board_id: UUID) -> Board:
        """Board with members and their users loaded"""
        result = await self.db.execute(
            select(Board)
            .where(Board.id == board_id)
            .options(selectinload(Board.members).selectinload(BoardMember.user))
            .execution_options(populate_existing=True)
        )
        board = result.scalar_one_or_none()
        if not board:
            raise NotFound(f"Board {board_id} not found")
        return board

    async def get_membership(self, board_id: UUID, user_id: UUID) -> Optional[BoardMember]:
        result = await self.db.execute(
            select(BoardMember).where(
                BoardMember.board_id == board_id, BoardMember.user_id == user_id
            )
        )
        return result.scalar_one_or_none()

    async def ensure_board_access(self, actor: ActorContext, board_id: UUID) -> Board:
        """Load a board and check the actor may read or post on it"""
        board = await self.get(board_id)
        membership = None
        if not actor.is_admin:
            membership = await self.get_membership(board_id, actor.user_id)
        ensure(can_access_board(actor, membership))
        return board

    async def list_visible(self, actor: ActorContext) -> List[Board]:
        query = (
            select(Board)
            .options(selectinload(Board.members).selectinload(BoardMember.user))
            .order_by(Board.created_at.desc())
        )
        if not actor.is_admin:
            member_of = select(BoardMember.board_id).where(BoardMember.user_id == actor.user_id)
            query = query.where(Board.id.in_(member_of))

        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def _ensure_users_exist(self, user_ids: Iterable[UUID]) -> None:
        wanted = set(user_ids)
        if not wanted:
            return
        result = await self.db.execute(select(User.id).where(User.id.in_(wanted)))
        missing = wanted - set(result.scalars().all())
        if missing:
            raise NotFound(f"Users not found: {', '.join(sorted(str(m) for m in missing))}")

    async def create(self, actor: ActorContext, data: BoardCreate) -> Board:
        """
        Create a board. Listed members join without edit rights; the creating
        admin joins with edit rights.
        """
        ensure(require_admin(actor))

        member_ids = [uid for uid in dict.fromkeys(data.member_ids) if uid != actor.user_id]
        await self._ensure_users_exist(member_ids)

        board = Board(
            name=data.name,
            type=data.type,
            created_by=actor.user_id,
            allow_user_editing=data.allow_user_editing,
        )
        self.db.add(board)
        await self.db.flush()

        for user_id in member_ids:
            self.db.add(BoardMember(board_id=board.id, user_id=user_id, can_edit=False))
        self.db.add(BoardMember(board_id=board.id, user_id=actor.user_id, can_edit=True))

        await self.db.commit()
        logger.info(f"Admin {actor.user_id} created board {board.id} with {len(member_ids) + 1} members")
        return await self.get_detail(board.id)

    async def update(self, actor: ActorContext, board_id: UUID, data: BoardUpdate) -> Board:
        ensure(require_admin(actor))
        board = await self.get(board_id)

        for field, value in data.model_dump(exclude_unset=True).items():
            if value is not None:
                setattr(board, field, value)

        await self.db.commit()
        await self.db.refresh(board)
        logger.info(f"Admin {actor.user_id} updated board {board_id}")
        return board

    async def delete(self, actor: ActorContext, board_id: UUID) -> None:
        """Delete a board with its messages and memberships; its photos are detached"""
        ensure(require_admin(actor))
        board = await self.get(board_id)

        await self.db.execute(delete(Message).where(Message.board_id == board_id))
        await self.db.execute(delete(BoardMember).where(BoardMember.board_id == board_id))
        await self.db.execute(
            update(Photo).where(Photo.board_id == board_id).values(board_id=None)
        )
        await self.db.execute(delete(Board).where(Board.id == board.id))
        await self.db.commit()
        logger.info(f"Admin {actor.user_id} deleted board {board_id}")

    async def _get_member_detail(self, member_id: UUID) -> BoardMember:
        result = await self.db.execute(
            select(BoardMember)
            .where(BoardMember.id == member_id)
            .options(selectinload(BoardMember.user))
            .execution_options(populate_existing=True)
        )
        return result.scalar_one()

    async def list_members(self, actor: ActorContext, board_id: UUID) -> List[BoardMember]:
        await self.ensure_board_access(actor, board_id)
        result = await self.db.execute(
            select(BoardMember)
            .where(BoardMember.board_id == board_id)
            .options(selectinload(BoardMember.user))
            .order_by(BoardMember.joined_at)
        )
        return list(result.scalars().all())

    async def add_member(
        self, actor: ActorContext, board_id: UUID, user_id: UUID, can_edit: bool = False
    ) -> BoardMember:
        ensure(require_admin(actor))
        await self.get(board_id)
        await self._ensure_users_exist([user_id])

        if await self.get_membership(board_id, user_id):
            raise InvalidInput("User already a member")

        member = BoardMember(board_id=board_id, user_id=user_id, can_edit=can_edit)
        self.db.add(member)
        await self.db.commit()
        logger.info(f"Added user {user_id} to board {board_id} (can_edit={can_edit})")
        return await self._get_member_detail(member.id)

    async def update_member(
        self, actor: ActorContext, board_id: UUID, user_id: UUID, can_edit: bool
    ) -> BoardMember:
        ensure(require_admin(actor))
        member = await self.get_membership(board_id, user_id)
        if not member:
            raise NotFound("Member not found")

        member.can_edit = can_edit
        await self.db.commit()
        logger.info(f"Set can_edit={can_edit} for user {user_id} on board {board_id}")
        return await self._get_member_detail(member.id)

    async def remove_member(self, actor: ActorContext, board_id: UUID, user_id: UUID) -> None:
        ensure(require_admin(actor))
        member = await self.get_membership(board_id, user_id)
        if not member:
            raise NotFound("Member not found")

        await self.db.delete(member)
        await self.db.commit()
        logger.info(f"Removed user {user_id} from board {board_id}")

"""Photo service: photo records, permissions and stored-object cleanup"""

import logging
from datetime import datetime
from typing import Callable, List, Optional
from uuid import UUID

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from fieldops.exceptions import NotFound
from fieldops.models import Board, BoardMember, Contact, Message, Photo, Project
from fieldops.schemas.photo import PhotoCreate, PhotoUpdate
from fieldops.services.access_control import (
    ActorContext,
    can_delete_photo,
    can_edit_photo,
    ensure,
)
from fieldops.services.board_service import BoardService
from fieldops.services.s3_service import S3Service, S3ServiceError

logger = logging.getLogger(__name__)


class PhotoService:
    """
    Service for photo records.

    The file itself goes straight to object storage through a pre-signed URL;
    this service only stores the resulting record. A photo may belong to a
    project, a board and a contact at once.
    """

    def __init__(self, db: AsyncSession, storage_factory: Callable[[], S3Service] = S3Service):
        """
        Args:
            db: Database session
            storage_factory: Builds the object-storage client used on delete
        """
        self.db = db
        self.boards = BoardService(db)
        self.storage_factory = storage_factory

    async def get(self, photo_id: UUID) -> Photo:
        result = await self.db.execute(select(Photo).where(Photo.id == photo_id))
        photo = result.scalar_one_or_none()
        if not photo:
            raise NotFound(f"Photo {photo_id} not found")
        return photo

    async def get_visible(self, actor: ActorContext, photo_id: UUID) -> Photo:
        """
        Load a photo the actor may see.

        Raises:
            Forbidden: The photo sits on a board the actor is not a member of
        """
        photo = await self.get(photo_id)
        if photo.board_id is not None:
            await self.boards.ensure_board_access(actor, photo.board_id)
        return photo

    async def list_photos(
        self,
        actor: ActorContext,
        project_id: Optional[UUID] = None,
        board_id: Optional[UUID] = None,
        contact_id: Optional[UUID] = None,
    ) -> List[Photo]:
        """
        Photos newest first, optionally filtered. Without a board filter a
        non-admin only sees photos off any board or on boards they belong to.

        Raises:
            Forbidden: Filtering by a board the actor cannot access
        """
        query = select(Photo)
        if project_id:
            query = query.where(Photo.project_id == project_id)
        if board_id:
            await self.boards.ensure_board_access(actor, board_id)
            query = query.where(Photo.board_id == board_id)
        elif not actor.is_admin:
            member_of = select(BoardMember.board_id).where(BoardMember.user_id == actor.user_id)
            query = query.where(Photo.board_id.is_(None) | Photo.board_id.in_(member_of))
        if contact_id:
            query = query.where(Photo.contact_id == contact_id)

        result = await self.db.execute(query.order_by(Photo.created_at.desc()))
        return list(result.scalars().all())

    async def create(self, actor: ActorContext, data: PhotoCreate) -> Photo:
        """
        Record an uploaded photo for the actor.

        Raises:
            NotFound: A referenced project, board or contact does not exist
            Forbidden: Uploading to a board the actor cannot access
        """
        if data.project_id and not await self.db.get(Project, data.project_id):
            raise NotFound(f"Project {data.project_id} not found")
        if data.board_id:
            await self.boards.ensure_board_access(actor, data.board_id)
        if data.contact_id and not await self.db.get(Contact, data.contact_id):
            raise NotFound(f"Contact {data.contact_id} not found")

        photo = Photo(user_id=actor.user_id, **data.model_dump())
        self.db.add(photo)
        await self.db.commit()
        await self.db.refresh(photo)
        logger.info(f"User {actor.user_id} created photo {photo.id} ({photo.file_type})")
        return photo

    async def update(self, actor: ActorContext, photo_id: UUID, data: PhotoUpdate) -> Photo:
        """
        Edit notes, markup or the lock flag.

        Raises:
            Forbidden: The edit is not permitted for the actor
        """
        photo = await self.get(photo_id)
        update_data = data.model_dump(exclude_unset=True)
        if update_data.get("is_locked") is None:
            update_data.pop("is_locked", None)
        changes_lock = "is_locked" in update_data and update_data["is_locked"] != photo.is_locked

        board = None
        membership = None
        if photo.board_id is not None and not actor.is_admin:
            board = await self.db.get(Board, photo.board_id)
            membership = await self.boards.get_membership(photo.board_id, actor.user_id)

        decision = can_edit_photo(actor, photo, board=board, membership=membership, changes_lock=changes_lock)
        if not decision.allowed:
            logger.warning(f"User {actor.user_id} denied edit of photo {photo_id}: {decision.reason.value}")
        ensure(decision)

        for field, value in update_data.items():
            setattr(photo, field, value)
        photo.updated_at = datetime.utcnow()

        await self.db.commit()
        await self.db.refresh(photo)
        logger.info(f"User {actor.user_id} updated photo {photo_id}")
        return photo

    async def delete(self, actor: ActorContext, photo_id: UUID) -> None:
        """
        Delete a photo record. Messages that referenced it are kept with the
        reference cleared; the stored object is removed on a best-effort basis.
        """
        photo = await self.get(photo_id)
        ensure(can_delete_photo(actor, photo))
        storage_key = photo.storage_key

        await self.db.execute(
            update(Message).where(Message.photo_id == photo_id).values(photo_id=None)
        )
        await self.db.execute(delete(Photo).where(Photo.id == photo.id))
        await self.db.commit()
        logger.info(f"User {actor.user_id} deleted photo {photo_id}")

        if storage_key:
            self._delete_stored_object(storage_key)

    def _delete_stored_object(self, storage_key: str) -> None:
        try:
            self.storage_factory().delete_object(storage_key)
        except S3ServiceError as e:
            logger.warning(f"Could not remove stored object {storage_key}: {e}")

"""Contact management service"""

import logging
from typing import List
from uuid import UUID

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from fieldops.exceptions import NotFound
from fieldops.models import BoardMember, Contact, Photo
from fieldops.schemas.contact import ContactCreate, ContactUpdate
from fieldops.services.access_control import ActorContext, can_modify_contact, ensure

logger = logging.getLogger(__name__)


class ContactService:
    """Service for customer and vendor contacts"""

    def __init__(self, db: AsyncSession):
        """Initialize with database session"""
        self.db = db

    async def get(self, contact_id: UUID) -> Contact:
        result = await self.db.execute(select(Contact).where(Contact.id == contact_id))
        contact = result.scalar_one_or_none()
        if not contact:
            raise NotFound(f"Contact {contact_id} not found")
        return contact

    async def get_detail(self, actor: ActorContext, contact_id: UUID) -> Contact:
        """Contact with the photos the actor may see loaded"""
        photos = Contact.photos
        if not actor.is_admin:
            member_of = select(BoardMember.board_id).where(BoardMember.user_id == actor.user_id)
            photos = photos.and_(Photo.board_id.is_(None) | Photo.board_id.in_(member_of))
        result = await self.db.execute(
            select(Contact)
            .where(Contact.id == contact_id)
            .options(selectinload(photos))
            .execution_options(populate_existing=True)
        )
        contact = result.scalar_one_or_none()
        if not contact:
            raise NotFound(f"Contact {contact_id} not found")
        return contact

    async def list_contacts(self) -> List[Contact]:
        result = await self.db.execute(select(Contact).order_by(Contact.created_at.desc()))
        return list(result.scalars().all())

    async def create(self, actor: ActorContext, data: ContactCreate) -> Contact:
        contact = Contact(**data.model_dump(), created_by=actor.user_id)
        self.db.add(contact)
        await self.db.commit()
        await self.db.refresh(contact)
        logger.info(f"User {actor.user_id} created contact {contact.id}")
        return contact

    async def update(self, actor: ActorContext, contact_id: UUID, data: ContactUpdate) -> Contact:
        contact = await self.get(contact_id)
        ensure(can_modify_contact(actor, contact))

        update_data = data.model_dump(exclude_unset=True)
        # first_name is required; an explicit null leaves it unchanged
        if update_data.get("first_name") is None:
            update_data.pop("first_name", None)

        for field, value in update_data.items():
            setattr(contact, field, value)

        await self.db.commit()
        await self.db.refresh(contact)
        logger.info(f"User {actor.user_id} updated contact {contact_id}")
        return contact

    async def delete(self, actor: ActorContext, contact_id: UUID) -> None:
        """Delete a contact; its photos stay, detached from it"""
        contact = await self.get(contact_id)
        ensure(can_modify_contact(actor, contact))

        await self.db.execute(
            update(Photo).where(Photo.contact_id == contact_id).values(contact_id=None)
        )
        await self.db.execute(delete(Contact).where(Contact.id == contact.id))
        await self.db.commit()
        logger.info(f"User {actor.user_id} deleted contact {contact_id}")

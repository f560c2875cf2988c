"""Contact endpoints"""

from typing import List
from uuid import UUID
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from fieldops.api.dependencies import get_actor
from fieldops.database import get_db
from fieldops.schemas.auth import AckResponse
from fieldops.schemas.contact import (
    ContactCreate,
    ContactDetailResponse,
    ContactResponse,
    ContactUpdate,
)
from fieldops.services.access_control import ActorContext
from fieldops.services.contact_service import ContactService

router = APIRouter(prefix="/api/v1/contacts", tags=["Contacts"])


@router.get("", response_model=List[ContactResponse])
async def list_contacts(
    actor: ActorContext = Depends(get_actor),
    db: AsyncSession = Depends(get_db),
):
    return await ContactService(db).list_contacts()


@router.post("", response_model=ContactResponse, status_code=status.HTTP_201_CREATED)
async def create_contact(
    data: ContactCreate,
    actor: ActorContext = Depends(get_actor),
    db: AsyncSession = Depends(get_db),
):
    return await ContactService(db).create(actor, data)


@router.get("/{contact_id}", response_model=ContactDetailResponse)
async def get_contact(
    contact_id: UUID,
    actor: ActorContext = Depends(get_actor),
    db: AsyncSession = Depends(get_db),
):
    """Contact with the photos attached to it"""
    return await ContactService(db).get_detail(actor, contact_id)


@router.put("/{contact_id}", response_model=ContactResponse)
async def update_contact(
    contact_id: UUID,
    data: ContactUpdate,
    actor: ActorContext = Depends(get_actor),
    db: AsyncSession = Depends(get_db),
):
    """Update a contact (creator or admin)"""
    return await ContactService(db).update(actor, contact_id, data)


@router.delete("/{contact_id}", response_model=AckResponse)
async def delete_contact(
    contact_id: UUID,
    actor: ActorContext = Depends(get_actor),
    db: AsyncSession = Depends(get_db),
):
    await ContactService(db).delete(actor, contact_id)
    return AckResponse(message="Contact deleted")

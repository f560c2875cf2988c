"""Location sharing endpoints"""

from typing import List, Optional
from uuid import UUID
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from fieldops.api.dependencies import get_actor
from fieldops.database import get_db
from fieldops.schemas.location import LiveLocationResponse, LocationCreate, LocationResponse
from fieldops.services.access_control import ActorContext
from fieldops.services.location_service import LocationService

router = APIRouter(prefix="/api/v1/locations", tags=["Locations"])


@router.post("", response_model=LocationResponse, status_code=status.HTTP_201_CREATED)
async def record_location(
    data: LocationCreate,
    actor: ActorContext = Depends(get_actor),
    db: AsyncSession = Depends(get_db),
):
    return await LocationService(db).record(actor, data.lat, data.lng)


@router.get("/live", response_model=List[LiveLocationResponse])
async def live_locations(
    actor: ActorContext = Depends(get_actor),
    db: AsyncSession = Depends(get_db),
):
    """Latest known position of every user, newest first"""
    locations = await LocationService(db).live()
    return [{"user": location.user, "location": location} for location in locations]


@router.get("/history", response_model=List[LocationResponse])
async def location_history(
    user_id: Optional[UUID] = Query(None, description="Defaults to the caller; other users need admin"),
    actor: ActorContext = Depends(get_actor),
    db: AsyncSession = Depends(get_db),
):
    return await LocationService(db).history(actor, user_id)

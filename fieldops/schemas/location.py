"""Location schemas"""

from pydantic import BaseModel, Field
from datetime import datetime
from uuid import UUID

from fieldops.schemas.user import UserSummary


class LocationCreate(BaseModel):
    """Location ping"""
    lat: float = Field(..., ge=-90, le=90, description="Latitude")
    lng: float = Field(..., ge=-180, le=180, description="Longitude")


class LocationResponse(BaseModel):
    id: UUID
    user_id: UUID
    lat: float
    lng: float
    timestamp: datetime

    class Config:
        from_attributes = True


class LiveLocationResponse(BaseModel):
    """Latest known position of one user"""
    user: UserSummary
    location: LocationResponse

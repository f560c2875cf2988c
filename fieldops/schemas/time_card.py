"""Time card schemas"""

from typing import Optional
from pydantic import BaseModel, Field
from datetime import datetime
from uuid import UUID

from fieldops.schemas.user import UserSummary


class ClockOutRequest(BaseModel):
    """Clock-out request"""
    notes: Optional[str] = Field(None, description="Notes for the finished shift")


class TimeCardResponse(BaseModel):
    """Time card response schema"""
    id: UUID
    user_id: UUID
    start_time: datetime
    end_time: Optional[datetime] = None
    total_hours: Optional[float] = None
    notes: Optional[str] = None

    class Config:
        from_attributes = True


class TimeCardWithUser(TimeCardResponse):
    """Time card joined with the owner's identity (admin views)"""
    user: UserSummary


class TimeCardStatusResponse(BaseModel):
    """Whether the caller is clocked in, with the open card if so"""
    active: bool
    current_session: Optional[TimeCardResponse] = None


class PeriodSummaryResponse(BaseModel):
    """Cards in a reporting period and their summed hours"""
    cards: list[TimeCardResponse]
    total_hours: float = Field(..., description="Sum of finished card hours")
    period: Optional[str] = None
    period_start: datetime

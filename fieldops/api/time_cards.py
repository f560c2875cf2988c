"""Time card endpoints: self-service clocking and admin reporting"""

from datetime import datetime
from typing import List, Optional
from uuid import UUID
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from fieldops.api.dependencies import get_actor
from fieldops.database import get_db
from fieldops.schemas.time_card import (
    ClockOutRequest,
    PeriodSummaryResponse,
    TimeCardResponse,
    TimeCardStatusResponse,
    TimeCardWithUser,
)
from fieldops.services.access_control import ActorContext
from fieldops.services.time_card_service import TimeCardService

router = APIRouter(prefix="/api/v1/time-cards", tags=["Time Cards"])
admin_router = APIRouter(prefix="/api/v1/admin/time-cards", tags=["Time Cards (Admin)"])


@router.post("/clock-in", response_model=TimeCardResponse, status_code=status.HTTP_201_CREATED)
async def clock_in(
    actor: ActorContext = Depends(get_actor),
    db: AsyncSession = Depends(get_db),
):
    """Open a time card; fails if one is already open"""
    return await TimeCardService(db).clock_in(actor)


@router.post("/clock-out", response_model=TimeCardResponse)
async def clock_out(
    data: Optional[ClockOutRequest] = None,
    actor: ActorContext = Depends(get_actor),
    db: AsyncSession = Depends(get_db),
):
    """Close the open time card and record its hours"""
    notes = data.notes if data else None
    return await TimeCardService(db).clock_out(actor, notes)


@router.get("/status", response_model=TimeCardStatusResponse)
async def get_status(
    actor: ActorContext = Depends(get_actor),
    db: AsyncSession = Depends(get_db),
):
    return await TimeCardService(db).status(actor)


@router.get("", response_model=List[TimeCardResponse])
async def list_own_cards(
    actor: ActorContext = Depends(get_actor),
    db: AsyncSession = Depends(get_db),
):
    """The caller's own cards, newest first"""
    return await TimeCardService(db).list_for_user(actor.user_id)


@admin_router.get("", response_model=List[TimeCardWithUser])
async def list_all_cards(
    user_id: Optional[UUID] = Query(None, description="Only this user's cards"),
    start_date: Optional[datetime] = Query(None, description="Cards starting at or after"),
    end_date: Optional[datetime] = Query(None, description="Cards starting at or before"),
    actor: ActorContext = Depends(get_actor),
    db: AsyncSession = Depends(get_db),
):
    return await TimeCardService(db).list_all(actor, user_id, start_date, end_date)


@admin_router.get("/calendar", response_model=List[TimeCardWithUser])
async def calendar(
    year: Optional[int] = Query(None, ge=1970, le=9999),
    month: Optional[int] = Query(None),
    actor: ActorContext = Depends(get_actor),
    db: AsyncSession = Depends(get_db),
):
    """Every card starting in the given month (defaults to the current one)"""
    return await TimeCardService(db).calendar(actor, year, month)


@admin_router.get("/user/{user_id}", response_model=PeriodSummaryResponse)
async def user_period_summary(
    user_id: UUID,
    period: Optional[str] = Query(None, description="day, week, month or year; anything else means all time"),
    actor: ActorContext = Depends(get_actor),
    db: AsyncSession = Depends(get_db),
):
    return await TimeCardService(db).period_summary(actor, user_id, period)

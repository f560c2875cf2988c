"""Time-accounting service: clock in/out and hour aggregation"""

import logging
from datetime import datetime
from typing import Callable, List, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from fieldops.exceptions import AlreadyActive, NotActive
from fieldops.models import TimeCard
from fieldops.services.access_control import ActorContext, ensure, require_admin
from fieldops.services.time_accounting import (
    as_naive_utc,
    compute_total_hours,
    month_bounds,
    period_start,
    sum_hours,
)

logger = logging.getLogger(__name__)


class TimeCardService:
    """
    Service for time cards.

    At most one card per user may be open (end_time is null). The check
    before insert gives a friendly error; the partial unique index on
    time_cards closes the race between two concurrent clock-ins.
    """

    def __init__(self, db: AsyncSession, clock: Callable[[], datetime] = datetime.utcnow):
        """
        Args:
            db: Database session
            clock: Source of "now", injectable for deterministic tests
        """
        self.db = db
        self.clock = clock

    async def get_active(self, user_id: UUID) -> Optional[TimeCard]:
        result = await self.db.execute(
            select(TimeCard).where(TimeCard.user_id == user_id, TimeCard.end_time.is_(None))
        )
        return result.scalar_one_or_none()

    async def clock_in(self, actor: ActorContext) -> TimeCard:
        """
        Open a new time card for the actor.

        Raises:
            AlreadyActive: The actor already has an open card
        """
        if await self.get_active(actor.user_id):
            raise AlreadyActive()

        card = TimeCard(user_id=actor.user_id, start_time=self.clock())
        self.db.add(card)
        try:
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            logger.warning(f"Concurrent clock-in rejected for user {actor.user_id}")
            raise AlreadyActive()

        await self.db.refresh(card)
        logger.info(f"User {actor.user_id} clocked in (card {card.id})")
        return card

    async def clock_out(self, actor: ActorContext, notes: Optional[str] = None) -> TimeCard:
        """
        Close the actor's open card and record its fractional hours.

        Raises:
            NotActive: The actor has no open card
        """
        card = await self.get_active(actor.user_id)
        if not card:
            raise NotActive()

        end_time = self.clock()
        card.end_time = end_time
        card.total_hours = compute_total_hours(card.start_time, end_time)
        card.notes = notes
        await self.db.commit()
        await self.db.refresh(card)
        logger.info(f"User {actor.user_id} clocked out after {card.total_hours:.2f}h")
        return card

    async def status(self, actor: ActorContext) -> dict:
        active = await self.get_active(actor.user_id)
        return {"active": active is not None, "current_session": active}

    async def list_for_user(self, user_id: UUID) -> List[TimeCard]:
        result = await self.db.execute(
            select(TimeCard)
            .where(TimeCard.user_id == user_id)
            .order_by(TimeCard.start_time.desc())
        )
        return list(result.scalars().all())

    async def list_all(
        self,
        actor: ActorContext,
        user_id: Optional[UUID] = None,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
    ) -> List[TimeCard]:
        """Admin listing of every card with its owner, optionally filtered"""
        ensure(require_admin(actor))

        query = select(TimeCard).options(selectinload(TimeCard.user))
        if user_id:
            query = query.where(TimeCard.user_id == user_id)
        if start_date:
            query = query.where(TimeCard.start_time >= as_naive_utc(start_date))
        if end_date:
            query = query.where(TimeCard.start_time <= as_naive_utc(end_date))

        result = await self.db.execute(query.order_by(TimeCard.start_time.desc()))
        return list(result.scalars().all())

    async def calendar(
        self, actor: ActorContext, year: Optional[int] = None, month: Optional[int] = None
    ) -> List[TimeCard]:
        """
        Admin view of every card starting inside a calendar month.

        Year and month default to the current ones; the range runs from the
        first instant of the month through 23:59:59 of its last day.
        """
        ensure(require_admin(actor))

        now = self.clock()
        start, end = month_bounds(
            year if year is not None else now.year,
            month if month is not None else now.month,
        )
        result = await self.db.execute(
            select(TimeCard)
            .options(selectinload(TimeCard.user))
            .where(TimeCard.start_time >= start, TimeCard.start_time <= end)
            .order_by(TimeCard.start_time.desc())
        )
        return list(result.scalars().all())

    async def period_summary(
        self, actor: ActorContext, user_id: UUID, period: Optional[str] = None
    ) -> dict:
        """
        Admin summary of one user's cards since the start of a period.

        Cards still open (null total_hours) count as zero hours.
        """
        ensure(require_admin(actor))

        boundary = period_start(period, self.clock())
        result = await self.db.execute(
            select(TimeCard)
            .where(TimeCard.user_id == user_id, TimeCard.start_time >= boundary)
            .order_by(TimeCard.start_time.desc())
        )
        cards = list(result.scalars().all())
        return {
            "cards": cards,
            "total_hours": sum_hours(card.total_hours for card in cards),
            "period": period,
            "period_start": boundary,
        }

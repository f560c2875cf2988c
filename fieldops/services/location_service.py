"""Location sharing service"""

import logging
from datetime import datetime
from typing import Callable, List, Optional
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from fieldops.models import Location
from fieldops.services.access_control import ActorContext, ensure, require_admin

logger = logging.getLogger(__name__)

HISTORY_LIMIT = 100


class LocationService:
    """Append-only location log with a latest-per-user live view"""

    def __init__(self, db: AsyncSession, clock: Callable[[], datetime] = datetime.utcnow):
        self.db = db
        self.clock = clock

    async def record(self, actor: ActorContext, lat: float, lng: float) -> Location:
        location = Location(user_id=actor.user_id, lat=lat, lng=lng, timestamp=self.clock())
        self.db.add(location)
        await self.db.commit()
        await self.db.refresh(location)
        logger.debug(f"Recorded location for user {actor.user_id}")
        return location

    async def live(self) -> List[Location]:
        """
        Latest ping of every user, newest first.

        Uses a per-user max(timestamp) subquery rather than scanning a fixed
        window of recent rows, so a user who has not moved recently still
        shows their last known position.
        """
        latest = (
            select(Location.user_id, func.max(Location.timestamp).label("latest"))
            .group_by(Location.user_id)
            .subquery()
        )
        result = await self.db.execute(
            select(Location)
            .join(
                latest,
                (Location.user_id == latest.c.user_id)
                & (Location.timestamp == latest.c.latest),
            )
            .options(selectinload(Location.user))
            .order_by(Location.timestamp.desc())
        )

        # Two pings with the same timestamp for one user: keep one
        seen = set()
        rows = []
        for location in result.scalars().all():
            if location.user_id in seen:
                continue
            seen.add(location.user_id)
            rows.append(location)
        return rows

    async def history(
        self, actor: ActorContext, user_id: Optional[UUID] = None, limit: int = HISTORY_LIMIT
    ) -> List[Location]:
        """Recent pings of a user; other users' history is admin-only"""
        target = user_id or actor.user_id
        if target != actor.user_id:
            ensure(require_admin(actor))

        result = await self.db.execute(
            select(Location)
            .where(Location.user_id == target)
            .order_by(Location.timestamp.desc())
            .limit(limit)
        )
        return list(result.scalars().all())

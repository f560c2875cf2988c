"""Server-side session store keyed by an opaque cookie value"""

import logging
import secrets
from typing import Optional
from uuid import UUID

from fieldops.config import settings
from fieldops.services.redis_service import RedisService

logger = logging.getLogger(__name__)


class SessionService:
    """Creates, resolves and destroys login sessions held in Redis"""

    def __init__(self, redis_service: Optional[RedisService] = None):
        self.redis = redis_service or RedisService()

    async def create(self, user_id: UUID) -> str:
        """Open a session for a user and return its opaque id"""
        session_id = secrets.token_urlsafe(32)
        await self.redis.set_session(session_id, str(user_id), settings.session_ttl_seconds)
        logger.info(f"Opened session for user {user_id}")
        return session_id

    async def resolve(self, session_id: Optional[str]) -> Optional[UUID]:
        """
        Look up the user behind a session id and slide its expiry.

        Returns None for a missing, expired or malformed session.
        """
        if not session_id:
            return None

        user_id = await self.redis.get_session(session_id)
        if not user_id:
            return None

        try:
            resolved = UUID(user_id)
        except ValueError:
            logger.warning("Discarding session with malformed user id")
            await self.redis.delete_session(session_id)
            return None

        await self.redis.touch_session(session_id, settings.session_ttl_seconds)
        return resolved

    async def destroy(self, session_id: Optional[str]) -> None:
        if session_id:
            await self.redis.delete_session(session_id)

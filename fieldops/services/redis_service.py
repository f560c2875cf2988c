"""Redis service backing the session store and login throttling"""

import redis.asyncio as redis
from typing import Optional
from fieldops.config import settings


class RedisService:
    """Service for Redis operations: session records and failed-login counters"""

    _client: Optional[redis.Redis] = None

    @classmethod
    async def get_client(cls) -> redis.Redis:
        """Get or create Redis client"""
        if cls._client is None:
            cls._client = redis.from_url(
                settings.redis_url,
                encoding="utf-8",
                decode_responses=True
            )
        return cls._client

    @classmethod
    async def close(cls):
        """Close Redis connection"""
        if cls._client:
            await cls._client.aclose()
            cls._client = None

    async def set_session(self, session_id: str, user_id: str, ttl_seconds: int):
        """
        Store a session record

        Args:
            session_id: Opaque session identifier from the cookie
            user_id: Owner of the session
            ttl_seconds: Time to live
        """
        client = await self.get_client()
        await client.setex(f"session:{session_id}", ttl_seconds, user_id)

    async def get_session(self, session_id: str) -> Optional[str]:
        """Return the user id stored for a session, or None if missing/expired"""
        client = await self.get_client()
        return await client.get(f"session:{session_id}")

    async def touch_session(self, session_id: str, ttl_seconds: int):
        """Push the session expiry forward (sliding expiration)"""
        client = await self.get_client()
        await client.expire(f"session:{session_id}", ttl_seconds)

    async def delete_session(self, session_id: str):
        client = await self.get_client()
        await client.delete(f"session:{session_id}")

    async def increment_login_attempts(self, ip_address: str) -> int:
        """
        Increment failed login attempts for an IP address

        Args:
            ip_address: IP address to track

        Returns:
            Current number of attempts
        """
        client = await self.get_client()
        key = f"login_attempts:{ip_address}"
        count = await client.incr(key)

        # Set expiration on first attempt
        if count == 1:
            await client.expire(key, settings.login_attempt_window_seconds)

        return count

    async def reset_login_attempts(self, ip_address: str):
        """
        Reset failed login attempts for an IP address

        Args:
            ip_address: IP address to reset
        """
        client = await self.get_client()
        key = f"login_attempts:{ip_address}"
        await client.delete(key)

    async def get_login_attempts(self, ip_address: str) -> int:
        """
        Get current failed login attempts for an IP address

        Args:
            ip_address: IP address to check

        Returns:
            Number of failed attempts
        """
        client = await self.get_client()
        key = f"login_attempts:{ip_address}"
        result = await client.get(key)
        return int(result) if result else 0

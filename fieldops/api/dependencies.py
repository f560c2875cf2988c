"""API dependencies for authentication and authorization"""

import logging
from fastapi import Depends, Request, Response
from sqlalchemy.ext.asyncio import AsyncSession

from fieldops.config import settings
from fieldops.database import get_db
from fieldops.exceptions import Unauthorized
from fieldops.models import User
from fieldops.services.access_control import ActorContext
from fieldops.services.session_service import SessionService

logger = logging.getLogger(__name__)


def get_session_service() -> SessionService:
    return SessionService()


def set_session_cookie(response: Response, session_id: str) -> None:
    """
    Write the session cookie.

    Production cookies are Secure with SameSite=None so a separately hosted
    frontend can send them; elsewhere SameSite=Lax over plain HTTP.
    """
    response.set_cookie(
        key=settings.session_cookie_name,
        value=session_id,
        max_age=settings.session_ttl_seconds,
        httponly=True,
        secure=settings.is_production,
        samesite="none" if settings.is_production else "lax",
        path="/",
    )


def clear_session_cookie(response: Response) -> None:
    response.delete_cookie(
        key=settings.session_cookie_name,
        path="/",
        httponly=True,
        secure=settings.is_production,
        samesite="none" if settings.is_production else "lax",
    )


async def get_current_user(
    request: Request,
    response: Response,
    db: AsyncSession = Depends(get_db),
    sessions: SessionService = Depends(get_session_service),
) -> User:
    """
    Get current authenticated user from the session cookie.

    Every authenticated request slides the session expiry forward, both in
    Redis and on the cookie.

    Raises:
        Unauthorized: No cookie, an expired session, or a deleted user
    """
    session_id = request.cookies.get(settings.session_cookie_name)
    user_id = await sessions.resolve(session_id)
    if not user_id:
        raise Unauthorized("Not authenticated")

    user = await db.get(User, user_id)
    if not user:
        logger.warning(f"Session refers to missing user {user_id}")
        await sessions.destroy(session_id)
        raise Unauthorized("Not authenticated")

    set_session_cookie(response, session_id)
    return user


async def get_actor(current_user: User = Depends(get_current_user)) -> ActorContext:
    """Acting user's identity and role, as passed to every service"""
    return ActorContext(user_id=current_user.id, role=current_user.role)

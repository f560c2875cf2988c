"""Authentication endpoints"""

import logging
from fastapi import APIRouter, Depends, Request, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from fieldops.api.dependencies import (
    clear_session_cookie,
    get_actor,
    get_current_user,
    get_session_service,
    set_session_cookie,
)
from fieldops.config import settings
from fieldops.database import get_db
from fieldops.exceptions import TooManyRequests, Unauthorized
from fieldops.models.user import User
from fieldops.schemas.auth import AckResponse, ChangePasswordRequest, LoginRequest
from fieldops.schemas.user import UserSummary
from fieldops.services.access_control import ActorContext
from fieldops.services.redis_service import RedisService
from fieldops.services.session_service import SessionService
from fieldops.services.user_service import UserService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/auth", tags=["Authentication"])


@router.post("/login", response_model=UserSummary, status_code=status.HTTP_200_OK)
async def login(
    login_data: LoginRequest,
    request: Request,
    response: Response,
    db: AsyncSession = Depends(get_db),
    sessions: SessionService = Depends(get_session_service),
):
    """
    Authenticate with email and password and open a cookie session

    - **email**: User email address
    - **password**: User password

    Returns the logged-in user
    """
    redis_service = RedisService()

    # Get client IP for rate limiting
    client_ip = request.client.host if request.client else "unknown"

    attempts = await redis_service.get_login_attempts(client_ip)
    if attempts >= settings.login_max_attempts:
        logger.warning(f"Login throttled for {client_ip}")
        raise TooManyRequests("Maximum login attempts exceeded. Please try again in 15 minutes.")

    user = await UserService(db).authenticate(login_data.email, login_data.password)
    if not user:
        await redis_service.increment_login_attempts(client_ip)
        # Don't reveal which field failed
        raise Unauthorized("Invalid email or password")

    await redis_service.reset_login_attempts(client_ip)

    session_id = await sessions.create(user.id)
    set_session_cookie(response, session_id)
    logger.info(f"User {user.id} logged in")
    return user


@router.post("/logout", response_model=AckResponse, status_code=status.HTTP_200_OK)
async def logout(
    request: Request,
    response: Response,
    sessions: SessionService = Depends(get_session_service),
):
    """Destroy the current session, if any, and clear the cookie"""
    await sessions.destroy(request.cookies.get(settings.session_cookie_name))
    clear_session_cookie(response)
    return AckResponse(message="Logged out")


@router.get("/user", response_model=UserSummary)
async def get_user(current_user: User = Depends(get_current_user)):
    """Return the logged-in user"""
    return current_user


@router.post("/change-password", response_model=AckResponse)
async def change_password(
    data: ChangePasswordRequest,
    actor: ActorContext = Depends(get_actor),
    db: AsyncSession = Depends(get_db),
):
    await UserService(db).change_password(actor, data.current_password, data.new_password)
    return AckResponse(message="Password changed")

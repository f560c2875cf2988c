"""User management service: accounts, roles, credentials"""

import logging
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from fieldops.exceptions import InvalidInput, NotFound, Unauthorized
from fieldops.models import (
    Board,
    BoardMember,
    Contact,
    Location,
    Message,
    Photo,
    Project,
    ProjectMember,
    ProjectMessage,
    TimeCard,
    User,
)
from fieldops.schemas.user import VALID_ROLES, UserCreate, UserUpdate
from fieldops.services.access_control import (
    ActorContext,
    can_delete_user,
    ensure,
    require_admin,
)
from fieldops.services.auth_service import AuthService

logger = logging.getLogger(__name__)


class UserService:
    """
    Service for user accounts.
    Every mutating operation takes the acting user's context explicitly.
    """

    def __init__(self, db: AsyncSession):
        """Initialize with database session"""
        self.db = db

    async def get(self, user_id: UUID) -> User:
        result = await self.db.execute(select(User).where(User.id == user_id))
        user = result.scalar_one_or_none()
        if not user:
            raise NotFound(f"User {user_id} not found")
        return user

    async def get_by_email(self, email: str) -> Optional[User]:
        result = await self.db.execute(select(User).where(User.email == email.lower()))
        return result.scalar_one_or_none()

    async def authenticate(self, email: str, password: str) -> Optional[User]:
        """Return the user when the credentials match, None otherwise"""
        user = await self.get_by_email(email)
        if not user or not AuthService.verify_password(password, user.password_hash):
            return None
        return user

    async def list_users(self) -> List[User]:
        result = await self.db.execute(select(User).order_by(User.created_at))
        return list(result.scalars().all())

    async def create_user(self, actor: ActorContext, data: UserCreate) -> User:
        ensure(require_admin(actor))

        email = data.email.lower()
        if await self.get_by_email(email):
            raise InvalidInput("Email already exists")

        user = User(
            email=email,
            first_name=data.first_name,
            last_name=data.last_name,
            role=data.role,
            password_hash=AuthService.hash_password(data.password),
        )
        self.db.add(user)
        await self.db.commit()
        await self.db.refresh(user)
        logger.info(f"Admin {actor.user_id} created user {user.id} ({user.role})")
        return user

    async def update_user(self, actor: ActorContext, user_id: UUID, data: UserUpdate) -> User:
        ensure(require_admin(actor))
        user = await self.get(user_id)

        update_data = data.model_dump(exclude_unset=True)
        if update_data.get("email"):
            email = update_data["email"].lower()
            existing = await self.get_by_email(email)
            if existing and existing.id != user.id:
                raise InvalidInput("Email already exists")
            update_data["email"] = email

        for field, value in update_data.items():
            if value is not None:
                setattr(user, field, value)
        user.updated_at = datetime.utcnow()

        await self.db.commit()
        await self.db.refresh(user)
        logger.info(f"Admin {actor.user_id} updated user {user.id}")
        return user

    async def set_role(self, actor: ActorContext, user_id: UUID, role: str) -> User:
        ensure(require_admin(actor))
        if role not in VALID_ROLES:
            raise InvalidInput("Invalid role")

        user = await self.get(user_id)
        user.role = role
        user.updated_at = datetime.utcnow()
        await self.db.commit()
        await self.db.refresh(user)
        logger.info(f"Admin {actor.user_id} set role of {user.id} to {role}")
        return user

    async def delete_user(self, actor: ActorContext, user_id: UUID, admin_password: str) -> None:
        """
        Delete a user account and everything it owns.

        The self-delete check runs before the password check, so an admin can
        never delete their own account whatever password is supplied.

        Raises:
            Forbidden: Actor is not an admin, or targets their own account
            Unauthorized: admin_password does not match the actor's hash
            NotFound: Target user does not exist
        """
        ensure(can_delete_user(actor, user_id))

        admin = await self.get(actor.user_id)
        if not AuthService.verify_password(admin_password, admin.password_hash):
            logger.warning(f"Admin {actor.user_id} failed password check deleting {user_id}")
            raise Unauthorized("Invalid admin password")

        target = await self.get(user_id)
        await self._delete_owned_rows(target.id)
        await self.db.execute(delete(User).where(User.id == target.id))
        await self.db.commit()
        logger.info(f"Admin {actor.user_id} deleted user {user_id}")

    async def _delete_owned_rows(self, user_id: UUID) -> None:
        own_photo_ids = select(Photo.id).where(Photo.user_id == user_id)
        own_contact_ids = select(Contact.id).where(Contact.created_by == user_id)

        await self.db.execute(
            update(Message).where(Message.photo_id.in_(own_photo_ids)).values(photo_id=None)
        )
        await self.db.execute(
            update(Photo).where(Photo.contact_id.in_(own_contact_ids)).values(contact_id=None)
        )
        await self.db.execute(
            delete(Message).where((Message.sender_id == user_id) | (Message.receiver_id == user_id))
        )
        await self.db.execute(delete(ProjectMessage).where(ProjectMessage.sender_id == user_id))
        await self.db.execute(delete(Photo).where(Photo.user_id == user_id))
        await self.db.execute(delete(Contact).where(Contact.created_by == user_id))
        await self.db.execute(delete(TimeCard).where(TimeCard.user_id == user_id))
        await self.db.execute(delete(Location).where(Location.user_id == user_id))
        await self.db.execute(delete(BoardMember).where(BoardMember.user_id == user_id))
        await self.db.execute(delete(ProjectMember).where(ProjectMember.user_id == user_id))
        await self.db.execute(update(Board).where(Board.created_by == user_id).values(created_by=None))
        await self.db.execute(update(Project).where(Project.created_by == user_id).values(created_by=None))

    async def change_password(
        self, actor: ActorContext, current_password: str, new_password: str
    ) -> None:
        """Replace the actor's password after verifying the current one"""
        user = await self.get(actor.user_id)
        if not AuthService.verify_password(current_password, user.password_hash):
            raise Unauthorized("Current password incorrect")

        user.password_hash = AuthService.hash_password(new_password)
        user.updated_at = datetime.utcnow()
        await self.db.commit()
        logger.info(f"User {user.id} changed password")

"""Project service: projects, members and project chat"""

import logging
from typing import List, Optional
from uuid import UUID

from sqlalchemy import delete, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from fieldops.exceptions import InvalidInput, NotFound
from fieldops.models import Message, Photo, Project, ProjectMember, ProjectMessage, User
from fieldops.schemas.project import ProjectCreate, ProjectUpdate
from fieldops.services.access_control import (
    ActorContext,
    can_access_project_chat,
    ensure,
    require_admin,
)

logger = logging.getLogger(__name__)

MESSAGE_LIMIT = 100


class ProjectService:
    """Service for projects (job sites)"""

    def __init__(self, db: AsyncSession):
        """Initialize with database session"""
        self.db = db

    async def get(self, project_id: UUID) -> Project:
        result = await self.db.execute(select(Project).where(Project.id == project_id))
        project = result.scalar_one_or_none()
        if not project:
            raise NotFound(f"Project {project_id} not found")
        return project

    async def list_projects(self) -> List[dict]:
        """All projects, newest first, each with its photo count"""
        photo_counts = (
            select(Photo.project_id, func.count(Photo.id).label("photo_count"))
            .where(Photo.project_id.is_not(None))
            .group_by(Photo.project_id)
            .subquery()
        )
        result = await self.db.execute(
            select(Project, func.coalesce(photo_counts.c.photo_count, 0))
            .outerjoin(photo_counts, photo_counts.c.project_id == Project.id)
            .order_by(Project.created_at.desc())
        )
        return [
            self._with_stats(project, photo_count=count)
            for project, count in result.all()
        ]

    async def get_detail(self, project_id: UUID) -> dict:
        """Project with photo count and the time of its latest photo"""
        project = await self.get(project_id)
        result = await self.db.execute(
            select(func.count(Photo.id), func.max(Photo.created_at)).where(
                Photo.project_id == project_id
            )
        )
        count, last_photo_at = result.one()
        return self._with_stats(project, photo_count=count or 0, last_photo_at=last_photo_at)

    @staticmethod
    def _with_stats(project: Project, photo_count: int, last_photo_at=None) -> dict:
        return {
            "id": project.id,
            "name": project.name,
            "description": project.description,
            "created_by": project.created_by,
            "created_at": project.created_at,
            "updated_at": project.updated_at,
            "photo_count": photo_count,
            "last_photo_at": last_photo_at,
        }

    async def create(self, actor: ActorContext, data: ProjectCreate) -> Project:
        project = Project(name=data.name, description=data.description, created_by=actor.user_id)
        self.db.add(project)
        await self.db.commit()
        await self.db.refresh(project)
        logger.info(f"User {actor.user_id} created project {project.id}")
        return project

    async def update(self, actor: ActorContext, project_id: UUID, data: ProjectUpdate) -> Project:
        project = await self.get(project_id)

        for field, value in data.model_dump(exclude_unset=True).items():
            if value is not None:
                setattr(project, field, value)

        await self.db.commit()
        await self.db.refresh(project)
        logger.info(f"User {actor.user_id} updated project {project_id}")
        return project

    async def delete(self, actor: ActorContext, project_id: UUID) -> None:
        """Delete a project with its photos, memberships and project messages"""
        ensure(require_admin(actor))
        project = await self.get(project_id)

        project_photo_ids = select(Photo.id).where(Photo.project_id == project_id)
        await self.db.execute(
            update(Message).where(Message.photo_id.in_(project_photo_ids)).values(photo_id=None)
        )
        await self.db.execute(delete(Photo).where(Photo.project_id == project_id))
        await self.db.execute(delete(ProjectMember).where(ProjectMember.project_id == project_id))
        await self.db.execute(delete(ProjectMessage).where(ProjectMessage.project_id == project_id))
        await self.db.execute(delete(Project).where(Project.id == project.id))
        await self.db.commit()
        logger.info(f"Admin {actor.user_id} deleted project {project_id}")

    async def get_membership(self, project_id: UUID, user_id: UUID) -> Optional[ProjectMember]:
        result = await self.db.execute(
            select(ProjectMember).where(
                ProjectMember.project_id == project_id, ProjectMember.user_id == user_id
            )
        )
        return result.scalar_one_or_none()

    async def list_members(self, project_id: UUID) -> List[ProjectMember]:
        await self.get(project_id)
        result = await self.db.execute(
            select(ProjectMember)
            .where(ProjectMember.project_id == project_id)
            .options(selectinload(ProjectMember.user))
            .order_by(ProjectMember.joined_at)
        )
        return list(result.scalars().all())

    async def add_member(self, actor: ActorContext, project_id: UUID, user_id: UUID) -> ProjectMember:
        ensure(require_admin(actor))
        await self.get(project_id)
        if not await self.db.get(User, user_id):
            raise NotFound(f"User {user_id} not found")
        if await self.get_membership(project_id, user_id):
            raise InvalidInput("User already a member")

        member = ProjectMember(project_id=project_id, user_id=user_id)
        self.db.add(member)
        await self.db.commit()
        logger.info(f"Added user {user_id} to project {project_id}")

        result = await self.db.execute(
            select(ProjectMember)
            .where(ProjectMember.id == member.id)
            .options(selectinload(ProjectMember.user))
            .execution_options(populate_existing=True)
        )
        return result.scalar_one()

    async def remove_member(self, actor: ActorContext, project_id: UUID, user_id: UUID) -> None:
        ensure(require_admin(actor))
        member = await self.get_membership(project_id, user_id)
        if not member:
            raise NotFound("Member not found")

        await self.db.delete(member)
        await self.db.commit()
        logger.info(f"Removed user {user_id} from project {project_id}")

    async def _ensure_chat_access(self, actor: ActorContext, project_id: UUID) -> None:
        await self.get(project_id)
        is_member = actor.is_admin or await self.get_membership(project_id, actor.user_id) is not None
        ensure(can_access_project_chat(actor, is_member))

    async def list_messages(
        self, actor: ActorContext, project_id: UUID, limit: int = MESSAGE_LIMIT
    ) -> List[ProjectMessage]:
        """Latest project chat messages, oldest first"""
        await self._ensure_chat_access(actor, project_id)
        result = await self.db.execute(
            select(ProjectMessage)
            .where(ProjectMessage.project_id == project_id)
            .options(selectinload(ProjectMessage.sender))
            .order_by(ProjectMessage.created_at.desc())
            .limit(limit)
        )
        messages = list(result.scalars().all())
        messages.reverse()
        return messages

    async def send_message(self, actor: ActorContext, project_id: UUID, content: str) -> ProjectMessage:
        await self._ensure_chat_access(actor, project_id)

        message = ProjectMessage(project_id=project_id, sender_id=actor.user_id, content=content)
        self.db.add(message)
        await self.db.commit()
        logger.info(f"User {actor.user_id} posted to project {project_id}")

        result = await self.db.execute(
            select(ProjectMessage)
            .where(ProjectMessage.id == message.id)
            .options(selectinload(ProjectMessage.sender))
            .execution_options(populate_existing=True)
        )
        return result.scalar_one()

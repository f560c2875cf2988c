"""Project models"""

from datetime import datetime
from sqlalchemy import Column, DateTime, ForeignKey, String, Text, UniqueConstraint, Uuid
from sqlalchemy.orm import relationship
from fieldops.models.base import BaseModel


class Project(BaseModel):
    """
    Project model representing a job site.
    Projects have members, contain photos and carry their own chat.
    """

    __tablename__ = "projects"

    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    created_by = Column(
        Uuid(as_uuid=True), ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    )

    # Relationships
    photos = relationship("Photo", back_populates="project", passive_deletes=True)
    members = relationship("ProjectMember", back_populates="project", passive_deletes=True)
    messages = relationship("ProjectMessage", back_populates="project", passive_deletes=True)

    def __repr__(self):
        return f"<Project(id={self.id}, name={self.name})>"


class ProjectMember(BaseModel):
    """Membership of a user in a project"""

    __tablename__ = "project_members"

    project_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("projects.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    user_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    joined_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    # Relationships
    project = relationship("Project", back_populates="members")
    user = relationship("User")

    __table_args__ = (
        UniqueConstraint("project_id", "user_id", name="uq_project_members_project_user"),
    )


class ProjectMessage(BaseModel):
    """Chat message scoped to a project"""

    __tablename__ = "project_messages"

    project_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("projects.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    sender_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    content = Column(Text, nullable=False)

    # Relationships
    project = relationship("Project", back_populates="messages")
    sender = relationship("User")

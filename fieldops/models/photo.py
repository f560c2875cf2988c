"""Photo model"""

import enum
from sqlalchemy import JSON, Boolean, Column, ForeignKey, String, Text, Uuid
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import relationship
from fieldops.models.base import BaseModel


class PhotoFileType(str, enum.Enum):
    """Kind of uploaded file"""
    IMAGE = "image"
    PDF = "pdf"


class Photo(BaseModel):
    """
    Photo (or PDF) uploaded by a user.
    A photo may be attached to a project, a board and a contact at the same
    time; the associations are independent.
    """

    __tablename__ = "photos"

    user_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    project_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("projects.id", ondelete="CASCADE"),
        nullable=True,
        index=True,
    )
    board_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("boards.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    contact_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("contacts.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    url = Column(Text, nullable=False)
    storage_key = Column(String(500), nullable=True)
    file_type = Column(String(10), default=PhotoFileType.IMAGE.value, nullable=False)
    notes = Column(Text, nullable=True)
    markup_data = Column(JSON().with_variant(JSONB(), "postgresql"), nullable=True)
    is_locked = Column(Boolean, default=False, nullable=False)

    # Relationships
    user = relationship("User", back_populates="photos")
    project = relationship("Project", back_populates="photos")
    board = relationship("Board", back_populates="photos")
    contact = relationship("Contact", back_populates="photos")

    def __repr__(self):
        return f"<Photo(id={self.id}, url={self.url}, locked={self.is_locked})>"

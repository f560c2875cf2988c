"""Message model"""

from sqlalchemy import Boolean, Column, ForeignKey, Text, Uuid
from sqlalchemy.orm import relationship
from fieldops.models.base import BaseModel


class Message(BaseModel):
    """
    Chat message. Posted either to a board or directly to another user,
    carrying text, a photo reference, or both.
    """

    __tablename__ = "messages"

    sender_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    board_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("boards.id", ondelete="CASCADE"),
        nullable=True,
        index=True,
    )
    receiver_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=True,
        index=True,
    )
    content = Column(Text, nullable=True)
    photo_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("photos.id", ondelete="SET NULL"),
        nullable=True,
    )
    is_locked = Column(Boolean, default=False, nullable=False)

    # Relationships
    sender = relationship("User", foreign_keys=[sender_id])
    board = relationship("Board", back_populates="messages")
    photo = relationship("Photo")

    def __repr__(self):
        return f"<Message(id={self.id}, sender_id={self.sender_id}, board_id={self.board_id})>"

"""Board (chat) models"""

import enum
from datetime import datetime
from sqlalchemy import Boolean, Column, DateTime, ForeignKey, String, UniqueConstraint, Uuid
from sqlalchemy.orm import relationship
from fieldops.models.base import BaseModel


class BoardType(str, enum.Enum):
    """Chat board kind"""
    GROUP = "group"
    DIRECT = "direct"


class Board(BaseModel):
    """
    Chat board with a membership list and message history.
    allow_user_editing lets members whose membership has can_edit
    edit photos posted to the board by others.
    """

    __tablename__ = "boards"

    name = Column(String(255), nullable=False)
    type = Column(String(20), default=BoardType.GROUP.value, nullable=False)
    created_by = Column(
        Uuid(as_uuid=True), ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    )
    allow_user_editing = Column(Boolean, default=False, nullable=False)

    # Relationships
    members = relationship("BoardMember", back_populates="board", passive_deletes=True)
    messages = relationship("Message", back_populates="board", passive_deletes=True)
    photos = relationship("Photo", back_populates="board", passive_deletes=True)

    def __repr__(self):
        return f"<Board(id={self.id}, name={self.name}, type={self.type})>"


class BoardMember(BaseModel):
    """Membership of a user on a board"""

    __tablename__ = "board_members"

    board_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("boards.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    user_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    can_edit = Column(Boolean, default=False, nullable=False)
    joined_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    # Relationships
    board = relationship("Board", back_populates="members")
    user = relationship("User")

    __table_args__ = (
        UniqueConstraint("board_id", "user_id", name="uq_board_members_board_user"),
    )

    def __repr__(self):
        return f"<BoardMember(board_id={self.board_id}, user_id={self.user_id}, can_edit={self.can_edit})>"

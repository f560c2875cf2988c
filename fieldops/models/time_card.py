"""Time card model"""

from datetime import datetime
from sqlalchemy import Column, DateTime, Float, ForeignKey, Index, Text, Uuid, text
from sqlalchemy.orm import relationship
from fieldops.models.base import BaseModel


class TimeCard(BaseModel):
    """
    One clock-in/clock-out interval for a user.
    A null end_time marks the card as active; the partial unique index
    keeps at most one active card per user even under concurrent clock-ins.
    """

    __tablename__ = "time_cards"

    user_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    start_time = Column(DateTime, default=datetime.utcnow, nullable=False, index=True)
    end_time = Column(DateTime, nullable=True)
    total_hours = Column(Float, nullable=True)
    notes = Column(Text, nullable=True)

    # Relationships
    user = relationship("User", back_populates="time_cards")

    __table_args__ = (
        Index(
            "uq_time_cards_one_active_per_user",
            "user_id",
            unique=True,
            postgresql_where=text("end_time IS NULL"),
            sqlite_where=text("end_time IS NULL"),
        ),
    )

    @property
    def is_active(self) -> bool:
        return self.end_time is None

    def __repr__(self):
        return f"<TimeCard(id={self.id}, user_id={self.user_id}, active={self.is_active})>"

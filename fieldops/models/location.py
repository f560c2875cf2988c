"""Location model"""

from datetime import datetime
from sqlalchemy import Column, DateTime, Float, ForeignKey, Uuid
from sqlalchemy.orm import relationship
from fieldops.models.base import BaseModel


class Location(BaseModel):
    """Append-only log of location pings. The live view is the latest row per user."""

    __tablename__ = "locations"

    user_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    lat = Column(Float, nullable=False)
    lng = Column(Float, nullable=False)
    timestamp = Column(DateTime, default=datetime.utcnow, nullable=False, index=True)

    # Relationships
    user = relationship("User", back_populates="locations")

    def __repr__(self):
        return f"<Location(id={self.id}, user_id={self.user_id}, lat={self.lat}, lng={self.lng})>"

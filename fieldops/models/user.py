"""User model"""

import enum
from sqlalchemy import Column, String
from sqlalchemy.orm import relationship
from fieldops.models.base import BaseModel


class UserRole(str, enum.Enum):
    """Authorization role"""
    ADMIN = "admin"
    USER = "user"


class User(BaseModel):
    """
    User model representing field staff and administrators.
    Role is the only authorization axis besides ownership and membership.
    """

    __tablename__ = "users"

    email = Column(String(255), unique=True, nullable=False, index=True)
    first_name = Column(String(100), nullable=True)
    last_name = Column(String(100), nullable=True)
    profile_image_url = Column(String(500), nullable=True)
    role = Column(String(20), default=UserRole.USER.value, nullable=False)
    password_hash = Column(String(255), nullable=False)

    # Relationships
    time_cards = relationship("TimeCard", back_populates="user", passive_deletes=True)
    locations = relationship("Location", back_populates="user", passive_deletes=True)
    photos = relationship("Photo", back_populates="user", passive_deletes=True)

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN.value

    def __repr__(self):
        return f"<User(id={self.id}, email={self.email}, role={self.role})>"

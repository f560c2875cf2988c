"""Database models package"""

from fieldops.models.base import BaseModel
from fieldops.models.user import User, UserRole
from fieldops.models.time_card import TimeCard
from fieldops.models.location import Location
from fieldops.models.project import Project, ProjectMember, ProjectMessage
from fieldops.models.board import Board, BoardMember, BoardType
from fieldops.models.contact import Contact
from fieldops.models.photo import Photo, PhotoFileType
from fieldops.models.message import Message

# Export all models
__all__ = [
    "BaseModel",
    "User",
    "UserRole",
    "TimeCard",
    "Location",
    "Project",
    "ProjectMember",
    "ProjectMessage",
    "Board",
    "BoardMember",
    "BoardType",
    "Contact",
    "Photo",
    "PhotoFileType",
    "Message",
]

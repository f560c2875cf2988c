"""Services package"""

from .s3_service import S3Service
from .redis_service import RedisService
from .session_service import SessionService
from .user_service import UserService
from .time_card_service import TimeCardService
from .board_service import BoardService
from .message_service import MessageService
from .project_service import ProjectService
from .contact_service import ContactService
from .photo_service import PhotoService
from .location_service import LocationService

__all__ = [
    "S3Service",
    "RedisService",
    "SessionService",
    "UserService",
    "TimeCardService",
    "BoardService",
    "MessageService",
    "ProjectService",
    "ContactService",
    "PhotoService",
    "LocationService",
]

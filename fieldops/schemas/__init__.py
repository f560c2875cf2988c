"""API schemas package"""

from .auth import LoginRequest, ChangePasswordRequest, AckResponse
from .user import UserSummary, UserResponse, UserCreate, UserUpdate, RoleUpdate
from .photo import PhotoCreate, PhotoUpdate, PhotoResponse, UploadUrlRequest, UploadUrlResponse

__all__ = [
    "LoginRequest",
    "ChangePasswordRequest",
    "AckResponse",
    "UserSummary",
    "UserResponse",
    "UserCreate",
    "UserUpdate",
    "RoleUpdate",
    "PhotoCreate",
    "PhotoUpdate",
    "PhotoResponse",
    "UploadUrlRequest",
    "UploadUrlResponse",
]

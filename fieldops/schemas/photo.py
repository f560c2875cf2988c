"""Photo and upload API schemas"""

from typing import Any, Dict, Optional
from datetime import datetime
from pydantic import BaseModel, Field, field_validator
from uuid import UUID

FILE_TYPES = {"image", "pdf"}


class UploadUrlRequest(BaseModel):
    """Request schema for generating an upload URL"""

    name: str = Field(..., min_length=1, max_length=255, description="Original file name")
    size: int = Field(..., gt=0, description="File size in bytes")
    content_type: str = Field(..., description="MIME type of the file")


class UploadUrlResponse(BaseModel):
    """Response schema for upload URL generation"""

    upload_url: str = Field(..., description="Pre-signed PUT URL")
    object_url: str = Field(..., description="URL the file is served from after upload")
    storage_key: str = Field(..., description="Object key, passed back when creating the photo")
    file_type: str = Field(..., description="'image' or 'pdf'")
    expires_in_seconds: int = Field(..., description="Upload URL expiration time in seconds")
    headers: Dict[str, str] = Field(..., description="Required headers for upload")


class PhotoCreate(BaseModel):
    """Photo record creation; the file itself is already uploaded"""

    url: str = Field(..., min_length=1, description="URL of the uploaded file")
    storage_key: Optional[str] = Field(None, max_length=500)
    notes: Optional[str] = None
    project_id: Optional[UUID] = None
    board_id: Optional[UUID] = None
    contact_id: Optional[UUID] = None
    markup_data: Optional[Any] = None
    file_type: str = Field(default="image")

    @field_validator("file_type")
    @classmethod
    def validate_file_type(cls, v: str) -> str:
        """Validate file type is allowed"""
        if v not in FILE_TYPES:
            raise ValueError(f"file_type must be one of {sorted(FILE_TYPES)}")
        return v


class PhotoUpdate(BaseModel):
    """Editable photo fields; is_locked is admin-only"""

    notes: Optional[str] = None
    markup_data: Optional[Any] = None
    is_locked: Optional[bool] = None


class PhotoResponse(BaseModel):
    """Response schema for photo details"""

    id: UUID = Field(..., description="Photo ID")
    user_id: UUID = Field(..., description="User ID who uploaded the photo")
    project_id: Optional[UUID] = None
    board_id: Optional[UUID] = None
    contact_id: Optional[UUID] = None
    url: str
    storage_key: Optional[str] = None
    file_type: str
    notes: Optional[str] = None
    markup_data: Optional[Any] = None
    is_locked: bool
    created_at: datetime = Field(..., description="Creation timestamp")
    updated_at: datetime = Field(..., description="Last update timestamp")

    class Config:
        from_attributes = True

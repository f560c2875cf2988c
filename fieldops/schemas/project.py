"""Project schemas"""

from typing import Optional
from pydantic import BaseModel, Field
from datetime import datetime
from uuid import UUID

from fieldops.schemas.user import UserSummary


class ProjectBase(BaseModel):
    """Base project schema"""
    name: str = Field(..., min_length=1, max_length=255, description="Project name")
    description: Optional[str] = Field(None, description="Project description")


class ProjectCreate(ProjectBase):
    """Project creation schema"""
    pass


class ProjectUpdate(BaseModel):
    """Project update schema - all fields optional"""
    name: Optional[str] = Field(None, min_length=1, max_length=255, description="Project name")
    description: Optional[str] = Field(None, description="Project description")


class ProjectResponse(ProjectBase):
    """Project response schema"""
    id: UUID
    created_by: Optional[UUID] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class ProjectDetailResponse(ProjectResponse):
    """Detailed project response with additional stats"""
    photo_count: int = Field(default=0, description="Number of photos in project")
    last_photo_at: Optional[datetime] = Field(None, description="Timestamp of last photo upload")


class ProjectMemberAdd(BaseModel):
    user_id: UUID


class ProjectMemberResponse(BaseModel):
    id: UUID
    project_id: UUID
    user_id: UUID
    joined_at: datetime
    user: UserSummary

    class Config:
        from_attributes = True


class ProjectMessageCreate(BaseModel):
    content: str = Field(..., min_length=1, description="Message text")


class ProjectMessageResponse(BaseModel):
    id: UUID
    project_id: UUID
    sender_id: UUID
    content: str
    created_at: datetime
    sender: UserSummary

    class Config:
        from_attributes = True

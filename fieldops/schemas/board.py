"""Board (chat) schemas"""

from typing import Optional
from pydantic import BaseModel, Field, field_validator
from datetime import datetime
from uuid import UUID

from fieldops.schemas.user import UserSummary

BOARD_TYPES = {"group", "direct"}


class BoardCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    type: str = Field(default="group")
    member_ids: list[UUID] = Field(default_factory=list)
    allow_user_editing: bool = False

    @field_validator("type")
    @classmethod
    def validate_type(cls, v: str) -> str:
        if v not in BOARD_TYPES:
            raise ValueError(f"type must be one of {sorted(BOARD_TYPES)}")
        return v


class BoardUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    allow_user_editing: Optional[bool] = None


class BoardMemberAdd(BaseModel):
    user_id: UUID
    can_edit: bool = False


class BoardMemberUpdate(BaseModel):
    can_edit: bool


class BoardMemberResponse(BaseModel):
    id: UUID
    board_id: UUID
    user_id: UUID
    can_edit: bool
    joined_at: datetime
    user: UserSummary

    class Config:
        from_attributes = True


class BoardResponse(BaseModel):
    id: UUID
    name: str
    type: str
    created_by: Optional[UUID] = None
    allow_user_editing: bool
    created_at: datetime

    class Config:
        from_attributes = True


class BoardDetailResponse(BoardResponse):
    members: list[BoardMemberResponse] = Field(default_factory=list)

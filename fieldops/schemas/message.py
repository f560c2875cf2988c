"""Chat message schemas"""

from typing import Optional
from pydantic import BaseModel, model_validator
from datetime import datetime
from uuid import UUID

from fieldops.schemas.photo import PhotoResponse
from fieldops.schemas.user import UserSummary


class MessageCreate(BaseModel):
    """A message goes to a board or to one user, and carries text and/or a photo"""

    board_id: Optional[UUID] = None
    receiver_id: Optional[UUID] = None
    content: Optional[str] = None
    photo_id: Optional[UUID] = None

    @model_validator(mode="after")
    def validate_target_and_body(self) -> "MessageCreate":
        if self.board_id is None and self.receiver_id is None:
            raise ValueError("Either board_id or receiver_id is required")
        if not (self.content and self.content.strip()) and self.photo_id is None:
            raise ValueError("Message needs content or a photo")
        return self


class MessageLockUpdate(BaseModel):
    is_locked: bool


class MessageResponse(BaseModel):
    id: UUID
    sender_id: UUID
    board_id: Optional[UUID] = None
    receiver_id: Optional[UUID] = None
    content: Optional[str] = None
    photo_id: Optional[UUID] = None
    is_locked: bool
    created_at: datetime
    sender: UserSummary
    photo: Optional[PhotoResponse] = None

    class Config:
        from_attributes = True

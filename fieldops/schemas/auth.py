"""Authentication schemas"""

from typing import Optional
from pydantic import BaseModel, EmailStr, Field, field_validator, model_validator

from fieldops.schemas.user import validate_password_length


class LoginRequest(BaseModel):
    """Login request schema"""
    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., min_length=1, description="User password")


class ChangePasswordRequest(BaseModel):
    """Password change request; the current password must be re-submitted"""
    current_password: str = Field(..., min_length=1, description="Current password")
    new_password: str = Field(..., min_length=8, description="New password (minimum 8 characters)")
    confirm_password: Optional[str] = Field(None, description="Repeat of new_password, checked when sent")

    @field_validator("new_password")
    @classmethod
    def validate_new_password(cls, v: str) -> str:
        return validate_password_length(v)

    @model_validator(mode="after")
    def passwords_match(self) -> "ChangePasswordRequest":
        if self.confirm_password is not None and self.confirm_password != self.new_password:
            raise ValueError("Password confirmation does not match")
        return self


class AckResponse(BaseModel):
    """Plain acknowledgement"""
    message: str

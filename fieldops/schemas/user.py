"""User management schemas"""

from typing import Optional
from pydantic import BaseModel, EmailStr, Field, field_validator
from datetime import datetime
from uuid import UUID

VALID_ROLES = ("admin", "user")
PASSWORD_MAX_BYTES = 72


def _validate_role(v: Optional[str]) -> Optional[str]:
    if v is not None and v not in VALID_ROLES:
        raise ValueError(f"Role must be one of: {', '.join(VALID_ROLES)}")
    return v


def validate_password_length(v: str) -> str:
    # bcrypt only accepts up to 72 bytes of input
    if len(v.encode("utf-8")) > PASSWORD_MAX_BYTES:
        raise ValueError(f"Password cannot be longer than {PASSWORD_MAX_BYTES} bytes")
    return v


class UserSummary(BaseModel):
    """User identity embedded in other responses"""
    id: UUID
    email: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    role: str
    profile_image_url: Optional[str] = None

    class Config:
        from_attributes = True


class UserResponse(UserSummary):
    """User profile; never carries the password hash"""
    created_at: datetime
    updated_at: datetime


class UserCreate(BaseModel):
    """User creation schema (admin only)"""
    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., min_length=8, description="User password")
    first_name: str = Field(..., min_length=1, max_length=100, description="First name")
    last_name: str = Field(..., min_length=1, max_length=100, description="Last name")
    role: str = Field(default="user", description="User role")

    @field_validator("role")
    @classmethod
    def validate_role(cls, v: str) -> str:
        return _validate_role(v)

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: str) -> str:
        return validate_password_length(v)


class UserUpdate(BaseModel):
    """User update schema - all fields optional"""
    email: Optional[EmailStr] = None
    first_name: Optional[str] = Field(None, min_length=1, max_length=100)
    last_name: Optional[str] = Field(None, min_length=1, max_length=100)
    profile_image_url: Optional[str] = Field(None, max_length=500)
    role: Optional[str] = None

    @field_validator("role")
    @classmethod
    def validate_role(cls, v: Optional[str]) -> Optional[str]:
        return _validate_role(v)


class RoleUpdate(BaseModel):
    """Role change request"""
    role: str

    @field_validator("role")
    @classmethod
    def validate_role(cls, v: str) -> str:
        return _validate_role(v)


class UserDeleteRequest(BaseModel):
    """Admin must re-enter their own password to delete a user"""
    admin_password: str = Field(..., min_length=1)

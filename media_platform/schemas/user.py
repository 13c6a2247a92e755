"""
User Schemas

Request/response models for user and authentication endpoints.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, EmailStr, Field

from media_platform.models.enums import UserRole
from media_platform.schemas.common import BaseSchema, TimestampMixin


USERNAME_PATTERN = r"^[A-Za-z0-9_]+$"


class UserCreate(BaseModel):
    """Schema for user registration."""

    username: str = Field(min_length=3, max_length=100, pattern=USERNAME_PATTERN)
    email: EmailStr
    password: str = Field(
        min_length=4,
        max_length=72,
        description="Password (4-72 characters, bcrypt limit)",
    )
    bio: Optional[str] = Field(default=None, max_length=2000)
    avatar: Optional[str] = Field(default=None, max_length=500)


class UserLogin(BaseModel):
    """Schema for user login."""

    email: EmailStr
    password: str = Field(min_length=1, max_length=72)


class UserUpdate(BaseModel):
    """Profile update by the user themself. Omitted fields are left unchanged."""

    username: Optional[str] = Field(default=None, min_length=3, max_length=100, pattern=USERNAME_PATTERN)
    email: Optional[EmailStr] = None
    password: Optional[str] = Field(default=None, min_length=4, max_length=72)
    bio: Optional[str] = Field(default=None, max_length=2000)
    avatar: Optional[str] = Field(default=None, max_length=500)


class AdminUserUpdate(UserUpdate):
    """Admin edit of any account; may also change the role."""

    role: Optional[UserRole] = None


class UserPublicResponse(BaseSchema):
    """Public profile, safe to show to anyone."""

    id: int
    username: str
    bio: Optional[str] = None
    avatar: Optional[str] = None
    created_at: datetime


class UserResponse(UserPublicResponse, TimestampMixin):
    """Full account view for the owner and admins."""

    email: str
    role: str


class AuthResponse(BaseModel):
    """Schema for register/login responses."""

    user: UserResponse
    access_token: str
    token_type: str = "bearer"
    expires_in: int  # seconds


class NotificationSettingsResponse(BaseSchema):
    user_id: int
    new_follower_notification: bool
    following_post_notification: bool
    mutual_follow_notification: bool


class NotificationSettingsUpdate(BaseModel):
    new_follower_notification: Optional[bool] = None
    following_post_notification: Optional[bool] = None
    mutual_follow_notification: Optional[bool] = None

"""
Pydantic schemas for user registration, login and profile management.
"""

from pydantic import BaseModel, EmailStr, Field
from typing import Optional

from jobtracker.schemas.envelope import MessageResponse


class UserRegisterRequest(BaseModel):
    """Request schema for user registration. No strength rules are applied to the password."""
    username: str = Field(..., min_length=1, max_length=150)
    password: str = Field(..., min_length=1)
    email: Optional[EmailStr] = None


class UserLoginRequest(BaseModel):
    username: str
    password: str


class UserUpdateRequest(BaseModel):
    """Only username and email can change; the password is fixed at registration."""
    username: str = Field(..., min_length=1, max_length=150)
    email: Optional[EmailStr] = None


class UserResponse(BaseModel):
    """User profile response (no password hash)."""
    id: int
    username: str
    email: Optional[str] = None

    class Config:
        from_attributes = True


class UserCreatedResponse(UserResponse):
    """Registration response; password holds the stored bcrypt hash."""
    password: str


class LoginResponse(MessageResponse):
    token: str
    user: UserResponse

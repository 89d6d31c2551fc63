"""
Authentication schemas
"""
import uuid
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, EmailStr
from beloved.models.profile import UserRole, ProfileStatus
from beloved.schemas.common import Address


class LoginRequest(BaseModel):
    """Login request schema"""
    email: EmailStr
    password: str


class SignupRequest(BaseModel):
    """Member self sign-up, validated by the signup form rules"""
    email: str = ""
    password: str = ""
    full_name: str = ""
    phone: str = ""


class UserResponse(BaseModel):
    """User response schema"""
    id: uuid.UUID
    email: str
    full_name: str
    phone: str
    username: Optional[str] = None
    user_role: UserRole
    status: ProfileStatus
    member_id: Optional[str] = None
    home_address: Optional[Address] = None
    created_at: datetime

    class Config:
        from_attributes = True


class LoginResponse(BaseModel):
    """Login response schema"""
    access_token: str
    user: UserResponse
    redirect_to: str


class ProfileUpdateRequest(BaseModel):
    """Own profile update"""
    full_name: Optional[str] = None
    phone: Optional[str] = None
    home_address: Optional[Address] = None

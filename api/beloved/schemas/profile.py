"""
Member and driver directory schemas
"""
import uuid
from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, Field
from beloved.models.driver_profile import DriverStatus
from beloved.schemas.auth import UserResponse
from beloved.schemas.common import Address


class MemberCreateRequest(BaseModel):
    """Admin-created member, validated by the member form rules"""
    full_name: str = ""
    email: str = ""
    phone: str = ""
    password: Optional[str] = None
    home_address: Optional[Address] = None
    status: str = "active"


class MemberListResponse(BaseModel):
    """Member directory"""
    items: List[UserResponse]
    total: int


class MemberNoteRequest(BaseModel):
    """Admin note on a member, validated by the member note form rules"""
    content: str = ""


class MemberNoteResponse(BaseModel):
    id: int
    member_id: uuid.UUID
    author_id: Optional[uuid.UUID] = None
    author_name: Optional[str] = None
    content: str
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class DriverCreateRequest(BaseModel):
    """Admin-created driver, validated by the driver form rules"""
    full_name: str = ""
    email: str = ""
    phone: str = ""
    username: str = ""
    password: Optional[str] = None
    license_number: str = ""
    vehicle_make: str = ""
    vehicle_model: str = ""
    vehicle_year: str = ""
    vehicle_color: str = ""
    vehicle_plate: str = ""


class DriverProfileUpdate(BaseModel):
    """Licence and vehicle details, validated by the driver profile form rules"""
    license_number: str = ""
    vehicle_make: str = ""
    vehicle_model: str = ""
    vehicle_year: str = ""
    vehicle_color: str = ""
    vehicle_plate: str = ""
    status: str = "active"


class DriverProfileResponse(BaseModel):
    """Driver profile response schema"""
    id: uuid.UUID
    license_number: str
    vehicle_make: str
    vehicle_model: str
    vehicle_year: str
    vehicle_color: str
    vehicle_plate: str
    status: DriverStatus
    completed_rides: int
    total_miles: float
    weekly_stars_count: int
    total_stars: int
    updated_at: datetime

    class Config:
        from_attributes = True


class DriverResponse(BaseModel):
    """Driver with their profile"""
    profile: UserResponse
    driver_profile: Optional[DriverProfileResponse] = None


class DriverListResponse(BaseModel):
    """Driver directory"""
    items: List[DriverResponse]


class StarAwardRequest(BaseModel):
    """Star rating given to a driver"""
    stars: int = Field(..., ge=1, le=5)


class StarResetResponse(BaseModel):
    """Weekly star reset outcome"""
    message: str
    reset: bool
    timestamp: Optional[datetime] = None

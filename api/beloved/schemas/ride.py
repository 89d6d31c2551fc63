"""
Ride schemas
"""
import uuid
from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel
from beloved.models.ride import RideStatus, PaymentMethod, PaymentStatus, Recurrence
from beloved.schemas.common import Address


class RideCreateRequest(BaseModel):
    """Ride booking, validated by the ride form rules"""
    member_id: Optional[uuid.UUID] = None  # Required when an admin books
    pickup_address: Optional[Address] = None
    dropoff_address: Optional[Address] = None
    scheduled_pickup_time: Optional[datetime] = None
    appointment_time: Optional[datetime] = None
    provider_name: Optional[str] = None
    provider_address: Optional[str] = None
    notes: Optional[str] = None
    payment_method: str = ""
    recurring: Recurrence = Recurrence.NONE
    recurring_pattern: Optional[dict] = None


class RideResponse(BaseModel):
    """Ride response schema"""
    id: int
    trip_id: Optional[str] = None
    member_id: uuid.UUID
    driver_id: Optional[uuid.UUID] = None
    pickup_address: Address
    dropoff_address: Address
    scheduled_pickup_time: datetime
    appointment_time: Optional[datetime] = None
    provider_name: Optional[str] = None
    provider_address: Optional[str] = None
    notes: Optional[str] = None
    payment_method: PaymentMethod
    payment_status: PaymentStatus
    status: RideStatus
    recurring: Recurrence
    recurring_pattern: Optional[dict] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class RideListResponse(BaseModel):
    """Ride list response with pagination"""
    items: List[RideResponse]
    total: int
    page: int
    page_size: int
    total_pages: int


class RideAssignRequest(BaseModel):
    """Driver assignment"""
    driver_id: uuid.UUID


class RideStatusUpdate(BaseModel):
    """Trip progress update"""
    status: RideStatus


class RideStatusHistoryResponse(BaseModel):
    """One status change of a ride"""
    id: int
    ride_id: int
    previous_status: Optional[RideStatus] = None
    new_status: RideStatus
    changed_by: Optional[uuid.UUID] = None
    notes: Optional[str] = None
    created_at: datetime

    class Config:
        from_attributes = True

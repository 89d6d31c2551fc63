"""
Ride model
"""
from sqlalchemy import Column, String, ForeignKey, Integer, Float, DateTime, Text, Enum as SQLEnum, JSON, Uuid
from sqlalchemy.dialects.postgresql import JSONB
from beloved.core.database import Base
import enum
from datetime import datetime


class RideStatus(str, enum.Enum):
    """Ride status enum, listed in trip order"""
    PENDING = "pending"
    ASSIGNED = "assigned"
    STARTED = "started"
    PICKED_UP = "picked_up"
    COMPLETED = "completed"
    RETURN_PENDING = "return_pending"
    RETURN_STARTED = "return_started"
    RETURN_PICKED_UP = "return_picked_up"
    RETURN_COMPLETED = "return_completed"
    CANCELLED = "cancelled"


class PaymentMethod(str, enum.Enum):
    """Payment method enum"""
    CASH = "cash"
    CREDIT = "credit"
    INSURANCE = "insurance"


class PaymentStatus(str, enum.Enum):
    """Payment status enum"""
    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"


class Recurrence(str, enum.Enum):
    """Ride recurrence enum"""
    NONE = "none"
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"


class Ride(Base):
    """Ride model"""
    __tablename__ = "rides"

    id = Column(Integer, primary_key=True, autoincrement=True)
    trip_id = Column(String(20), unique=True, nullable=True, index=True)
    member_id = Column(Uuid, ForeignKey("profiles.id"), nullable=False, index=True)
    driver_id = Column(Uuid, ForeignKey("profiles.id"), nullable=True, index=True)

    pickup_address = Column(JSON().with_variant(JSONB, "postgresql"), nullable=False)
    dropoff_address = Column(JSON().with_variant(JSONB, "postgresql"), nullable=False)
    scheduled_pickup_time = Column(DateTime(timezone=True), nullable=False, index=True)
    appointment_time = Column(DateTime(timezone=True), nullable=True)
    provider_name = Column(String(255), nullable=True)
    provider_address = Column(Text, nullable=True)
    notes = Column(Text, nullable=True)

    payment_method = Column(SQLEnum(PaymentMethod), nullable=False, default=PaymentMethod.INSURANCE)
    payment_status = Column(SQLEnum(PaymentStatus), nullable=False, default=PaymentStatus.PENDING)
    status = Column(SQLEnum(RideStatus), nullable=False, default=RideStatus.PENDING, index=True)
    recurring = Column(SQLEnum(Recurrence), nullable=False, default=Recurrence.NONE)
    recurring_pattern = Column(JSON().with_variant(JSONB, "postgresql"), nullable=True)

    provider_fee = Column(Float, nullable=True)
    driver_earnings = Column(Float, nullable=True)
    insurance_claim_amount = Column(Float, nullable=True)

    created_at = Column(DateTime(timezone=True), default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    def __repr__(self):
        return f"<Ride(id={self.id}, trip_id={self.trip_id}, status={self.status})>"

"""
Driver profile model (licence, vehicle and rating counters)
"""
from sqlalchemy import Column, String, ForeignKey, Integer, Float, DateTime, Enum as SQLEnum, Uuid
from beloved.core.database import Base
import enum
from datetime import datetime


class DriverStatus(str, enum.Enum):
    """Driver availability enum"""
    ACTIVE = "active"
    INACTIVE = "inactive"
    ON_BREAK = "on_break"


class DriverProfile(Base):
    """Driver profile model, one per driver profile row"""
    __tablename__ = "driver_profiles"

    id = Column(Uuid, ForeignKey("profiles.id", ondelete="CASCADE"), primary_key=True)
    license_number = Column(String(100), nullable=False, default="")
    vehicle_make = Column(String(100), nullable=False, default="")
    vehicle_model = Column(String(100), nullable=False, default="")
    vehicle_year = Column(String(10), nullable=False, default="")
    vehicle_color = Column(String(50), nullable=False, default="")
    vehicle_plate = Column(String(20), nullable=False, default="")
    status = Column(SQLEnum(DriverStatus), nullable=False, default=DriverStatus.ACTIVE)

    completed_rides = Column(Integer, nullable=False, default=0)
    total_miles = Column(Float, nullable=False, default=0.0)
    weekly_stars_count = Column(Integer, nullable=False, default=0)  # Reset every Sunday
    total_stars = Column(Integer, nullable=False, default=0)

    created_at = Column(DateTime(timezone=True), default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    def __repr__(self):
        return f"<DriverProfile(id={self.id}, status={self.status}, weekly_stars={self.weekly_stars_count})>"

"""
Ride status history model (one row per status change)
"""
from sqlalchemy import Column, ForeignKey, Integer, DateTime, Text, Enum as SQLEnum, Uuid
from beloved.core.database import Base
from beloved.models.ride import RideStatus
from datetime import datetime


class RideStatusHistory(Base):
    """Ride status history model"""
    __tablename__ = "ride_status_history"

    id = Column(Integer, primary_key=True, autoincrement=True)
    ride_id = Column(Integer, ForeignKey("rides.id", ondelete="CASCADE"), nullable=False, index=True)
    previous_status = Column(SQLEnum(RideStatus), nullable=True)  # None for the booking itself
    new_status = Column(SQLEnum(RideStatus), nullable=False)
    changed_by = Column(Uuid, ForeignKey("profiles.id"), nullable=True)  # None for voice bookings
    notes = Column(Text, nullable=True)

    created_at = Column(DateTime(timezone=True), default=datetime.utcnow, nullable=False, index=True)

    def __repr__(self):
        return f"<RideStatusHistory(ride_id={self.ride_id}, {self.previous_status} -> {self.new_status})>"

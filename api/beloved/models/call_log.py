"""
Call log model (one row per VAPI conversation)
"""
from sqlalchemy import Column, String, Integer, Float, DateTime, Enum as SQLEnum, Text, Uuid, ForeignKey
from beloved.core.database import Base
import enum
from datetime import datetime


class CallType(str, enum.Enum):
    """Call direction enum"""
    INBOUND = "inbound"
    OUTBOUND = "outbound"


class CallLog(Base):
    """Call log model"""
    __tablename__ = "call_logs"

    id = Column(Integer, primary_key=True, autoincrement=True)
    call_id = Column(String(255), unique=True, nullable=False, index=True)
    status = Column(String(50), nullable=False, default="initiated")
    caller_id = Column(Uuid, ForeignKey("profiles.id"), nullable=True, index=True)  # Set once verified
    call_type = Column(SQLEnum(CallType), nullable=False, default=CallType.INBOUND)

    duration = Column(Float, nullable=True)  # Seconds
    recording_url = Column(Text, nullable=True)
    end_timestamp = Column(DateTime(timezone=True), nullable=True)

    created_at = Column(DateTime(timezone=True), default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    def __repr__(self):
        return f"<CallLog(id={self.id}, call_id={self.call_id}, status={self.status})>"

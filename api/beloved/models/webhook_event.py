"""
Webhook event model (for delivery auditing)
"""
import uuid
from sqlalchemy import Column, String, DateTime, Enum as SQLEnum, JSON, Uuid
from sqlalchemy.dialects.postgresql import JSONB
from beloved.core.database import Base
import enum
from datetime import datetime


class WebhookStatus(str, enum.Enum):
    """Webhook status enum"""
    RECEIVED = "received"
    PROCESSED = "processed"
    ERROR = "error"


class WebhookEvent(Base):
    """Webhook event model"""
    __tablename__ = "webhook_events"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    source = Column(String(255), nullable=False)
    event_type = Column(String(100), nullable=True, index=True)
    payload = Column(JSON().with_variant(JSONB, "postgresql"), nullable=False)
    status = Column(SQLEnum(WebhookStatus), nullable=False, default=WebhookStatus.RECEIVED)
    error_message = Column(String(1000), nullable=True)

    created_at = Column(DateTime(timezone=True), default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    def __repr__(self):
        return f"<WebhookEvent(id={self.id}, source={self.source}, status={self.status})>"

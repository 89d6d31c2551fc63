"""
Profile model (every signed-in user)
"""
import uuid
from sqlalchemy import Column, String, DateTime, Enum as SQLEnum, JSON, Uuid
from sqlalchemy.dialects.postgresql import JSONB
from beloved.core.database import Base
import enum
from datetime import datetime


class UserRole(str, enum.Enum):
    """User role enum"""
    MEMBER = "member"
    DRIVER = "driver"
    ADMIN = "admin"
    SUPER_ADMIN = "super_admin"


class ProfileStatus(str, enum.Enum):
    """Profile status enum"""
    ACTIVE = "active"
    INACTIVE = "inactive"


class Profile(Base):
    """Profile model"""
    __tablename__ = "profiles"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=True)
    full_name = Column(String(255), nullable=False)
    phone = Column(String(50), nullable=False, default="")
    username = Column(String(100), nullable=True)
    user_role = Column(SQLEnum(UserRole), nullable=False, default=UserRole.MEMBER, index=True)
    status = Column(SQLEnum(ProfileStatus), nullable=False, default=ProfileStatus.ACTIVE)
    member_id = Column(String(7), unique=True, nullable=True, index=True)  # Members only
    home_address = Column(JSON().with_variant(JSONB, "postgresql"), nullable=True)

    created_at = Column(DateTime(timezone=True), default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    @property
    def is_admin(self) -> bool:
        return self.user_role in (UserRole.ADMIN, UserRole.SUPER_ADMIN)

    def __repr__(self):
        return f"<Profile(id={self.id}, email={self.email}, role={self.user_role})>"

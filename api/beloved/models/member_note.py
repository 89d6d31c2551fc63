"""
Member note model (admin notes on a member's file)
"""
from sqlalchemy import Column, ForeignKey, Integer, DateTime, Text, Uuid
from beloved.core.database import Base
from datetime import datetime


class MemberNote(Base):
    """Member note model"""
    __tablename__ = "member_notes"

    id = Column(Integer, primary_key=True, autoincrement=True)
    member_id = Column(Uuid, ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False, index=True)
    author_id = Column(Uuid, ForeignKey("profiles.id"), nullable=True)
    content = Column(Text, nullable=False)

    created_at = Column(DateTime(timezone=True), default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    def __repr__(self):
        return f"<MemberNote(id={self.id}, member_id={self.member_id})>"

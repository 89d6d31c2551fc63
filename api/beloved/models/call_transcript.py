"""
Call transcript model
"""
from sqlalchemy import Column, String, Integer, Boolean, DateTime, Text
from beloved.core.database import Base
from datetime import datetime


class CallTranscript(Base):
    """Transcript fragment pushed by the voice platform"""
    __tablename__ = "call_transcripts"

    id = Column(Integer, primary_key=True, autoincrement=True)
    call_id = Column(String(255), nullable=False, index=True)
    transcript = Column(Text, nullable=False)
    is_final = Column(Boolean, nullable=False, default=False)
    timestamp = Column(DateTime(timezone=True), default=datetime.utcnow, nullable=False, index=True)

    def __repr__(self):
        return f"<CallTranscript(id={self.id}, call_id={self.call_id}, is_final={self.is_final})>"

"""
Call log schemas
"""
import uuid
from pydantic import BaseModel
from typing import Optional, List
from datetime import datetime
from beloved.models.call_log import CallType


class TranscriptResponse(BaseModel):
    """Transcript fragment"""
    id: int
    call_id: str
    transcript: str
    is_final: bool
    timestamp: datetime

    class Config:
        from_attributes = True


class CallLogResponse(BaseModel):
    """Call log response schema"""
    id: int
    call_id: str
    status: str
    caller_id: Optional[uuid.UUID] = None
    call_type: CallType
    duration: Optional[float] = None
    recording_url: Optional[str] = None
    end_timestamp: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class CallDetailResponse(CallLogResponse):
    """Call log with its transcript fragments"""
    transcripts: List[TranscriptResponse] = []


class CallListResponse(BaseModel):
    """Call list response with pagination"""
    items: List[CallLogResponse]
    total: int
    page: int
    page_size: int
    total_pages: int

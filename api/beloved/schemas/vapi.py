"""
VAPI webhook payload schemas
"""
from typing import Any, Dict, Optional
from pydantic import BaseModel


class Recording(BaseModel):
    url: Optional[str] = None


class Conversation(BaseModel):
    id: str
    status: Optional[str] = None
    duration: Optional[float] = None
    recording: Optional[Recording] = None


class TranscriptPayload(BaseModel):
    text: str
    final: bool = False


class FunctionCall(BaseModel):
    name: str
    parameters: Dict[str, Any] = {}


class AssistantRequest(BaseModel):
    type: str
    parameters: Dict[str, Any] = {}


class CallSummary(BaseModel):
    text: str
    metadata: Dict[str, Any] = {}


class VAPIEvent(BaseModel):
    """Event pushed by the voice platform"""
    type: str
    conversation: Conversation
    transcript: Optional[TranscriptPayload] = None
    function: Optional[FunctionCall] = None
    request: Optional[AssistantRequest] = None
    summary: Optional[CallSummary] = None

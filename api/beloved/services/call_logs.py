"""
Call log and transcript bookkeeping for the voice webhook
"""
import logging
from datetime import datetime
from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from beloved.models.call_log import CallLog
from beloved.models.call_transcript import CallTranscript

logger = logging.getLogger(__name__)

STATUS_COMPLETED = "completed"
STATUS_HUNG = "hung"


async def get_call_log(db: AsyncSession, call_id: str) -> Optional[CallLog]:
    result = await db.execute(select(CallLog).where(CallLog.call_id == call_id))
    return result.scalar_one_or_none()


async def get_or_create_call_log(db: AsyncSession, call_id: str) -> CallLog:
    """Call logs are opened by the first event that mentions the conversation"""
    call_log = await get_call_log(db, call_id)
    if call_log is None:
        call_log = CallLog(call_id=call_id)
        db.add(call_log)
        await db.flush()
        logger.info("Opened call log for conversation %s", call_id)
    return call_log


async def update_call_status(db: AsyncSession, call_id: str, status: Optional[str]) -> CallLog:
    call_log = await get_or_create_call_log(db, call_id)
    if status:
        call_log.status = status
    call_log.updated_at = datetime.utcnow()
    return call_log


async def record_transcript(db: AsyncSession, call_id: str, text: str, is_final: bool) -> CallTranscript:
    """Append a transcript fragment; repeated deliveries append again"""
    transcript = CallTranscript(
        call_id=call_id,
        transcript=text,
        is_final=is_final,
        timestamp=datetime.utcnow(),
    )
    db.add(transcript)
    return transcript


async def end_call(
    db: AsyncSession,
    call_id: str,
    duration: Optional[float] = None,
    recording_url: Optional[str] = None,
) -> CallLog:
    call_log = await get_or_create_call_log(db, call_id)
    call_log.status = STATUS_COMPLETED
    call_log.duration = duration
    call_log.recording_url = recording_url
    call_log.end_timestamp = datetime.utcnow()
    return call_log


async def mark_hung(db: AsyncSession, call_id: str) -> CallLog:
    return await update_call_status(db, call_id, STATUS_HUNG)

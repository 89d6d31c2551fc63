"""
Call history endpoints
"""
from fastapi import APIRouter, Depends, HTTPException, status, Query
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func
from typing import Optional
from beloved.core.database import get_db
from beloved.core.dependencies import require_admin
from beloved.models.call_log import CallLog
from beloved.models.call_transcript import CallTranscript
from beloved.models.profile import Profile
from beloved.schemas.call import CallLogResponse, CallListResponse, CallDetailResponse, TranscriptResponse

router = APIRouter()


async def _get_call_log(db: AsyncSession, call_id: str) -> CallLog:
    result = await db.execute(select(CallLog).where(CallLog.call_id == call_id))
    call_log = result.scalar_one_or_none()

    if not call_log:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Call not found",
        )
    return call_log


@router.get("", response_model=CallListResponse)
async def list_calls(
    call_status: Optional[str] = Query(None, alias="status"),
    q: Optional[str] = Query(None),
    page: int = Query(1, ge=1),
    page_size: int = Query(50, ge=1, le=100),
    db: AsyncSession = Depends(get_db),
    current_user: Profile = Depends(require_admin),
):
    """List call logs with filters and pagination"""
    query = select(CallLog)

    if call_status:
        query = query.where(CallLog.status == call_status)
    if q:
        query = query.where(CallLog.call_id.ilike(f"%{q}%"))

    # Count total
    count_query = select(func.count()).select_from(query.subquery())
    total_result = await db.execute(count_query)
    total = total_result.scalar()

    # Pagination
    query = query.order_by(CallLog.created_at.desc(), CallLog.id.desc())
    query = query.offset((page - 1) * page_size).limit(page_size)

    result = await db.execute(query)
    calls = result.scalars().all()

    return CallListResponse(
        items=[CallLogResponse.model_validate(call) for call in calls],
        total=total,
        page=page,
        page_size=page_size,
        total_pages=(total + page_size - 1) // page_size,
    )


@router.get("/{call_id}", response_model=CallDetailResponse)
async def get_call(
    call_id: str,
    db: AsyncSession = Depends(get_db),
    current_user: Profile = Depends(require_admin),
):
    """Get call log by VAPI conversation ID, with transcript fragments"""
    call_log = await _get_call_log(db, call_id)

    result = await db.execute(
        select(CallTranscript)
        .where(CallTranscript.call_id == call_id)
        .order_by(CallTranscript.timestamp, CallTranscript.id)
    )
    transcripts = result.scalars().all()

    detail = CallDetailResponse.model_validate(call_log)
    detail.transcripts = [TranscriptResponse.model_validate(t) for t in transcripts]
    return detail


@router.get("/{call_id}/transcript")
async def get_call_transcript(
    call_id: str,
    db: AsyncSession = Depends(get_db),
    current_user: Profile = Depends(require_admin),
):
    """Get the final transcript of a call"""
    await _get_call_log(db, call_id)

    result = await db.execute(
        select(CallTranscript)
        .where(
            CallTranscript.call_id == call_id,
            CallTranscript.is_final.is_(True),
        )
        .order_by(CallTranscript.timestamp, CallTranscript.id)
    )
    fragments = result.scalars().all()

    if not fragments:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Transcript not found",
        )

    return {
        "call_id": call_id,
        "text": "\n".join(f.transcript for f in fragments),
        "fragments": len(fragments),
    }

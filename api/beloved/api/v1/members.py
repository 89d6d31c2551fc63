"""
Member directory and member file notes (admin)
"""
import logging
from typing import Optional
import uuid
from fastapi import APIRouter, Depends, HTTPException, status, Query
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func, or_
from beloved.core.database import get_db
from beloved.core.dependencies import require_admin
from beloved.core.forms import validate_values
from beloved.models.profile import Profile, ProfileStatus, UserRole
from beloved.models.member_note import MemberNote
from beloved.models.ride import Ride
from beloved.schemas.auth import UserResponse
from beloved.schemas.profile import (
    MemberCreateRequest, MemberListResponse, MemberNoteRequest, MemberNoteResponse,
)
from beloved.schemas.ride import RideResponse
from beloved.services.form_rules import MEMBER_FORM_RULES, MEMBER_NOTE_FORM_RULES
from beloved.services.profiles import create_profile

logger = logging.getLogger(__name__)

router = APIRouter()


async def _get_member(db: AsyncSession, member_id: uuid.UUID) -> Profile:
    result = await db.execute(
        select(Profile).where(
            Profile.id == member_id,
            Profile.user_role == UserRole.MEMBER,
        )
    )
    member = result.scalar_one_or_none()
    if not member:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Member not found",
        )
    return member


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def create_member(
    data: MemberCreateRequest,
    db: AsyncSession = Depends(get_db),
    current_user: Profile = Depends(require_admin),
):
    """Create a member profile with the next member number"""
    values = validate_values(data.model_dump(), MEMBER_FORM_RULES)

    member = await create_profile(
        db,
        email=values["email"],
        full_name=values["full_name"],
        phone=values["phone"],
        password=values.get("password"),
        home_address=data.home_address.model_dump() if data.home_address else None,
        profile_status=ProfileStatus(values["status"] or ProfileStatus.ACTIVE.value),
    )
    await db.commit()
    await db.refresh(member)
    return UserResponse.model_validate(member)


@router.get("", response_model=MemberListResponse)
async def list_members(
    q: Optional[str] = Query(None),
    db: AsyncSession = Depends(get_db),
    current_user: Profile = Depends(require_admin),
):
    """List members, optionally searching name, email and member number"""
    query = select(Profile).where(Profile.user_role == UserRole.MEMBER)

    if q:
        query = query.where(
            or_(
                Profile.full_name.ilike(f"%{q}%"),
                Profile.email.ilike(f"%{q}%"),
                Profile.member_id.ilike(f"%{q}%"),
            )
        )

    total_result = await db.execute(select(func.count()).select_from(query.subquery()))
    total = total_result.scalar()

    result = await db.execute(query.order_by(Profile.member_id))
    members = result.scalars().all()

    return MemberListResponse(
        items=[UserResponse.model_validate(m) for m in members],
        total=total,
    )


@router.get("/{member_id}", response_model=UserResponse)
async def get_member(
    member_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    current_user: Profile = Depends(require_admin),
):
    """Get member by ID"""
    return UserResponse.model_validate(await _get_member(db, member_id))


@router.get("/{member_id}/rides", response_model=list[RideResponse])
async def get_member_rides(
    member_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    current_user: Profile = Depends(require_admin),
):
    """Rides booked for a member, latest pickup first"""
    member = await _get_member(db, member_id)
    result = await db.execute(
        select(Ride)
        .where(Ride.member_id == member.id)
        .order_by(Ride.scheduled_pickup_time.desc())
    )
    return [RideResponse.model_validate(r) for r in result.scalars().all()]


def _note_response(note: MemberNote, author_name: Optional[str]) -> MemberNoteResponse:
    response = MemberNoteResponse.model_validate(note)
    response.author_name = author_name
    return response


async def _get_note(db: AsyncSession, member: Profile, note_id: int) -> MemberNote:
    note = await db.get(MemberNote, note_id)
    if note is None or note.member_id != member.id:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Note not found",
        )
    return note


@router.get("/{member_id}/notes", response_model=list[MemberNoteResponse])
async def list_member_notes(
    member_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    current_user: Profile = Depends(require_admin),
):
    """Notes on a member's file, newest first"""
    member = await _get_member(db, member_id)
    result = await db.execute(
        select(MemberNote, Profile.full_name)
        .outerjoin(Profile, Profile.id == MemberNote.author_id)
        .where(MemberNote.member_id == member.id)
        .order_by(MemberNote.created_at.desc(), MemberNote.id.desc())
    )
    return [_note_response(note, author_name) for note, author_name in result.all()]


@router.post("/{member_id}/notes", response_model=MemberNoteResponse, status_code=status.HTTP_201_CREATED)
async def create_member_note(
    member_id: uuid.UUID,
    data: MemberNoteRequest,
    db: AsyncSession = Depends(get_db),
    current_user: Profile = Depends(require_admin),
):
    member = await _get_member(db, member_id)
    values = validate_values(data.model_dump(), MEMBER_NOTE_FORM_RULES)

    note = MemberNote(member_id=member.id, author_id=current_user.id, content=values["content"].strip())
    db.add(note)
    await db.commit()
    await db.refresh(note)
    logger.info("Note %s added to member %s by %s", note.id, member.member_id, current_user.id)
    return _note_response(note, current_user.full_name)


@router.patch("/{member_id}/notes/{note_id}", response_model=MemberNoteResponse)
async def update_member_note(
    member_id: uuid.UUID,
    note_id: int,
    data: MemberNoteRequest,
    db: AsyncSession = Depends(get_db),
    current_user: Profile = Depends(require_admin),
):
    member = await _get_member(db, member_id)
    note = await _get_note(db, member, note_id)
    values = validate_values(data.model_dump(), MEMBER_NOTE_FORM_RULES)

    note.content = values["content"].strip()
    await db.commit()
    await db.refresh(note)

    author = await db.get(Profile, note.author_id) if note.author_id else None
    return _note_response(note, author.full_name if author else None)


@router.delete("/{member_id}/notes/{note_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_member_note(
    member_id: uuid.UUID,
    note_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: Profile = Depends(require_admin),
):
    member = await _get_member(db, member_id)
    note = await _get_note(db, member, note_id)
    await db.delete(note)
    await db.commit()
    logger.info("Note %s removed from member %s by %s", note_id, member.member_id, current_user.id)

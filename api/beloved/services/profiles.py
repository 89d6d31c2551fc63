"""
Profile creation and lookups
"""
import logging
from typing import Optional

from fastapi import HTTPException, status
from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from beloved.core.security import get_password_hash
from beloved.models.profile import Profile, ProfileStatus, UserRole

logger = logging.getLogger(__name__)

MEMBER_ID_WIDTH = 7


def format_member_id(number: int) -> str:
    return str(number).zfill(MEMBER_ID_WIDTH)


async def next_member_id(db: AsyncSession) -> str:
    """Next member number: highest existing one plus one, zero padded"""
    result = await db.execute(
        select(func.max(Profile.member_id)).where(Profile.member_id.is_not(None))
    )
    current = result.scalar()
    try:
        last = int(current) if current else 0
    except ValueError:
        last = 0
    return format_member_id(last + 1)


async def get_profile_by_email(db: AsyncSession, email: str) -> Optional[Profile]:
    result = await db.execute(select(Profile).where(func.lower(Profile.email) == email.strip().lower()))
    return result.scalar_one_or_none()


async def create_profile(
    db: AsyncSession,
    *,
    email: str,
    full_name: str,
    phone: str = "",
    role: UserRole = UserRole.MEMBER,
    password: Optional[str] = None,
    username: Optional[str] = None,
    home_address: Optional[dict] = None,
    profile_status: ProfileStatus = ProfileStatus.ACTIVE,
) -> Profile:
    """Insert a profile; members get the next member number. Raises 409 on a taken email."""
    if await get_profile_by_email(db, email):
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Email already registered",
        )

    profile = Profile(
        email=email.strip().lower(),
        full_name=full_name.strip(),
        phone=phone.strip(),
        username=username,
        user_role=role,
        status=profile_status,
        password_hash=get_password_hash(password) if password else None,
        home_address=home_address,
    )
    if role == UserRole.MEMBER:
        profile.member_id = await next_member_id(db)

    db.add(profile)
    await db.flush()
    logger.info("Created %s profile %s", role.value, profile.id)
    return profile

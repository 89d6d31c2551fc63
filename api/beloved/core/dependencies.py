"""
FastAPI dependencies
"""
from typing import Optional
import uuid
from fastapi import Depends, HTTPException, status, Cookie, Header
from sqlalchemy.ext.asyncio import AsyncSession
from beloved.core.database import get_db
from beloved.core.security import decode_access_token
from beloved.models.profile import Profile, ProfileStatus, UserRole
from sqlalchemy import select


def _token_from_request(access_token: Optional[str], authorization: Optional[str]) -> Optional[str]:
    if authorization and authorization.lower().startswith("bearer "):
        return authorization[7:].strip()
    return access_token


async def _load_user(token: str, db: AsyncSession) -> Profile:
    payload = decode_access_token(token)
    user_id = payload.get("sub")
    if user_id is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token",
        )

    try:
        profile_id = uuid.UUID(str(user_id))
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token",
        )

    result = await db.execute(select(Profile).where(Profile.id == profile_id))
    user = result.scalar_one_or_none()

    if user is None or user.status != ProfileStatus.ACTIVE:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found",
        )

    return user


async def get_current_user(
    access_token: Optional[str] = Cookie(None),
    authorization: Optional[str] = Header(None),
    db: AsyncSession = Depends(get_db),
) -> Profile:
    """Get current authenticated user from the JWT cookie or bearer header"""
    token = _token_from_request(access_token, authorization)
    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
        )
    return await _load_user(token, db)


async def get_optional_user(
    access_token: Optional[str] = Cookie(None),
    authorization: Optional[str] = Header(None),
    db: AsyncSession = Depends(get_db),
) -> Optional[Profile]:
    """Current user, or None for anonymous or invalid sessions"""
    token = _token_from_request(access_token, authorization)
    if not token:
        return None
    try:
        return await _load_user(token, db)
    except HTTPException:
        return None


def require_roles(*roles: UserRole):
    """Dependency factory: allow only the given roles (super admins pass admin gates)"""
    allowed = set(roles)
    if UserRole.ADMIN in allowed:
        allowed.add(UserRole.SUPER_ADMIN)

    async def dependency(current_user: Profile = Depends(get_current_user)) -> Profile:
        if current_user.user_role not in allowed:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Not allowed for this role",
            )
        return current_user

    return dependency


require_admin = require_roles(UserRole.ADMIN)

"""
Authentication endpoints
"""
import logging
from datetime import datetime
from fastapi import APIRouter, Depends, HTTPException, status, Response
from sqlalchemy.ext.asyncio import AsyncSession
from beloved.core.config import settings
from beloved.core.database import get_db
from beloved.core.forms import validate_values
from beloved.core.guards import dashboard_path_for
from beloved.core.security import verify_password, create_access_token
from beloved.core.dependencies import get_current_user
from beloved.schemas.auth import LoginRequest, LoginResponse, SignupRequest, UserResponse, ProfileUpdateRequest
from beloved.models.profile import Profile, ProfileStatus, UserRole
from beloved.services.form_rules import SIGNUP_FORM_RULES, PROFILE_UPDATE_FORM_RULES
from beloved.services.profiles import create_profile, get_profile_by_email

logger = logging.getLogger(__name__)

router = APIRouter()


def _set_session_cookie(response: Response, access_token: str) -> None:
    response.set_cookie(
        key="access_token",
        value=access_token,
        httponly=True,
        secure=settings.ENVIRONMENT == "production",
        samesite="lax",
        max_age=settings.JWT_EXPIRATION_HOURS * 60 * 60,
    )


def _login_response(user: Profile, response: Response) -> LoginResponse:
    access_token = create_access_token(data={"sub": str(user.id)})
    _set_session_cookie(response, access_token)
    return LoginResponse(
        access_token=access_token,
        user=UserResponse.model_validate(user),
        redirect_to=dashboard_path_for(user.user_role),
    )


@router.post("/login", response_model=LoginResponse)
async def login(
    credentials: LoginRequest,
    response: Response,
    db: AsyncSession = Depends(get_db),
):
    """Login endpoint - sets HttpOnly cookie"""
    user = await get_profile_by_email(db, credentials.email)

    if not user or not verify_password(credentials.password, user.password_hash):
        logger.info("Failed login for %s", credentials.email)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect email or password",
        )

    if user.status != ProfileStatus.ACTIVE:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Account is inactive",
        )

    return _login_response(user, response)


@router.post("/signup", response_model=LoginResponse, status_code=status.HTTP_201_CREATED)
async def signup(
    data: SignupRequest,
    response: Response,
    db: AsyncSession = Depends(get_db),
):
    """Member self sign-up; the configured super admin address gets the super admin role"""
    values = validate_values(data.model_dump(), SIGNUP_FORM_RULES)

    is_super_admin = bool(settings.SUPER_ADMIN_EMAIL) and (
        values["email"].strip().lower() == settings.SUPER_ADMIN_EMAIL.strip().lower()
    )
    user = await create_profile(
        db,
        email=values["email"],
        full_name=values["full_name"],
        phone=values["phone"],
        password=values["password"],
        role=UserRole.SUPER_ADMIN if is_super_admin else UserRole.MEMBER,
    )
    await db.commit()
    await db.refresh(user)

    return _login_response(user, response)


@router.post("/logout")
async def logout(response: Response):
    """Logout endpoint - clears cookie"""
    response.delete_cookie(key="access_token", httponly=True, samesite="lax")
    return {"message": "Logged out successfully"}


@router.get("/me", response_model=UserResponse)
async def get_me(current_user: Profile = Depends(get_current_user)):
    """Get current user info"""
    return UserResponse.model_validate(current_user)


@router.patch("/me", response_model=UserResponse)
async def update_me(
    data: ProfileUpdateRequest,
    current_user: Profile = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Update own name, phone and home address"""
    values = {
        "full_name": data.full_name if data.full_name is not None else current_user.full_name,
        "phone": data.phone if data.phone is not None else current_user.phone,
    }
    validate_values(values, PROFILE_UPDATE_FORM_RULES)

    current_user.full_name = values["full_name"].strip()
    current_user.phone = values["phone"].strip()
    if data.home_address is not None:
        current_user.home_address = data.home_address.model_dump()
    current_user.updated_at = datetime.utcnow()

    await db.commit()
    await db.refresh(current_user)
    return UserResponse.model_validate(current_user)

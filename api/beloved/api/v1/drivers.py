"""
Driver directory, profile and star rating endpoints
"""
import logging
import uuid
from datetime import datetime
from fastapi import APIRouter, Depends, HTTPException, status, Query
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from beloved.core.database import get_db
from beloved.core.dependencies import get_current_user, require_admin, require_roles
from beloved.core.forms import validate_values
from beloved.models.driver_profile import DriverProfile, DriverStatus
from beloved.models.profile import Profile, UserRole
from beloved.schemas.auth import UserResponse
from beloved.schemas.profile import (
    DriverCreateRequest, DriverProfileUpdate, DriverProfileResponse, DriverResponse,
    DriverListResponse, StarAwardRequest, StarResetResponse,
)
from beloved.services.driver_stars import award_stars, reset_weekly_stars
from beloved.services.form_rules import DRIVER_FORM_RULES, DRIVER_PROFILE_FORM_RULES
from beloved.services.profiles import create_profile

logger = logging.getLogger(__name__)

router = APIRouter()

DRIVER_PROFILE_FIELDS = (
    "license_number", "vehicle_make", "vehicle_model",
    "vehicle_year", "vehicle_color", "vehicle_plate",
)


def _driver_response(profile: Profile, driver_profile) -> DriverResponse:
    return DriverResponse(
        profile=UserResponse.model_validate(profile),
        driver_profile=DriverProfileResponse.model_validate(driver_profile) if driver_profile else None,
    )


async def _get_driver(db: AsyncSession, driver_id: uuid.UUID):
    result = await db.execute(
        select(Profile, DriverProfile)
        .join(DriverProfile, DriverProfile.id == Profile.id, isouter=True)
        .where(
            Profile.id == driver_id,
            Profile.user_role == UserRole.DRIVER,
        )
    )
    row = result.first()
    if not row:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Driver not found",
        )
    return row[0], row[1]


def _ensure_self_or_admin(current_user: Profile, driver_id: uuid.UUID) -> None:
    if not current_user.is_admin and current_user.id != driver_id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not allowed for this role",
        )


@router.post("", response_model=DriverResponse, status_code=status.HTTP_201_CREATED)
async def create_driver(
    data: DriverCreateRequest,
    db: AsyncSession = Depends(get_db),
    current_user: Profile = Depends(require_admin),
):
    """Create a driver profile and its licence/vehicle record"""
    values = validate_values(data.model_dump(), DRIVER_FORM_RULES)

    driver = await create_profile(
        db,
        email=values["email"],
        full_name=values["full_name"],
        phone=values["phone"],
        username=values["username"].strip(),
        password=values.get("password"),
        role=UserRole.DRIVER,
    )
    driver_profile = DriverProfile(
        id=driver.id,
        **{field: (values.get(field) or "").strip() for field in DRIVER_PROFILE_FIELDS},
    )
    db.add(driver_profile)
    await db.commit()
    await db.refresh(driver)
    await db.refresh(driver_profile)
    return _driver_response(driver, driver_profile)


@router.get("", response_model=DriverListResponse)
async def list_drivers(
    db: AsyncSession = Depends(get_db),
    current_user: Profile = Depends(require_admin),
):
    """List drivers with their profiles"""
    result = await db.execute(
        select(Profile, DriverProfile)
        .join(DriverProfile, DriverProfile.id == Profile.id, isouter=True)
        .where(Profile.user_role == UserRole.DRIVER)
        .order_by(Profile.full_name)
    )
    return DriverListResponse(items=[_driver_response(p, d) for p, d in result.all()])


@router.post("/reset-weekly-stars", response_model=StarResetResponse)
async def reset_stars(
    force: bool = Query(False),
    db: AsyncSession = Depends(get_db),
    current_user: Profile = Depends(require_admin),
):
    """Reset every driver's weekly stars (Sundays only unless forced)"""
    return StarResetResponse(**await reset_weekly_stars(db, force=force))


@router.get("/{driver_id}", response_model=DriverResponse)
async def get_driver(
    driver_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    current_user: Profile = Depends(get_current_user),
):
    """Get driver by ID (admins, or the driver themselves)"""
    _ensure_self_or_admin(current_user, driver_id)
    profile, driver_profile = await _get_driver(db, driver_id)
    return _driver_response(profile, driver_profile)


@router.patch("/{driver_id}/profile", response_model=DriverResponse)
async def update_driver_profile(
    driver_id: uuid.UUID,
    data: DriverProfileUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: Profile = Depends(get_current_user),
):
    """Update licence, vehicle and availability"""
    _ensure_self_or_admin(current_user, driver_id)
    values = validate_values(data.model_dump(), DRIVER_PROFILE_FORM_RULES)
    profile, driver_profile = await _get_driver(db, driver_id)

    if driver_profile is None:
        driver_profile = DriverProfile(id=profile.id)
        db.add(driver_profile)
    for field in DRIVER_PROFILE_FIELDS:
        setattr(driver_profile, field, values[field].strip())
    driver_profile.status = DriverStatus(values["status"] or DriverStatus.ACTIVE.value)
    driver_profile.updated_at = datetime.utcnow()

    await db.commit()
    await db.refresh(driver_profile)
    return _driver_response(profile, driver_profile)


@router.post("/{driver_id}/stars", response_model=DriverProfileResponse)
async def give_stars(
    driver_id: uuid.UUID,
    data: StarAwardRequest,
    db: AsyncSession = Depends(get_db),
    current_user: Profile = Depends(require_roles(UserRole.MEMBER, UserRole.ADMIN)),
):
    """Rate a driver; stars count towards this week and the all-time total"""
    profile, driver_profile = await _get_driver(db, driver_id)
    if driver_profile is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Driver profile not found",
        )

    award_stars(driver_profile, data.stars)
    await db.commit()
    await db.refresh(driver_profile)
    logger.info("Driver %s received %s stars", driver_id, data.stars)
    return DriverProfileResponse.model_validate(driver_profile)

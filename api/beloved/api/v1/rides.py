"""
Ride endpoints
"""
import logging
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, status, Query
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func
from beloved.core.database import get_db
from beloved.core.dependencies import get_current_user, require_admin
from beloved.core.forms import validate_values
from beloved.models.profile import Profile, UserRole
from beloved.models.ride import Ride, RideStatus, PaymentMethod
from beloved.models.ride_status_history import RideStatusHistory
from beloved.schemas.ride import (
    RideCreateRequest, RideResponse, RideListResponse, RideAssignRequest, RideStatusUpdate,
    RideStatusHistoryResponse,
)
from beloved.services import rides as ride_service
from beloved.services.form_rules import RIDE_FORM_RULES

logger = logging.getLogger(__name__)

router = APIRouter()


async def _get_visible_ride(db: AsyncSession, ride_id: int, user: Profile) -> Ride:
    result = await db.execute(ride_service.rides_visible_to(user).where(Ride.id == ride_id))
    ride = result.scalar_one_or_none()
    if not ride:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Ride not found",
        )
    return ride


def _conflict(exc: Exception) -> HTTPException:
    return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc))


@router.post("", response_model=RideResponse, status_code=status.HTTP_201_CREATED)
async def create_ride(
    data: RideCreateRequest,
    db: AsyncSession = Depends(get_db),
    current_user: Profile = Depends(get_current_user),
):
    """Book a ride. Members book for themselves, admins for any member."""
    if current_user.user_role == UserRole.MEMBER:
        member_id = current_user.id
    elif current_user.is_admin:
        if data.member_id is None:
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                detail="member_id is required",
            )
        member = await db.get(Profile, data.member_id)
        if member is None or member.user_role != UserRole.MEMBER:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Member not found",
            )
        member_id = member.id
    else:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not allowed for this role",
        )

    values = {
        "pickup_address": data.pickup_address.model_dump() if data.pickup_address else None,
        "dropoff_address": data.dropoff_address.model_dump() if data.dropoff_address else None,
        "scheduled_pickup_time": data.scheduled_pickup_time,
        "payment_method": data.payment_method,
    }
    validate_values(values, RIDE_FORM_RULES)

    ride = await ride_service.create_ride(
        db,
        member_id=member_id,
        pickup_address=values["pickup_address"],
        dropoff_address=values["dropoff_address"],
        scheduled_pickup_time=data.scheduled_pickup_time,
        payment_method=PaymentMethod(data.payment_method),
        appointment_time=data.appointment_time,
        provider_name=data.provider_name,
        provider_address=data.provider_address,
        notes=data.notes,
        recurring=data.recurring,
        recurring_pattern=data.recurring_pattern,
        booked_by=current_user.id,
    )
    await db.commit()
    await db.refresh(ride)
    return RideResponse.model_validate(ride)


@router.get("", response_model=RideListResponse)
async def list_rides(
    ride_status: Optional[RideStatus] = Query(None, alias="status"),
    page: int = Query(1, ge=1),
    page_size: int = Query(50, ge=1, le=100),
    db: AsyncSession = Depends(get_db),
    current_user: Profile = Depends(get_current_user),
):
    """List the rides the caller may see, with pagination"""
    query = ride_service.rides_visible_to(current_user)

    if ride_status:
        query = query.where(Ride.status == ride_status)

    # Count total
    count_query = select(func.count()).select_from(query.subquery())
    total_result = await db.execute(count_query)
    total = total_result.scalar()

    # Pagination
    query = query.order_by(Ride.scheduled_pickup_time.desc(), Ride.id.desc())
    query = query.offset((page - 1) * page_size).limit(page_size)

    result = await db.execute(query)
    rides = result.scalars().all()

    return RideListResponse(
        items=[RideResponse.model_validate(ride) for ride in rides],
        total=total,
        page=page,
        page_size=page_size,
        total_pages=(total + page_size - 1) // page_size,
    )


@router.get("/{ride_id}", response_model=RideResponse)
async def get_ride(
    ride_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: Profile = Depends(get_current_user),
):
    """Get ride by ID"""
    return RideResponse.model_validate(await _get_visible_ride(db, ride_id, current_user))


@router.post("/{ride_id}/assign", response_model=RideResponse)
async def assign_driver(
    ride_id: int,
    data: RideAssignRequest,
    db: AsyncSession = Depends(get_db),
    current_user: Profile = Depends(require_admin),
):
    """Assign a driver to a ride"""
    ride = await _get_visible_ride(db, ride_id, current_user)

    driver = await db.get(Profile, data.driver_id)
    if driver is None or driver.user_role != UserRole.DRIVER:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Driver not found",
        )

    try:
        ride_service.assign_driver(db, ride, driver, changed_by=current_user.id)
    except ride_service.RideTransitionError as exc:
        raise _conflict(exc)

    await db.commit()
    await db.refresh(ride)
    logger.info("Ride %s assigned to driver %s", ride.trip_id, driver.id)
    return RideResponse.model_validate(ride)


@router.post("/{ride_id}/status", response_model=RideResponse)
async def update_ride_status(
    ride_id: int,
    data: RideStatusUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: Profile = Depends(get_current_user),
):
    """Advance the trip one step (assigned driver or admin)"""
    if current_user.user_role == UserRole.MEMBER:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not allowed for this role",
        )
    ride = await _get_visible_ride(db, ride_id, current_user)

    try:
        await ride_service.advance_ride(db, ride, data.status, changed_by=current_user.id)
    except ride_service.RideTransitionError as exc:
        raise _conflict(exc)

    await db.commit()
    await db.refresh(ride)
    return RideResponse.model_validate(ride)


@router.post("/{ride_id}/cancel", response_model=RideResponse)
async def cancel_ride(
    ride_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: Profile = Depends(get_current_user),
):
    """Cancel a ride (the member who booked it, or an admin)"""
    if current_user.user_role == UserRole.DRIVER:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not allowed for this role",
        )
    ride = await _get_visible_ride(db, ride_id, current_user)

    try:
        ride_service.cancel_ride(db, ride, changed_by=current_user.id)
    except ride_service.RideTransitionError as exc:
        raise _conflict(exc)

    await db.commit()
    await db.refresh(ride)
    logger.info("Ride %s cancelled by %s", ride.trip_id, current_user.id)
    return RideResponse.model_validate(ride)


@router.get("/{ride_id}/history", response_model=list[RideStatusHistoryResponse])
async def get_ride_history(
    ride_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: Profile = Depends(get_current_user),
):
    """Status changes of a ride, oldest first"""
    ride = await _get_visible_ride(db, ride_id, current_user)
    result = await db.execute(
        select(RideStatusHistory)
        .where(RideStatusHistory.ride_id == ride.id)
        .order_by(RideStatusHistory.created_at, RideStatusHistory.id)
    )
    return [RideStatusHistoryResponse.model_validate(entry) for entry in result.scalars().all()]

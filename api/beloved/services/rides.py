"""
Ride booking and trip progress rules
"""
import logging
from datetime import datetime
from typing import Any, Optional
import uuid

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from beloved.models.driver_profile import DriverProfile
from beloved.models.profile import Profile, UserRole
from beloved.models.ride import Ride, RideStatus, PaymentMethod, Recurrence
from beloved.models.ride_status_history import RideStatusHistory

logger = logging.getLogger(__name__)

# Outbound leg then return leg; each step may only advance to the next one
TRIP_SEQUENCE = [
    RideStatus.PENDING,
    RideStatus.ASSIGNED,
    RideStatus.STARTED,
    RideStatus.PICKED_UP,
    RideStatus.COMPLETED,
    RideStatus.RETURN_PENDING,
    RideStatus.RETURN_STARTED,
    RideStatus.RETURN_PICKED_UP,
    RideStatus.RETURN_COMPLETED,
]

LEG_COMPLETIONS = {RideStatus.COMPLETED, RideStatus.RETURN_COMPLETED}
FINISHED = {RideStatus.COMPLETED, RideStatus.RETURN_COMPLETED, RideStatus.CANCELLED}


class RideTransitionError(Exception):
    """Requested status change is not the next step of the trip"""


def format_trip_id(ride_id: int) -> str:
    return f"T{ride_id:06d}"


def next_status(current: RideStatus) -> Optional[RideStatus]:
    if current not in TRIP_SEQUENCE:
        return None
    index = TRIP_SEQUENCE.index(current)
    if index + 1 >= len(TRIP_SEQUENCE):
        return None
    return TRIP_SEQUENCE[index + 1]


def is_modifiable(ride: Ride) -> bool:
    """Bookings can change until the driver sets off"""
    return ride.status in (RideStatus.PENDING, RideStatus.ASSIGNED)


def record_status_change(
    db: AsyncSession,
    ride: Ride,
    previous: Optional[RideStatus],
    changed_by: Optional[uuid.UUID] = None,
    notes: Optional[str] = None,
) -> RideStatusHistory:
    """Append a history row for the ride's current status"""
    entry = RideStatusHistory(
        ride_id=ride.id,
        previous_status=previous,
        new_status=ride.status,
        changed_by=changed_by,
        notes=notes,
        created_at=datetime.utcnow(),
    )
    db.add(entry)
    return entry


async def create_ride(
    db: AsyncSession,
    *,
    member_id: uuid.UUID,
    pickup_address: dict,
    dropoff_address: dict,
    scheduled_pickup_time: datetime,
    payment_method: PaymentMethod = PaymentMethod.INSURANCE,
    appointment_time: Optional[datetime] = None,
    provider_name: Optional[str] = None,
    provider_address: Optional[str] = None,
    notes: Optional[str] = None,
    recurring: Recurrence = Recurrence.NONE,
    recurring_pattern: Optional[dict] = None,
    booked_by: Optional[uuid.UUID] = None,
    booking_note: str = "Ride booked",
) -> Ride:
    """Insert a pending ride, stamp its trip id and open its history"""
    ride = Ride(
        member_id=member_id,
        pickup_address=pickup_address,
        dropoff_address=dropoff_address,
        scheduled_pickup_time=scheduled_pickup_time,
        appointment_time=appointment_time,
        provider_name=provider_name,
        provider_address=provider_address,
        notes=notes,
        payment_method=payment_method,
        status=RideStatus.PENDING,
        recurring=recurring,
        recurring_pattern=recurring_pattern,
    )
    db.add(ride)
    await db.flush()
    ride.trip_id = format_trip_id(ride.id)
    record_status_change(db, ride, None, changed_by=booked_by, notes=booking_note)
    logger.info("Booked ride %s for member %s", ride.trip_id, member_id)
    return ride


def normalize_trip_id(trip_id: Any) -> str:
    """Trip ids as spoken or typed: "t000012", "12" and 12 all mean T000012"""
    text = str(trip_id).strip().upper()
    if text.isdigit():
        return format_trip_id(int(text))
    return text


async def get_ride_by_trip_id(db: AsyncSession, trip_id: Any) -> Optional[Ride]:
    result = await db.execute(select(Ride).where(Ride.trip_id == normalize_trip_id(trip_id)))
    return result.scalar_one_or_none()


def rides_visible_to(user: Profile):
    """Base query of the rides a user may see"""
    query = select(Ride)
    if user.user_role == UserRole.MEMBER:
        query = query.where(Ride.member_id == user.id)
    elif user.user_role == UserRole.DRIVER:
        query = query.where(Ride.driver_id == user.id)
    return query


def assign_driver(
    db: AsyncSession,
    ride: Ride,
    driver: Profile,
    changed_by: Optional[uuid.UUID] = None,
) -> Ride:
    """Give a pending or assigned ride to a driver"""
    if ride.status not in (RideStatus.PENDING, RideStatus.ASSIGNED):
        raise RideTransitionError(f"Cannot assign a driver to a {ride.status.value} ride")

    previous = ride.status
    ride.driver_id = driver.id
    ride.status = RideStatus.ASSIGNED
    record_status_change(db, ride, previous, changed_by=changed_by, notes=f"Assigned to {driver.full_name}")
    return ride


async def advance_ride(
    db: AsyncSession,
    ride: Ride,
    new_status: RideStatus,
    changed_by: Optional[uuid.UUID] = None,
) -> Ride:
    """Move a ride one step along the trip, crediting the driver for finished legs"""
    expected = next_status(ride.status)
    if expected is None or new_status != expected:
        raise RideTransitionError(
            f"Cannot move ride from {ride.status.value} to {new_status.value}"
        )

    previous = ride.status
    ride.status = new_status
    record_status_change(db, ride, previous, changed_by=changed_by)
    if new_status in LEG_COMPLETIONS and ride.driver_id is not None:
        driver_profile = await db.get(DriverProfile, ride.driver_id)
        if driver_profile is not None:
            driver_profile.completed_rides = (driver_profile.completed_rides or 0) + 1
    return ride


def cancel_ride(
    db: AsyncSession,
    ride: Ride,
    changed_by: Optional[uuid.UUID] = None,
    notes: Optional[str] = None,
) -> Ride:
    if ride.status in FINISHED:
        raise RideTransitionError(f"Cannot cancel a {ride.status.value} ride")
    previous = ride.status
    ride.status = RideStatus.CANCELLED
    record_status_change(db, ride, previous, changed_by=changed_by, notes=notes)
    return ride

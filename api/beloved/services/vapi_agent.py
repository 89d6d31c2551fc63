"""
Voice assistant actions

The voice platform calls back into the webhook when the assistant needs
something done during a call: identify the caller, book, change or cancel
a ride, or read back a ride's status. Each action returns the JSON the
assistant speaks from: ``{"success", "message", "data"}``.
"""
import logging
from datetime import date, datetime, timedelta
from typing import Any, Dict, Optional

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from beloved.models.call_log import CallLog
from beloved.models.profile import Profile, UserRole
from beloved.models.ride import Ride, Recurrence
from beloved.schemas.ride import RideResponse
from beloved.services import rides as ride_service
from beloved.services.call_logs import get_or_create_call_log
from beloved.services.profiles import format_member_id

logger = logging.getLogger(__name__)

PICKUP_LEAD_TIME = timedelta(hours=1)

APPOINTMENT_FORMATS = (
    "%Y-%m-%d %H:%M",
    "%Y-%m-%d %H:%M:%S",
    "%Y-%m-%d %I:%M %p",
    "%Y-%m-%d %I:%M%p",
    "%Y-%m-%d %I %p",
)

WAIT_POLICY = (
    "Remember, our driver will wait for 10 minutes. After that, it may be marked as a no-show. "
    "For your return trip, please call this number when you're ready to be picked up. "
    "A driver will arrive within 1 hour."
)


def _result(success: bool, message: str, data: Optional[dict] = None) -> Dict[str, Any]:
    response = {"success": success, "message": message}
    if data is not None:
        response["data"] = data
    return response


def _text(parameters: Dict[str, Any], *keys: str) -> str:
    """First non-empty parameter among keys as a stripped string; the assistant may send numbers"""
    for key in keys:
        value = parameters.get(key)
        if value is not None and value != "":
            return str(value).strip()
    return ""


def parse_appointment(appointment_date: Any, appointment_time: Any) -> Optional[datetime]:
    """Combine the spoken date and time into a datetime, or None if unreadable"""
    if appointment_date is None or appointment_time is None:
        return None
    appointment_date = str(appointment_date).strip()
    appointment_time = str(appointment_time).strip()
    if not appointment_date or not appointment_time:
        return None
    try:
        return datetime.fromisoformat(f"{appointment_date}T{appointment_time}")
    except ValueError:
        pass
    for fmt in APPOINTMENT_FORMATS:
        try:
            return datetime.strptime(f"{appointment_date} {appointment_time.upper()}", fmt)
        except ValueError:
            continue
    return None


def format_clock(value: datetime) -> str:
    return value.strftime("%I:%M %p").lstrip("0")


def _format_day(value: Optional[str]) -> str:
    if not value:
        return "ongoing"
    try:
        return date.fromisoformat(value[:10]).strftime("%m/%d/%Y")
    except ValueError:
        return value


def format_recurring_pattern(pattern: Optional[dict]) -> str:
    """Spoken description of a recurring ride pattern"""
    if not pattern:
        return ""

    days = pattern.get("days") or []
    span = f"from {_format_day(pattern.get('start_date'))} to {_format_day(pattern.get('end_date'))}"
    frequency = pattern.get("frequency")

    if frequency == "daily":
        return f"Daily {span}"
    if frequency == "weekly":
        return f"Weekly on {', '.join(days)} {span}"
    if frequency == "multiple_times_week":
        return f"{len(days)} times per week on {', '.join(days)} {span}"
    return ""


def _recurrence_for(pattern: Optional[dict]) -> Recurrence:
    if not pattern:
        return Recurrence.NONE
    if pattern.get("frequency") == "daily":
        return Recurrence.DAILY
    return Recurrence.WEEKLY


def _ride_data(ride: Ride) -> dict:
    return RideResponse.model_validate(ride).model_dump(mode="json")


class VAPIAgent:
    """Actions the assistant can take on behalf of the caller of one conversation"""

    def __init__(self, db: AsyncSession, call_id: str):
        self.db = db
        self.call_id = call_id
        self._call_log: Optional[CallLog] = None

    async def call_log(self) -> CallLog:
        if self._call_log is None:
            self._call_log = await get_or_create_call_log(self.db, self.call_id)
        return self._call_log

    async def handle_function_call(self, name: str, parameters: Dict[str, Any]) -> Dict[str, Any]:
        handlers = {
            "scheduleRide": self.schedule_ride,
            "modifyRide": self.modify_ride,
            "cancelRide": self.cancel_ride,
        }
        handler = handlers.get(name)
        if handler is None:
            return {"success": False, "error": f"Unknown function: {name}"}
        return await handler(parameters)

    async def handle_assistant_request(self, request_type: str, parameters: Dict[str, Any]) -> Dict[str, Any]:
        handlers = {
            "member_verification": self.verify_member,
            "ride_status": self.ride_status,
        }
        handler = handlers.get(request_type)
        if handler is None:
            return {"success": False, "error": f"Unknown request type: {request_type}"}
        return await handler(parameters)

    # Member identification

    async def verify_member(self, parameters: Dict[str, Any]) -> Dict[str, Any]:
        member_number = _text(parameters, "member_id")
        full_name = _text(parameters, "full_name", "name")
        if not member_number and not full_name:
            return _result(False, "Could you please tell me your name or member ID?")

        query = select(Profile).where(Profile.user_role == UserRole.MEMBER)
        if member_number:
            try:
                padded = format_member_id(int(member_number))
            except ValueError:
                return _result(False, "That member ID doesn't look right. It should be seven digits.")
            query = query.where(Profile.member_id == padded)
        if full_name:
            query = query.where(func.lower(Profile.full_name).contains(full_name.lower()))

        result = await self.db.execute(query.limit(2))
        matches = result.scalars().all()

        if len(matches) > 1:
            return _result(
                False,
                "I found more than one member with that name. Could you please provide your member ID?",
            )
        if not matches:
            logger.info("No member matched caller on %s", self.call_id)
            return _result(False, "I couldn't find your information in our system. Are you a new member?")

        member = matches[0]
        call_log = await self.call_log()
        call_log.caller_id = member.id
        logger.info("Call %s verified as member %s", self.call_id, member.member_id)
        return _result(
            True,
            f"Hello {member.full_name}, how can I help you today?",
            {"member_id": member.member_id, "full_name": member.full_name},
        )

    async def _verified_member(self, parameters: Dict[str, Any]) -> Optional[Profile]:
        member_number = _text(parameters, "member_id")
        if member_number:
            try:
                padded = format_member_id(int(member_number))
            except ValueError:
                return None
            result = await self.db.execute(
                select(Profile).where(
                    Profile.member_id == padded,
                    Profile.user_role == UserRole.MEMBER,
                )
            )
            member = result.scalar_one_or_none()
            if member is not None:
                (await self.call_log()).caller_id = member.id
            return member

        call_log = await self.call_log()
        if call_log.caller_id is None:
            return None
        return await self.db.get(Profile, call_log.caller_id)

    # Rides

    async def schedule_ride(self, parameters: Dict[str, Any]) -> Dict[str, Any]:
        member = await self._verified_member(parameters)
        if member is None:
            return _result(False, "Member identification required")

        appointment_date = _text(parameters, "appointment_date")
        appointment_time = _text(parameters, "appointment_time")
        appointment = parse_appointment(appointment_date, appointment_time)
        if appointment is None:
            return _result(False, "I didn't catch the appointment date and time. Could you repeat them?")

        pickup_time = appointment - PICKUP_LEAD_TIME
        provider_address = _text(parameters, "provider_address")
        pickup_address = member.home_address or {"address": _text(parameters, "pickup_address")}
        pattern = parameters.get("recurring_pattern") if parameters.get("is_recurring") else None

        ride = await ride_service.create_ride(
            self.db,
            member_id=member.id,
            pickup_address=pickup_address,
            dropoff_address={"address": provider_address},
            scheduled_pickup_time=pickup_time,
            appointment_time=appointment,
            provider_name=_text(parameters, "provider_name") or None,
            provider_address=provider_address,
            notes=_text(parameters, "notes") or None,
            recurring=_recurrence_for(pattern),
            recurring_pattern=pattern,
            booking_note="Booked by phone",
        )
        await self.db.flush()

        message = (
            f"I've scheduled your ride. Your Trip ID is {ride.trip_id}. "
            f"For your {appointment_time} appointment on {appointment_date}, "
            f"please be ready at {format_clock(pickup_time)}. {WAIT_POLICY}"
        )
        if pattern:
            message += (
                "\n\nI've scheduled recurring rides according to your pattern: "
                f"{format_recurring_pattern(pattern)}."
            )

        return _result(True, message, {"ride": _ride_data(ride), "trip_id": ride.trip_id})

    async def _member_ride(self, parameters: Dict[str, Any]):
        """(member, ride, error_response) for a trip id belonging to the caller"""
        member = await self._verified_member(parameters)
        if member is None:
            return None, None, _result(False, "Member identification required")

        trip_id = _text(parameters, "trip_id")
        ride = await ride_service.get_ride_by_trip_id(self.db, trip_id) if trip_id else None
        if ride is None or ride.member_id != member.id:
            return member, None, _result(False, "I couldn't find a ride with that Trip ID.")
        return member, ride, None

    async def modify_ride(self, parameters: Dict[str, Any]) -> Dict[str, Any]:
        member, ride, error = await self._member_ride(parameters)
        if error:
            return error
        if not ride_service.is_modifiable(ride):
            return _result(False, f"Trip {ride.trip_id} can no longer be changed.")

        appointment_date = _text(parameters, "appointment_date")
        appointment_time = _text(parameters, "appointment_time")
        if appointment_date or appointment_time:
            current = ride.appointment_time or (ride.scheduled_pickup_time + PICKUP_LEAD_TIME)
            appointment = parse_appointment(
                appointment_date or current.strftime("%Y-%m-%d"),
                appointment_time or current.strftime("%H:%M"),
            )
            if appointment is None:
                return _result(False, "I didn't catch the new appointment date and time. Could you repeat them?")
            ride.appointment_time = appointment
            ride.scheduled_pickup_time = appointment - PICKUP_LEAD_TIME

        provider_name = _text(parameters, "provider_name")
        provider_address = _text(parameters, "provider_address")
        notes = _text(parameters, "notes")
        if provider_name:
            ride.provider_name = provider_name
        if provider_address:
            ride.provider_address = provider_address
            ride.dropoff_address = {"address": provider_address}
        if notes:
            ride.notes = notes

        await self.db.flush()
        logger.info("Ride %s changed by voice on %s", ride.trip_id, self.call_id)
        return _result(
            True,
            f"I've updated trip {ride.trip_id}. Please be ready at "
            f"{format_clock(ride.scheduled_pickup_time)} on {ride.scheduled_pickup_time:%m/%d/%Y}.",
            {"ride": _ride_data(ride), "trip_id": ride.trip_id},
        )

    async def cancel_ride(self, parameters: Dict[str, Any]) -> Dict[str, Any]:
        member, ride, error = await self._member_ride(parameters)
        if error:
            return error
        try:
            ride_service.cancel_ride(self.db, ride, notes="Cancelled by phone")
        except ride_service.RideTransitionError:
            return _result(False, f"Trip {ride.trip_id} can no longer be cancelled.")

        await self.db.flush()
        logger.info("Ride %s cancelled by voice on %s", ride.trip_id, self.call_id)
        return _result(True, f"Trip {ride.trip_id} has been cancelled.", {"trip_id": ride.trip_id})

    async def ride_status(self, parameters: Dict[str, Any]) -> Dict[str, Any]:
        trip_id = _text(parameters, "trip_id")
        ride = await ride_service.get_ride_by_trip_id(self.db, trip_id) if trip_id else None
        if ride is None:
            return _result(False, "I couldn't find a ride with that Trip ID.")

        status_text = ride.status.value.replace("_", " ")
        return _result(
            True,
            f"Trip {ride.trip_id} is {status_text}. Pickup is scheduled for "
            f"{format_clock(ride.scheduled_pickup_time)} on {ride.scheduled_pickup_time:%m/%d/%Y}.",
            {"trip_id": ride.trip_id, "status": ride.status.value},
        )

"""Tests for the VAPI voice assistant webhook."""

from fastapi import status
from sqlalchemy import select, update

from beloved.models import CallLog, CallTranscript, Ride, RideStatusHistory, WebhookEvent
from beloved.models.profile import UserRole
from beloved.models.ride import Recurrence, RideStatus
from beloved.models.webhook_event import WebhookStatus
from beloved.services.vapi_agent import format_recurring_pattern, parse_appointment

from conftest import VAPI_SECRET

CALL_ID = "conv-123"
HEADERS = {"x-vapi-secret": VAPI_SECRET}


def event(event_type: str, **fields) -> dict:
    payload = {"type": event_type, "conversation": {"id": CALL_ID, "status": "in-progress"}}
    payload.update(fields)
    return payload


def function_call(name: str, **parameters) -> dict:
    return event("function.call", function={"name": name, "parameters": parameters})


def assistant_request(request_type: str, **parameters) -> dict:
    return event("assistant.request", request={"type": request_type, "parameters": parameters})


async def post(client, payload, headers=HEADERS):
    return await client.post("/api/vapi/webhook", json=payload, headers=headers)


async def all_rows(session_factory, model):
    async with session_factory() as session:
        result = await session.execute(select(model))
        return result.scalars().all()


async def book_by_voice(client):
    response = await post(client, function_call(
        "scheduleRide", member_id="1", appointment_date="2025-12-01",
        appointment_time="10:00", provider_address="Eskenazi Health",
    ))
    assert response.json()["success"] is True
    return response.json()["data"]["trip_id"]


async def force_status(session_factory, ride_status):
    async with session_factory() as session:
        await session.execute(update(Ride).values(status=ride_status))
        await session.commit()


class TestHelpers:
    def test_parse_appointment_formats(self):
        assert parse_appointment("2025-12-01", "10:00").hour == 10
        assert parse_appointment("2025-12-01", "2:30 pm").hour == 14
        assert parse_appointment("2025-12-01", "9 AM").hour == 9
        assert parse_appointment("tomorrow", "noon") is None
        assert parse_appointment(None, "10:00") is None

    def test_parse_appointment_accepts_non_strings(self):
        assert parse_appointment("2025-12-01", 7) is None
        assert parse_appointment("2025-12-01", "") is None

    def test_recurring_pattern_text(self):
        assert format_recurring_pattern({"frequency": "daily", "start_date": "2025-12-01"}) == (
            "Daily from 12/01/2025 to ongoing"
        )
        assert format_recurring_pattern({
            "frequency": "multiple_times_week",
            "days": ["Monday", "Wednesday"],
            "start_date": "2025-12-01",
            "end_date": "2026-01-31",
        }) == "2 times per week on Monday, Wednesday from 12/01/2025 to 01/31/2026"
        assert format_recurring_pattern(None) == ""


class TestAuthentication:
    async def test_missing_secret_rejected(self, client):
        response = await post(client, event("status.update"), headers={})
        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.json() == {"error": "Unauthorized"}

    async def test_wrong_secret_rejected(self, client, session_factory):
        response = await post(client, event("status.update"), headers={"x-vapi-secret": "nope"})
        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert await all_rows(session_factory, WebhookEvent) == []

    async def test_unset_secret_rejects_everything(self, client, monkeypatch):
        from beloved.core.config import settings

        monkeypatch.setattr(settings, "VAPI_WEBHOOK_SECRET", "")
        response = await post(client, event("status.update"), headers={"x-vapi-secret": ""})
        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    async def test_malformed_payload(self, client):
        response = await client.post(
            "/api/vapi/webhook", content=b"{not json", headers={**HEADERS, "content-type": "application/json"}
        )
        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json() == {"error": "Invalid payload"}

    async def test_payload_without_conversation(self, client):
        response = await post(client, {"type": "status.update"})
        assert response.status_code == status.HTTP_400_BAD_REQUEST


class TestCallLifecycle:
    async def test_status_update_opens_call_log(self, client, session_factory):
        response = await post(client, event("status.update"))

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {"success": True}
        logs = await all_rows(session_factory, CallLog)
        assert [(c.call_id, c.status) for c in logs] == [(CALL_ID, "in-progress")]

        events = await all_rows(session_factory, WebhookEvent)
        assert [(e.source, e.event_type, e.status) for e in events] == [
            ("vapi", "status.update", WebhookStatus.PROCESSED)
        ]

    async def test_repeated_transcripts_are_all_stored(self, client, session_factory):
        payload = event("transcript.update", transcript={"text": "I need a ride", "final": True})
        await post(client, payload)
        await post(client, payload)

        transcripts = await all_rows(session_factory, CallTranscript)
        assert [t.transcript for t in transcripts] == ["I need a ride", "I need a ride"]
        assert all(t.is_final for t in transcripts)

    async def test_call_end_records_duration_and_recording(self, client, session_factory):
        await post(client, event("status.update"))
        await post(client, event(
            "call.end",
            conversation={"id": CALL_ID, "duration": 184.5, "recording": {"url": "https://rec.example/1.mp3"}},
        ))

        (call_log,) = await all_rows(session_factory, CallLog)
        assert call_log.status == "completed"
        assert call_log.duration == 184.5
        assert call_log.recording_url == "https://rec.example/1.mp3"
        assert call_log.end_timestamp is not None

    async def test_hang_notification(self, client, session_factory):
        await post(client, event("hang.notification"))
        (call_log,) = await all_rows(session_factory, CallLog)
        assert call_log.status == "hung"

    async def test_unknown_event_is_acknowledged(self, client, session_factory):
        response = await post(client, event("speech.update"))
        assert response.json() == {"success": True}
        (audit,) = await all_rows(session_factory, WebhookEvent)
        assert audit.status == WebhookStatus.PROCESSED


class TestAssistant:
    async def test_verify_member_by_number(self, client, member, session_factory):
        response = await post(client, assistant_request("member_verification", member_id="1"))

        data = response.json()
        assert data["success"] is True
        assert data["message"] == "Hello Ruth Johnson, how can I help you today?"
        assert data["data"]["member_id"] == "0000001"

        (call_log,) = await all_rows(session_factory, CallLog)
        assert call_log.caller_id == member.id

    async def test_verify_member_ambiguous_name(self, client, make_user):
        await make_user(UserRole.MEMBER, full_name="Ruth Johnson")
        await make_user(UserRole.MEMBER, full_name="Ruth Johnson")

        response = await post(client, assistant_request("member_verification", full_name="ruth johnson"))
        assert response.json()["success"] is False
        assert "member ID" in response.json()["message"]

    async def test_verify_member_not_found(self, client):
        response = await post(client, assistant_request("member_verification", full_name="Nobody"))
        assert response.json()["success"] is False

    async def test_verify_member_with_numeric_parameters(self, client, member):
        response = await post(client, assistant_request("member_verification", member_id=1))
        assert response.status_code == status.HTTP_200_OK
        assert response.json()["data"]["member_id"] == "0000001"

        response = await post(client, assistant_request("member_verification", full_name=12))
        assert response.status_code == status.HTTP_200_OK
        assert response.json()["success"] is False
        assert "couldn't find your information" in response.json()["message"]

    async def test_ride_status_with_numeric_trip_id(self, client, member):
        response = await post(client, assistant_request("ride_status", trip_id=1))
        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {"success": False, "message": "I couldn't find a ride with that Trip ID."}

        await book_by_voice(client)
        response = await post(client, assistant_request("ride_status", trip_id=1))
        assert response.json()["data"] == {"trip_id": "T000001", "status": "pending"}

    async def test_unknown_request_type(self, client):
        response = await post(client, assistant_request("weather"))
        assert response.json() == {"success": False, "error": "Unknown request type: weather"}

    async def test_unknown_function(self, client):
        response = await post(client, function_call("orderPizza"))
        assert response.json() == {"success": False, "error": "Unknown function: orderPizza"}


class TestVoiceBooking:
    async def test_schedule_requires_verified_member(self, client, session_factory):
        response = await post(client, function_call(
            "scheduleRide", appointment_date="2025-12-01", appointment_time="10:00 AM",
        ))

        assert response.json() == {"success": False, "message": "Member identification required"}
        assert await all_rows(session_factory, Ride) == []

    async def test_schedule_ride_after_verification(self, client, member, session_factory):
        await post(client, assistant_request("member_verification", member_id="0000001"))
        response = await post(client, function_call(
            "scheduleRide",
            appointment_date="2025-12-01",
            appointment_time="10:00 AM",
            provider_name="Eskenazi Health",
            provider_address="720 Eskenazi Ave, Indianapolis, IN 46202",
        ))

        data = response.json()
        assert data["success"] is True
        assert data["data"]["trip_id"] == "T000001"
        assert "Your Trip ID is T000001" in data["message"]
        assert "please be ready at 9:00 AM" in data["message"]
        assert "driver will wait for 10 minutes" in data["message"]

        (ride,) = await all_rows(session_factory, Ride)
        assert ride.member_id == member.id
        assert ride.status == RideStatus.PENDING
        assert ride.pickup_address["address"] == "12 Elm St"
        assert ride.dropoff_address["address"].startswith("720 Eskenazi Ave")
        assert ride.scheduled_pickup_time.hour == 9

    async def test_schedule_recurring_ride(self, client, member, session_factory):
        response = await post(client, function_call(
            "scheduleRide",
            member_id="1",
            appointment_date="2025-12-01",
            appointment_time="14:00",
            provider_address="Community East Dialysis",
            is_recurring=True,
            recurring_pattern={"frequency": "weekly", "days": ["Monday"], "start_date": "2025-12-01"},
        ))

        message = response.json()["message"]
        assert "Weekly on Monday from 12/01/2025 to ongoing" in message
        (ride,) = await all_rows(session_factory, Ride)
        assert ride.recurring == Recurrence.WEEKLY

    async def test_modify_and_cancel_by_voice(self, client, member, session_factory):
        await post(client, function_call(
            "scheduleRide", member_id="1", appointment_date="2025-12-01",
            appointment_time="10:00", provider_address="Eskenazi Health",
        ))

        response = await post(client, function_call(
            "modifyRide", member_id="1", trip_id="T000001", appointment_time="13:30",
        ))
        assert response.json()["success"] is True
        (ride,) = await all_rows(session_factory, Ride)
        assert (ride.scheduled_pickup_time.hour, ride.scheduled_pickup_time.minute) == (12, 30)

        response = await post(client, assistant_request("ride_status", trip_id="T000001"))
        assert response.json()["data"] == {"trip_id": "T000001", "status": "pending"}

        response = await post(client, function_call("cancelRide", member_id="1", trip_id="T000001"))
        assert response.json()["success"] is True
        (ride,) = await all_rows(session_factory, Ride)
        assert ride.status == RideStatus.CANCELLED

    async def test_cannot_cancel_someone_elses_ride(self, client, member, make_user):
        await make_user(UserRole.MEMBER, full_name="Walter Green")
        await post(client, function_call(
            "scheduleRide", member_id="1", appointment_date="2025-12-01",
            appointment_time="10:00", provider_address="Eskenazi Health",
        ))

        response = await post(client, function_call("cancelRide", member_id="2", trip_id="T000001"))
        assert response.json()["success"] is False

    async def test_schedule_with_numeric_parameters(self, client, member, session_factory):
        response = await post(client, function_call(
            "scheduleRide", member_id=1, appointment_date="2025-12-01", appointment_time=7, provider_address=42,
        ))

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {
            "success": False,
            "message": "I didn't catch the appointment date and time. Could you repeat them?",
        }
        assert await all_rows(session_factory, Ride) == []

    async def test_modify_and_cancel_with_numeric_trip_id(self, client, member, session_factory):
        await book_by_voice(client)

        response = await post(client, function_call(
            "modifyRide", member_id=1, trip_id=1, notes=2, appointment_time="13:30",
        ))
        assert response.status_code == status.HTTP_200_OK
        assert response.json()["success"] is True
        (ride,) = await all_rows(session_factory, Ride)
        assert ride.notes == "2"

        response = await post(client, function_call("cancelRide", member_id=1, trip_id=1))
        assert response.json()["success"] is True

    async def test_cannot_modify_started_ride(self, client, member, session_factory):
        trip_id = await book_by_voice(client)
        await force_status(session_factory, RideStatus.STARTED)

        response = await post(client, function_call(
            "modifyRide", member_id="1", trip_id=trip_id, appointment_time="13:30",
        ))

        assert response.json() == {"success": False, "message": "Trip T000001 can no longer be changed."}
        (ride,) = await all_rows(session_factory, Ride)
        assert ride.scheduled_pickup_time.hour == 9

    async def test_cannot_modify_cancelled_ride(self, client, member, session_factory):
        trip_id = await book_by_voice(client)
        await force_status(session_factory, RideStatus.CANCELLED)

        response = await post(client, function_call(
            "modifyRide", member_id="1", trip_id=trip_id, provider_name="IU Health",
        ))

        assert response.json() == {"success": False, "message": "Trip T000001 can no longer be changed."}
        (ride,) = await all_rows(session_factory, Ride)
        assert ride.provider_name is None

    async def test_cannot_cancel_finished_ride(self, client, member, session_factory):
        trip_id = await book_by_voice(client)
        await force_status(session_factory, RideStatus.COMPLETED)

        response = await post(client, function_call("cancelRide", member_id="1", trip_id=trip_id))

        assert response.json() == {"success": False, "message": "Trip T000001 can no longer be cancelled."}
        (ride,) = await all_rows(session_factory, Ride)
        assert ride.status == RideStatus.COMPLETED

    async def test_voice_changes_are_in_ride_history(self, client, member, session_factory):
        trip_id = await book_by_voice(client)
        await post(client, function_call("cancelRide", member_id="1", trip_id=trip_id))

        history = sorted(await all_rows(session_factory, RideStatusHistory), key=lambda h: h.id)
        assert [(h.previous_status, h.new_status, h.notes) for h in history] == [
            (None, RideStatus.PENDING, "Booked by phone"),
            (RideStatus.PENDING, RideStatus.CANCELLED, "Cancelled by phone"),
        ]
        assert all(h.changed_by is None for h in history)


async def test_handler_failure_is_recorded(client, session_factory, monkeypatch):
    from beloved.services import call_logs

    async def broken(*args, **kwargs):
        raise RuntimeError("database unavailable")

    monkeypatch.setattr(call_logs, "update_call_status", broken)

    response = await post(client, event("status.update"))

    assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
    assert response.json() == {"error": "Internal server error"}
    (audit,) = await all_rows(session_factory, WebhookEvent)
    assert audit.status == WebhookStatus.ERROR
    assert audit.error_message == "database unavailable"

"""
Database models
"""
from beloved.models.profile import Profile
from beloved.models.driver_profile import DriverProfile
from beloved.models.member_note import MemberNote
from beloved.models.ride import Ride
from beloved.models.ride_status_history import RideStatusHistory
from beloved.models.call_log import CallLog
from beloved.models.call_transcript import CallTranscript
from beloved.models.webhook_event import WebhookEvent

__all__ = [
    "Profile",
    "DriverProfile",
    "MemberNote",
    "Ride",
    "RideStatusHistory",
    "CallLog",
    "CallTranscript",
    "WebhookEvent",
]

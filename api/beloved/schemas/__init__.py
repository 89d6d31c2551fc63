"""
Pydantic schemas for API requests/responses
"""
from beloved.schemas.common import Address
from beloved.schemas.auth import LoginRequest, LoginResponse, SignupRequest, UserResponse, ProfileUpdateRequest
from beloved.schemas.profile import (
    MemberCreateRequest, MemberListResponse, MemberNoteRequest, MemberNoteResponse,
    DriverCreateRequest, DriverProfileUpdate,
    DriverProfileResponse, DriverResponse, DriverListResponse, StarAwardRequest, StarResetResponse,
)
from beloved.schemas.ride import (
    RideCreateRequest, RideResponse, RideListResponse, RideAssignRequest, RideStatusUpdate, RideStatusHistoryResponse,
)
from beloved.schemas.call import CallLogResponse, CallDetailResponse, CallListResponse, TranscriptResponse
from beloved.schemas.vapi import VAPIEvent
from beloved.schemas.pages import PageAccessResponse, DashboardResponse

__all__ = [
    "Address",
    "LoginRequest",
    "LoginResponse",
    "SignupRequest",
    "UserResponse",
    "ProfileUpdateRequest",
    "MemberCreateRequest",
    "MemberListResponse",
    "MemberNoteRequest",
    "MemberNoteResponse",
    "DriverCreateRequest",
    "DriverProfileUpdate",
    "DriverProfileResponse",
    "DriverResponse",
    "DriverListResponse",
    "StarAwardRequest",
    "StarResetResponse",
    "RideCreateRequest",
    "RideResponse",
    "RideListResponse",
    "RideAssignRequest",
    "RideStatusUpdate",
    "RideStatusHistoryResponse",
    "CallLogResponse",
    "CallDetailResponse",
    "CallListResponse",
    "TranscriptResponse",
    "VAPIEvent",
    "PageAccessResponse",
    "DashboardResponse",
]

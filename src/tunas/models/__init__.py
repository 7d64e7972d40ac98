"""Pydantic models for the Tunas API contract."""

from tunas.models.club import Club
from tunas.models.meet import Course, Meet, MeetResult
from tunas.models.relay import (
    Relay,
    RelayEventType,
    RelayGenerationRequest,
    RelayGenerationResponse,
    RelaySwimmer,
)
from tunas.models.responses import (
    ApiErrorBody,
    ClubSwimmersResponse,
    DatabaseStatsResponse,
    SwimmerBestTimesResponse,
    SwimmerResponse,
    SwimmerTimeHistoryResponse,
)
from tunas.models.swimmer import AgeRange, BirthdayRange, Sex, Swimmer

__all__ = [
    # Club
    "Club",
    # Meet
    "Course",
    "Meet",
    "MeetResult",
    # Relay
    "Relay",
    "RelayEventType",
    "RelayGenerationRequest",
    "RelayGenerationResponse",
    "RelaySwimmer",
    # Responses
    "ApiErrorBody",
    "ClubSwimmersResponse",
    "DatabaseStatsResponse",
    "SwimmerBestTimesResponse",
    "SwimmerResponse",
    "SwimmerTimeHistoryResponse",
    # Swimmer
    "AgeRange",
    "BirthdayRange",
    "Sex",
    "Swimmer",
]

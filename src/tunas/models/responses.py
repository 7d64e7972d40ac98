"""Response envelopes of the Tunas API."""

from pydantic import BaseModel

from tunas.models.club import Club
from tunas.models.meet import MeetResult
from tunas.models.swimmer import Swimmer


class SwimmerResponse(BaseModel):
    swimmer: Swimmer


class SwimmerBestTimesResponse(BaseModel):
    swimmer: Swimmer
    best_times: list[MeetResult]


class SwimmerTimeHistoryResponse(BaseModel):
    swimmer: Swimmer
    meet_results: list[MeetResult]


class ClubSwimmersResponse(BaseModel):
    club: Club
    swimmers: list[Swimmer]


class DatabaseStatsResponse(BaseModel):
    """Row counts reported by the backend."""

    num_clubs: int
    num_swimmers: int
    num_meets: int
    num_meet_results: int


class ApiErrorBody(BaseModel):
    """Error payload returned by the backend on 4xx/5xx."""

    detail: str
    error: str | None = None

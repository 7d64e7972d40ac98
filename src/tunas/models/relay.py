"""Relay generation request and response models.

Relay teams are composed by the backend optimizer. The dashboard only builds
the request and displays the result.
"""

from datetime import date
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, Field, field_validator, model_validator

from tunas.models.meet import Course
from tunas.models.swimmer import AgeRange, Sex, Swimmer


class RelayEventType(StrEnum):
    """Relay events the optimizer supports."""

    FREE_200 = "4x50_FREE"
    MEDLEY_200 = "4x50_MEDLEY"
    FREE_400 = "4x100_FREE"
    MEDLEY_400 = "4x100_MEDLEY"
    FREE_800 = "4x200_FREE"

    @property
    def label(self) -> str:
        """Human readable name, e.g. "4x100 Medley Relay"."""
        legs, stroke = self.value.split("_")
        return f"{legs} {stroke.title()} Relay"


class RelayGenerationRequest(BaseModel):
    """Parameters for the relay optimizer."""

    club_code: str
    age_range: tuple[int, int] = (10, 18)
    sex: Sex = Sex.FEMALE
    course: Course = Course.SCY
    relay_date: date = Field(default_factory=date.today)
    num_relays: int = Field(default=1, ge=1)
    excluded_swimmer_ids: list[str] = []
    event_type: RelayEventType = RelayEventType.FREE_400

    @field_validator("club_code")
    @classmethod
    def normalize_club_code(cls, v: str) -> str:
        v = v.strip().upper()
        if not v:
            raise ValueError("Club code is required")
        return v

    @model_validator(mode="after")
    def validate_age_range(self) -> "RelayGenerationRequest":
        low, high = self.age_range
        if low < 0 or high < 0:
            raise ValueError("Ages must not be negative")
        if low > high:
            raise ValueError(f"Min age {low} is greater than max age {high}")
        return self


class RelaySwimmer(Swimmer):
    """A swimmer placed on a relay leg."""

    best_time: str | None = None
    age_at_relay: int | AgeRange | None = None


class Relay(BaseModel):
    """One optimized relay team."""

    event: str
    distance: int
    stroke: str
    course: str
    total_time: str | None = None
    time_standards: list[str] = []
    swimmers: list[RelaySwimmer] = []
    leg_events: list[str] = []

    def legs(self) -> list[tuple[str, RelaySwimmer]]:
        """Pair each leg event with the swimmer assigned to it."""
        return list(zip(self.leg_events, self.swimmers, strict=False))


class RelayGenerationResponse(BaseModel):
    """Optimizer output."""

    relays: list[Relay]
    settings: dict[str, Any] = {}

"""Meet and meet result models."""

from enum import StrEnum

from pydantic import BaseModel


class Course(StrEnum):
    """Pool course types."""

    SCY = "SCY"  # Short Course Yards (25 yards)
    SCM = "SCM"  # Short Course Meters (25 meters)
    LCM = "LCM"  # Long Course Meters (50 meters)


class Meet(BaseModel):
    """A swim meet/competition."""

    name: str
    city: str
    state: str | None = None
    start_date: str  # ISO date string
    end_date: str
    course: Course | None = None
    meet_type: str | None = None

    def __str__(self) -> str:
        return self.name


class MeetResult(BaseModel):
    """A single swim at a meet.

    ``time`` and ``date`` are kept exactly as the API sends them. Charts key
    their points on the raw ``date`` string, so two spellings of the same day
    are two different points.
    """

    event: str  # e.g. "100 FR SCY"
    event_distance: int
    event_stroke: str
    event_course: str
    time: str  # "M:SS.ff" or "SS.ff"
    session: str
    date: str  # ISO date string
    meet: Meet
    heat: int | None = None
    lane: int | None = None
    rank: int | None = None
    points: float | None = None
    age_class: str | None = None
    team_code: str | None = None
    lsc: str | None = None
    time_standards: list[str] | None = None

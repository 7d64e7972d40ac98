"""Swimmer model."""

from datetime import date
from enum import StrEnum

from pydantic import BaseModel

from tunas.models.club import Club


class Sex(StrEnum):
    """Swimmer sex for competition purposes."""

    FEMALE = "F"
    MALE = "M"
    MIXED = "X"


class AgeRange(BaseModel):
    """Possible age span when the exact birthday is unknown."""

    min: int
    max: int

    def __str__(self) -> str:
        if self.min == self.max:
            return str(self.min)
        return f"{self.min} - {self.max}"


class BirthdayRange(BaseModel):
    """Possible birthday span when the exact birthday is unknown."""

    min: date
    max: date


class Swimmer(BaseModel):
    """A registered swimmer."""

    id: str | None = None  # 14-character USA Swimming ID
    id_short: str | None = None
    first_name: str
    last_name: str
    full_name: str
    middle_initial: str | None = None
    preferred_first_name: str | None = None
    sex: Sex
    birthday: date | None = None
    birthday_range: BirthdayRange
    age_range: AgeRange
    club: Club | None = None
    citizenship: str | None = None

    def __str__(self) -> str:
        return self.full_name

    @property
    def display_id(self) -> str | None:
        """Short ID when known, otherwise the full ID."""
        return self.id_short or self.id

    def has_id(self, candidate: str) -> bool:
        """Check whether ``candidate`` is this swimmer's full or short ID."""
        return candidate in (self.id, self.id_short)

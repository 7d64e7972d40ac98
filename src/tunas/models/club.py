"""Club model."""

from pydantic import BaseModel


class Club(BaseModel):
    """A swim club as returned by the Tunas API."""

    team_code: str | None = None
    lsc: str | None = None  # Local Swimming Committee, e.g. "PC"
    full_name: str
    abbreviated_name: str | None = None
    city: str | None = None
    state: str | None = None
    country: str | None = None
    club_code: str | None = None

    def __str__(self) -> str:
        return self.full_name

    @property
    def location(self) -> str:
        """City and state for display, or "N/A" when either is missing."""
        if self.city and self.state:
            return f"{self.city}, {self.state}"
        return "N/A"

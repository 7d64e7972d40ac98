"""Relay request form state and excluded-swimmer validation.

Swimmers can be left out of relay generation by ID. IDs are checked against
the roster of the club the relays are generated for, and exclusions that stop
matching when the club changes are dropped.
"""

from collections.abc import Sequence
from datetime import date

from tunas import get_logger
from tunas.models import (
    ClubSwimmersResponse,
    Course,
    RelayEventType,
    RelayGenerationRequest,
    Sex,
    Swimmer,
)

logger = get_logger(__name__)


def _in_roster(swimmer_id: str, roster: Sequence[Swimmer]) -> bool:
    return any(swimmer.has_id(swimmer_id) for swimmer in roster)


def validate_excluded_id(
    candidate: str,
    excluded: Sequence[str],
    club_code: str,
    roster: ClubSwimmersResponse | None,
) -> str | None:
    """Check a swimmer ID before adding it to the exclusion list.

    Returns:
        A user-facing error message, or None when the ID can be added
    """
    swimmer_id = candidate.strip()

    if not swimmer_id:
        return "Please enter a swimmer ID"
    if swimmer_id in excluded:
        return "This swimmer ID is already excluded"
    if not club_code.strip():
        return "Please select a club code first"
    if roster is None:
        return "Please wait for club data to load"
    if not _in_roster(swimmer_id, roster.swimmers):
        return f'Swimmer ID "{swimmer_id}" not found in club "{club_code}"'
    return None


def prune_excluded_ids(excluded: Sequence[str], roster: ClubSwimmersResponse) -> list[str]:
    """Drop excluded IDs that are not in ``roster``."""
    return [swimmer_id for swimmer_id in excluded if _in_roster(swimmer_id, roster.swimmers)]


class RelayForm:
    """Editable relay generation parameters.

    Fields may be inconsistent while being edited (e.g. min age above max
    age); ``build_request`` validates them.
    """

    def __init__(
        self,
        club_code: str = "",
        event_type: RelayEventType = RelayEventType.FREE_400,
        sex: Sex = Sex.FEMALE,
        course: Course = Course.SCY,
        relay_date: date | None = None,
        num_relays: int = 1,
    ):
        self.club_code = club_code.strip().upper()
        self.event_type = event_type
        self.sex = sex
        self.course = course
        self.relay_date = relay_date or date.today()
        self.num_relays = num_relays
        self.age_range: list[int] = [10, 18]
        self.excluded_swimmer_ids: list[str] = []
        self.roster: ClubSwimmersResponse | None = None

    def set_club(self, club_code: str, roster: ClubSwimmersResponse | None) -> None:
        """Switch clubs, pruning exclusions the new roster does not contain.

        ``roster`` is None when the club could not be loaded; exclusions are
        then kept and checked again on submit.
        """
        self.club_code = club_code.strip().upper()
        self.roster = roster
        if roster is None or not self.excluded_swimmer_ids:
            return
        valid = prune_excluded_ids(self.excluded_swimmer_ids, roster)
        if len(valid) != len(self.excluded_swimmer_ids):
            logger.info(
                "excluded_ids_pruned",
                club_code=self.club_code,
                removed=len(self.excluded_swimmer_ids) - len(valid),
            )
            self.excluded_swimmer_ids = valid

    def set_age_bound(self, index: int, value: int) -> None:
        """Set the min (index 0) or max (index 1) age."""
        if index not in (0, 1):
            raise ValueError(f"Age bound index must be 0 or 1, got {index}")
        self.age_range[index] = value

    def add_excluded(self, candidate: str) -> str | None:
        """Add a swimmer ID to the exclusions.

        Returns:
            An error message when the ID was rejected, otherwise None
        """
        error = validate_excluded_id(
            candidate, self.excluded_swimmer_ids, self.club_code, self.roster
        )
        if error is None:
            self.excluded_swimmer_ids.append(candidate.strip())
        return error

    def remove_excluded(self, swimmer_id: str) -> None:
        self.excluded_swimmer_ids = [i for i in self.excluded_swimmer_ids if i != swimmer_id]

    def build_request(self) -> RelayGenerationRequest:
        """Validated request for the relay optimizer.

        Raises:
            pydantic.ValidationError: If the club code or age range is invalid
        """
        return RelayGenerationRequest(
            club_code=self.club_code,
            age_range=(self.age_range[0], self.age_range[1]),
            sex=self.sex,
            course=self.course,
            relay_date=self.relay_date,
            num_relays=self.num_relays,
            excluded_swimmer_ids=list(self.excluded_swimmer_ids),
            event_type=self.event_type,
        )

"""Table definitions for the club roster and a swimmer's meet results."""

from tunas.models import MeetResult, Swimmer
from tunas.services.pipeline import SortField, SortKind, TableSpec
from tunas.services.time_codec import MalformedTimeError, parse_time


def _roster_id(swimmer: Swimmer) -> str:
    # Swimmers without any ID sort as an empty string, not as missing
    return swimmer.id_short or swimmer.id or ""


ROSTER_TABLE: TableSpec[Swimmer] = TableSpec(
    fields={
        "name": SortField("name", lambda s: s.full_name, SortKind.TEXT),
        "id": SortField("id", _roster_id, SortKind.TEXT),
        "sex": SortField("sex", lambda s: s.sex.value, SortKind.CATEGORY),
        "age": SortField("age", lambda s: s.age_range.min, SortKind.NUMBER),
        "birthday": SortField("birthday", lambda s: s.birthday, SortKind.DATE),
    },
    default_sort="name",
    search_fields=(
        lambda s: s.full_name,
        lambda s: s.id,
        lambda s: s.id_short,
    ),
    category_field=lambda s: s.sex.value,
)


def _result_seconds(result: MeetResult) -> float | None:
    # An unparseable time sorts with the missing values instead of failing the table
    try:
        return parse_time(result.time)
    except MalformedTimeError:
        return None


RESULTS_TABLE: TableSpec[MeetResult] = TableSpec(
    fields={
        "event": SortField("event", lambda r: r.event, SortKind.TEXT),
        "time": SortField("time", _result_seconds, SortKind.NUMBER),
        "course": SortField("course", lambda r: r.event_course, SortKind.CATEGORY),
        "rank": SortField("rank", lambda r: r.rank, SortKind.NUMBER),
        "date": SortField("date", lambda r: r.date, SortKind.DATE),
        "meet": SortField("meet", lambda r: r.meet.name, SortKind.TEXT),
    },
    default_sort="date",
    search_fields=(
        lambda r: r.event,
        lambda r: r.meet.name,
    ),
    category_field=lambda r: r.event_course,
)

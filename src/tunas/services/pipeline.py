"""Filter, sort and paginate record lists for table views.

The three stages always run in that order. ``run_table`` is the single entry
point the views use; the stage functions are public so each can be tested on
its own.

Null handling differs by field kind and mirrors the dashboard's visible
behavior:

- text, category and number fields: a missing value sorts last in both
  directions
- date fields: a missing or unparseable date counts as the epoch
  (1970-01-01T00:00:00Z), so it sorts before recent dates ascending and after
  them descending
"""

import math
from collections.abc import Callable, Iterable, Mapping, Sequence
from dataclasses import dataclass, replace
from datetime import UTC, date, datetime
from enum import StrEnum
from typing import Any, Generic, TypeVar

T = TypeVar("T")

Predicate = Callable[[T], bool]
Extractor = Callable[[T], Any]


class SortDirection(StrEnum):
    """Table sort direction."""

    ASC = "asc"
    DESC = "desc"

    def flipped(self) -> "SortDirection":
        return SortDirection.DESC if self == SortDirection.ASC else SortDirection.ASC


class SortKind(StrEnum):
    """How a field's extracted value is compared."""

    TEXT = "text"  # case-insensitive
    CATEGORY = "category"  # raw value
    NUMBER = "number"
    DATE = "date"  # by instant, missing = epoch


def date_instant(value: date | datetime | str | None) -> float:
    """Convert a date-like value to a POSIX timestamp for sorting.

    Date-only values and naive date-times are taken as UTC. ``None``, empty
    strings and unparseable strings all return 0.0.
    """
    if value is None or value == "":
        return 0.0
    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value)
        except ValueError:
            return 0.0
    if not isinstance(value, datetime):
        value = datetime(value.year, value.month, value.day)
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return value.timestamp()


@dataclass(frozen=True)
class SortField(Generic[T]):
    """A sortable column: a name, an extractor and a comparison kind."""

    name: str
    extract: Extractor
    kind: SortKind = SortKind.TEXT

    def key(self, record: T) -> Any:
        """Comparable key for ``record``, or None when the value is missing.

        Date fields never return None.
        """
        value = self.extract(record)
        if self.kind == SortKind.DATE:
            return date_instant(value)
        if value is None:
            return None
        if self.kind == SortKind.TEXT:
            return str(value).lower()
        if self.kind == SortKind.NUMBER:
            number = float(value)
            return None if math.isnan(number) else number
        return value


# =============================================================================
# FILTER
# =============================================================================


def text_search(term: str | None, *extractors: Extractor) -> Predicate:
    """Case-insensitive substring match against any of the given fields.

    An empty term matches every record. Fields whose value is None never match.
    """
    needle = (term or "").lower()

    def predicate(record: Any) -> bool:
        if not needle:
            return True
        for extract in extractors:
            value = extract(record)
            if value is not None and needle in str(value).lower():
                return True
        return False

    return predicate


def category_equals(value: Any, extractor: Extractor) -> Predicate:
    """Exact match on a categorical field; no selected value matches everything."""

    def predicate(record: Any) -> bool:
        if value is None or value == "":
            return True
        return extractor(record) == value

    return predicate


def filter_records(records: Iterable[T], predicates: Sequence[Predicate]) -> list[T]:
    """Keep records for which every predicate holds."""
    return [r for r in records if all(p(r) for p in predicates)]


# =============================================================================
# SORT
# =============================================================================


def sort_records(
    records: Sequence[T],
    sort_field: SortField[T],
    direction: SortDirection = SortDirection.ASC,
) -> list[T]:
    """Stable sort by one field.

    Records with equal keys keep their incoming order in both directions.
    Records with a missing key go last, in their incoming order.
    """
    present: list[tuple[Any, T]] = []
    missing: list[T] = []
    for record in records:
        key = sort_field.key(record)
        if key is None:
            missing.append(record)
        else:
            present.append((key, record))

    present.sort(key=lambda pair: pair[0], reverse=direction == SortDirection.DESC)
    return [record for _, record in present] + missing


@dataclass(frozen=True)
class SortState:
    """Current sort column and direction."""

    field: str
    direction: SortDirection = SortDirection.ASC

    def toggle(self, name: str) -> "SortState":
        """Same column flips direction; a new column starts ascending."""
        if name == self.field:
            return SortState(self.field, self.direction.flipped())
        return SortState(name, SortDirection.ASC)


# =============================================================================
# PAGINATE
# =============================================================================


def page_count(total: int, page_size: int) -> int:
    """Number of pages needed for ``total`` rows (0 when there are none)."""
    if page_size <= 0:
        raise ValueError(f"page_size must be positive, got {page_size}")
    return math.ceil(total / page_size) if total > 0 else 0


def clamp_page(page_index: int, total: int, page_size: int) -> int:
    """Pull a page index back into ``[1, max(1, page_count)]``."""
    return min(max(page_index, 1), max(1, page_count(total, page_size)))


@dataclass(frozen=True)
class Page(Generic[T]):
    """One page of a table."""

    items: list[T]
    page_index: int
    page_size: int
    total: int

    @property
    def page_count(self) -> int:
        return page_count(self.total, self.page_size)

    @property
    def first_row(self) -> int:
        """1-based number of the first row shown, 0 for an empty page."""
        if not self.items:
            return 0
        return (self.page_index - 1) * self.page_size + 1

    @property
    def last_row(self) -> int:
        if not self.items:
            return 0
        return self.first_row + len(self.items) - 1

    @property
    def has_previous(self) -> bool:
        return self.page_index > 1

    @property
    def has_next(self) -> bool:
        return self.page_index < self.page_count


def paginate(records: Sequence[T], page_index: int, page_size: int) -> Page[T]:
    """Slice one page out of ``records``.

    An out-of-range page index gives an empty page rather than an error.
    """
    if page_size <= 0:
        raise ValueError(f"page_size must be positive, got {page_size}")
    if page_index < 1:
        items: list[T] = []
    else:
        start = (page_index - 1) * page_size
        items = list(records[start : start + page_size])
    return Page(items=items, page_index=page_index, page_size=page_size, total=len(records))


# =============================================================================
# TABLE QUERY
# =============================================================================


@dataclass(frozen=True)
class TableQuery:
    """Everything a table view needs besides the records themselves.

    Changing the search term, category or sort sends the view back to page 1.
    """

    sort: SortState
    search: str = ""
    category: str | None = None
    page: int = 1

    def with_search(self, term: str) -> "TableQuery":
        return replace(self, search=term, page=1)

    def with_category(self, value: str | None) -> "TableQuery":
        return replace(self, category=value or None, page=1)

    def with_sort(self, name: str) -> "TableQuery":
        return replace(self, sort=self.sort.toggle(name), page=1)

    def with_page(self, page: int) -> "TableQuery":
        return replace(self, page=page)


@dataclass(frozen=True)
class TableSpec(Generic[T]):
    """Sortable fields plus search and category extractors for one record type."""

    fields: Mapping[str, SortField[T]]
    default_sort: str
    search_fields: tuple[Extractor, ...] = ()
    category_field: Extractor | None = None

    def __post_init__(self) -> None:
        if self.default_sort not in self.fields:
            raise ValueError(f"Unknown default sort field: {self.default_sort}")

    def get_field(self, name: str) -> SortField[T]:
        try:
            return self.fields[name]
        except KeyError:
            valid = ", ".join(sorted(self.fields))
            raise ValueError(f"Unknown sort field: '{name}'. Valid fields: {valid}") from None

    def default_query(self) -> TableQuery:
        return TableQuery(sort=SortState(self.default_sort))

    def predicates(self, query: TableQuery) -> list[Predicate]:
        predicates: list[Predicate] = [text_search(query.search, *self.search_fields)]
        if self.category_field is not None:
            predicates.append(category_equals(query.category, self.category_field))
        return predicates


def run_table(
    records: Sequence[T],
    spec: TableSpec[T],
    query: TableQuery,
    page_size: int,
) -> Page[T]:
    """Filter, sort, then paginate ``records`` according to ``query``.

    The page index is clamped to the filtered row count, so a query left on
    page 5 after the search narrowed things down lands on the last page.
    """
    filtered = filter_records(records, spec.predicates(query))
    ordered = sort_records(filtered, spec.get_field(query.sort.field), query.sort.direction)
    page_index = clamp_page(query.page, len(ordered), page_size)
    return paginate(ordered, page_index, page_size)

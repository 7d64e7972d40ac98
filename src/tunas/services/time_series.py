"""Build multi-line chart data from a swimmer's meet results.

Results arrive as one flat list covering every event the swimmer has swum.
A chart needs one line per event over a shared date axis, so the results are
grouped by event, every date seen in any event becomes one point on the axis,
and each point holds only the events swum on that exact date.

Usage:
    chart = assemble_time_series(history.meet_results)
    selection = SeriesSelection.initial(chart.labels)
    selection.toggle("100 FR SCY")
    view = build_chart_view(chart, selection)
"""

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import StrEnum

from tunas import get_logger
from tunas.models import MeetResult
from tunas.services.pipeline import date_instant
from tunas.services.time_codec import MalformedTimeError, parse_time

logger = get_logger(__name__)

PALETTE: tuple[str, ...] = (
    "#3b82f6",  # blue
    "#ef4444",  # red
    "#10b981",  # green
    "#f59e0b",  # amber
    "#8b5cf6",  # purple
    "#ec4899",  # pink
    "#06b6d4",  # cyan
    "#f97316",  # orange
    "#14b8a6",  # teal
    "#84cc16",  # lime
    "#a855f7",  # violet
    "#f43f5e",  # rose
)

DEFAULT_MAX_INITIAL_SERIES = 8


@dataclass(frozen=True)
class TimedRecord:
    """A single swim: which event, how fast, and when."""

    event: str
    time: str
    date: str

    @classmethod
    def from_result(cls, result: MeetResult) -> "TimedRecord":
        return cls(event=result.event, time=result.time, date=result.date)


@dataclass(frozen=True)
class Observation:
    date: str
    seconds: float
    time: str  # as received, for tooltips


@dataclass(frozen=True)
class EventSeries:
    """All swims of one event, oldest first."""

    label: str
    observations: tuple[Observation, ...]

    def value_on(self, date: str) -> float | None:
        """Seconds swum on exactly ``date``; the earliest-sorted swim wins ties."""
        for obs in self.observations:
            if obs.date == date:
                return obs.seconds
        return None

    @property
    def best(self) -> Observation | None:
        """Fastest swim in the series."""
        if not self.observations:
            return None
        return min(self.observations, key=lambda obs: obs.seconds)


def display_date(date: str) -> str:
    """Format an ISO date string for an axis label, e.g. "Jan 5, 2024".

    Unparseable strings are returned unchanged.
    """
    try:
        parsed = datetime.fromisoformat(date)
    except ValueError:
        return date
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(UTC)
    return f"{parsed:%b} {parsed.day}, {parsed.year}"


@dataclass(frozen=True)
class ChartPoint:
    """One position on the date axis with the events swum that day."""

    date: str
    values: Mapping[str, float] = field(default_factory=dict)

    @property
    def display_date(self) -> str:
        return display_date(self.date)

    def value(self, label: str) -> float | None:
        return self.values.get(label)


@dataclass(frozen=True)
class ChartData:
    """Aligned chart dataset: points on a shared date axis plus event labels."""

    points: tuple[ChartPoint, ...]
    labels: tuple[str, ...]
    series: tuple[EventSeries, ...]

    @property
    def is_empty(self) -> bool:
        return not self.points

    @property
    def dates(self) -> list[str]:
        return [point.date for point in self.points]

    def color_of(self, label: str) -> str:
        return color_of(label, self.labels)


def color_of(label: str, labels: Sequence[str]) -> str:
    """Palette color for ``label`` by its position in the full label list.

    The color does not depend on which labels are currently selected.

    Raises:
        ValueError: If ``label`` is not in ``labels``.
    """
    try:
        index = list(labels).index(label)
    except ValueError:
        raise ValueError(f"Unknown event: '{label}'") from None
    return PALETTE[index % len(PALETTE)]


def assemble_time_series(
    records: Iterable[TimedRecord | MeetResult],
    *,
    skip_malformed: bool = False,
) -> ChartData:
    """Group swims by event and align them on the union of all dates.

    Events keep the order in which they first appear in ``records``. Dates are
    ordered by instant; two different strings for the same day stay separate
    points.

    Args:
        records: Swims as TimedRecord or MeetResult
        skip_malformed: Drop swims whose time cannot be parsed instead of
            raising

    Raises:
        MalformedTimeError: On an unparseable time when skip_malformed is False
    """
    groups: dict[str, list[Observation]] = {}
    seen_dates: dict[str, None] = {}

    for record in records:
        try:
            seconds = parse_time(record.time)
        except MalformedTimeError:
            if not skip_malformed:
                raise
            logger.warning(
                "malformed_time_skipped", event=record.event, time=record.time, date=record.date
            )
            continue
        groups.setdefault(record.event, []).append(
            Observation(date=record.date, seconds=seconds, time=record.time)
        )
        seen_dates.setdefault(record.date, None)

    series = tuple(
        EventSeries(
            label=label,
            observations=tuple(sorted(observations, key=lambda obs: date_instant(obs.date))),
        )
        for label, observations in groups.items()
    )

    points = []
    for date in sorted(seen_dates, key=date_instant):
        values = {}
        for event_series in series:
            value = event_series.value_on(date)
            if value is not None:
                values[event_series.label] = value
        points.append(ChartPoint(date=date, values=values))

    return ChartData(
        points=tuple(points),
        labels=tuple(s.label for s in series),
        series=series,
    )


# =============================================================================
# SERIES SELECTION
# =============================================================================


class SeriesSelection:
    """Which event lines are drawn.

    Starts with the first ``max_initial`` events. Afterwards only toggle,
    select_all and deselect_all change it, and an empty selection means
    "draw nothing", never "draw everything".
    """

    def __init__(self, labels: Sequence[str], selected: Iterable[str] = ()):
        self._labels = tuple(labels)
        self._selected: set[str] = set()
        for label in selected:
            self._require_known(label)
            self._selected.add(label)

    @classmethod
    def initial(
        cls, labels: Sequence[str], max_initial: int = DEFAULT_MAX_INITIAL_SERIES
    ) -> "SeriesSelection":
        """Selection shown before the user touches anything."""
        return cls(labels, labels[: min(max_initial, len(labels))])

    def _require_known(self, label: str) -> None:
        if label not in self._labels:
            raise ValueError(f"Unknown event: '{label}'")

    @property
    def labels(self) -> tuple[str, ...]:
        return self._labels

    @property
    def selected(self) -> frozenset[str]:
        return frozenset(self._selected)

    def is_selected(self, label: str) -> bool:
        return label in self._selected

    def visible_labels(self) -> list[str]:
        """Selected labels in chart (first-seen) order."""
        return [label for label in self._labels if label in self._selected]

    def toggle(self, label: str) -> None:
        self._require_known(label)
        if label in self._selected:
            self._selected.remove(label)
        else:
            self._selected.add(label)

    def select_all(self) -> None:
        self._selected = set(self._labels)

    def deselect_all(self) -> None:
        self._selected.clear()

    def __len__(self) -> int:
        return len(self._selected)

    def __repr__(self) -> str:
        return f"SeriesSelection({len(self)} of {len(self._labels)} selected)"


# =============================================================================
# CHART VIEW
# =============================================================================


class RenderState(StrEnum):
    """What the chart area should show."""

    NO_DATA = "no_data"  # "No data available for chart"
    NO_SERIES_SELECTED = "no_series_selected"  # "Please select at least one event"
    READY = "ready"


@dataclass(frozen=True)
class VisibleSeries:
    label: str
    color: str


@dataclass(frozen=True)
class ChartView:
    """Everything a renderer needs to draw the chart."""

    state: RenderState
    points: tuple[ChartPoint, ...]
    labels: tuple[str, ...]
    series: tuple[VisibleSeries, ...]
    selected_count: int

    @property
    def total_count(self) -> int:
        return len(self.labels)


def build_chart_view(chart: ChartData, selection: SeriesSelection) -> ChartView:
    """Combine chart data with the current selection."""
    visible = tuple(
        VisibleSeries(label=label, color=chart.color_of(label))
        for label in selection.visible_labels()
        if label in chart.labels
    )

    if chart.is_empty:
        state = RenderState.NO_DATA
    elif not visible:
        state = RenderState.NO_SERIES_SELECTED
    else:
        state = RenderState.READY

    return ChartView(
        state=state,
        points=chart.points,
        labels=chart.labels,
        series=visible,
        selected_count=len(visible),
    )

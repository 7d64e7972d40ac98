"""Result exploration: time codec, table pipeline, chart assembly and view state."""

from tunas.services.pipeline import (
    Page,
    SortDirection,
    SortField,
    SortKind,
    SortState,
    TableQuery,
    TableSpec,
    category_equals,
    clamp_page,
    filter_records,
    paginate,
    run_table,
    sort_records,
    text_search,
)
from tunas.services.relay_form import RelayForm, prune_excluded_ids, validate_excluded_id
from tunas.services.tables import RESULTS_TABLE, ROSTER_TABLE
from tunas.services.time_codec import MalformedTimeError, format_seconds, parse_time
from tunas.services.time_series import (
    PALETTE,
    ChartData,
    ChartPoint,
    ChartView,
    EventSeries,
    RenderState,
    SeriesSelection,
    TimedRecord,
    assemble_time_series,
    build_chart_view,
    color_of,
)

__all__ = [
    # Time codec
    "MalformedTimeError",
    "format_seconds",
    "parse_time",
    # Pipeline
    "Page",
    "SortDirection",
    "SortField",
    "SortKind",
    "SortState",
    "TableQuery",
    "TableSpec",
    "category_equals",
    "clamp_page",
    "filter_records",
    "paginate",
    "run_table",
    "sort_records",
    "text_search",
    # Tables
    "RESULTS_TABLE",
    "ROSTER_TABLE",
    # Time series
    "PALETTE",
    "ChartData",
    "ChartPoint",
    "ChartView",
    "EventSeries",
    "RenderState",
    "SeriesSelection",
    "TimedRecord",
    "assemble_time_series",
    "build_chart_view",
    "color_of",
    # Relay form
    "RelayForm",
    "prune_excluded_ids",
    "validate_excluded_id",
]

"""Swimmer endpoints: details, best times, and time history with chart data."""

from typing import Literal

from fastapi import APIRouter, HTTPException, Query, status
from pydantic import BaseModel

from tunas import get_logger
from tunas.api.dependencies import ClientDep, SettingsDep, upstream_error
from tunas.api.schemas import ChartResponse, PaginatedResponse
from tunas.client import ApiClientError
from tunas.models import (
    MeetResult,
    Swimmer,
    SwimmerBestTimesResponse,
    SwimmerResponse,
)
from tunas.services.pipeline import SortDirection, SortState, TableQuery, run_table
from tunas.services.tables import RESULTS_TABLE
from tunas.services.time_codec import MalformedTimeError
from tunas.services.time_series import (
    SeriesSelection,
    assemble_time_series,
    build_chart_view,
)

logger = get_logger(__name__)

router = APIRouter(prefix="/swimmers", tags=["swimmers"])


class HistoryResponse(BaseModel):
    """Time history table page plus the progression chart."""

    swimmer: Swimmer
    results: PaginatedResponse[MeetResult]
    chart: ChartResponse


@router.get("/{swimmer_id}", response_model=SwimmerResponse)
def get_swimmer(swimmer_id: str, client: ClientDep) -> SwimmerResponse:
    """Get a swimmer by USA Swimming ID."""
    try:
        return client.swimmers.get_swimmer(swimmer_id)
    except ApiClientError as e:
        raise upstream_error(e) from None


@router.get("/{swimmer_id}/best-times", response_model=SwimmerBestTimesResponse)
def get_best_times(swimmer_id: str, client: ClientDep) -> SwimmerBestTimesResponse:
    """Get a swimmer's best time per event."""
    try:
        return client.swimmers.get_best_times(swimmer_id)
    except ApiClientError as e:
        raise upstream_error(e) from None


@router.get("/{swimmer_id}/history", response_model=HistoryResponse)
def get_history(
    swimmer_id: str,
    client: ClientDep,
    settings: SettingsDep,
    search: str = Query("", description="Substring of event or meet name"),
    course: str | None = Query(None, description="SCY, SCM or LCM"),
    sort: str = Query("date", description="event, time, course, rank, date or meet"),
    direction: SortDirection = Query(SortDirection.ASC),
    page: int = Query(1, ge=1),
    event: list[str] | None = Query(None, description="Events to draw on the chart"),
    select: Literal["initial", "all", "none"] = Query(
        "initial", description="Chart selection when no event is given"
    ),
    skip_malformed: bool = Query(False, description="Leave unparseable times off the chart"),
) -> HistoryResponse:
    """Get a swimmer's full history as a table page and a chart."""
    try:
        RESULTS_TABLE.get_field(sort)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e)) from None

    try:
        history = client.swimmers.get_time_history(swimmer_id)
    except ApiClientError as e:
        raise upstream_error(e) from None

    try:
        chart = assemble_time_series(history.meet_results, skip_malformed=skip_malformed)
    except MalformedTimeError as e:
        logger.warning("history_chart_failed", swimmer_id=swimmer_id, error=str(e))
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=f"Cannot chart time history: {e}",
        ) from None

    try:
        if event:
            selection = SeriesSelection(chart.labels, event)
        else:
            selection = SeriesSelection.initial(chart.labels, settings.max_initial_series)
            if select == "all":
                selection.select_all()
            elif select == "none":
                selection.deselect_all()
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e)) from None

    query = TableQuery(sort=SortState(sort, direction), search=search, category=course, page=page)
    results = run_table(history.meet_results, RESULTS_TABLE, query, settings.page_size)

    logger.info(
        "history_built",
        swimmer_id=swimmer_id,
        results=len(history.meet_results),
        events=len(chart.labels),
        selected=len(selection),
    )

    return HistoryResponse(
        swimmer=history.swimmer,
        results=PaginatedResponse[MeetResult].from_page(results, sort, direction),
        chart=ChartResponse.from_view(build_chart_view(chart, selection)),
    )

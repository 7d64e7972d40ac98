"""Response schemas shared by the dashboard routes."""

from typing import Generic, TypeVar

from pydantic import BaseModel

from tunas.services.pipeline import Page, SortDirection
from tunas.services.time_codec import format_seconds
from tunas.services.time_series import ChartView, RenderState

T = TypeVar("T")


class PaginatedResponse(BaseModel, Generic[T]):
    """One table page plus the sort that produced it."""

    items: list[T]
    total: int
    page: int
    page_size: int
    total_pages: int
    sort: str
    direction: SortDirection

    @classmethod
    def from_page(
        cls, page: Page, sort: str, direction: SortDirection
    ) -> "PaginatedResponse[T]":
        return cls(
            items=page.items,
            total=page.total,
            page=page.page_index,
            page_size=page.page_size,
            total_pages=page.page_count,
            sort=sort,
            direction=direction,
        )


class ChartSeriesSchema(BaseModel):
    label: str
    color: str


class ChartPointSchema(BaseModel):
    """One date on the chart axis; ``values`` holds only events swum that day."""

    date: str
    display_date: str
    values: dict[str, float]
    formatted: dict[str, str]


class ChartResponse(BaseModel):
    state: RenderState
    labels: list[str]
    series: list[ChartSeriesSchema]
    points: list[ChartPointSchema]
    selected_count: int
    total_count: int

    @classmethod
    def from_view(cls, view: ChartView) -> "ChartResponse":
        return cls(
            state=view.state,
            labels=list(view.labels),
            series=[ChartSeriesSchema(label=s.label, color=s.color) for s in view.series],
            points=[
                ChartPointSchema(
                    date=point.date,
                    display_date=point.display_date,
                    values=dict(point.values),
                    formatted={label: format_seconds(v) for label, v in point.values.items()},
                )
                for point in view.points
            ],
            selected_count=view.selected_count,
            total_count=view.total_count,
        )

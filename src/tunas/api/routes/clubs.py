"""Club roster endpoints.

The roster is fetched whole from the Tunas API; searching, sorting and paging
happen here.
"""

from fastapi import APIRouter, HTTPException, Query
from pydantic import BaseModel

from tunas import get_logger
from tunas.api.dependencies import ClientDep, SettingsDep, upstream_error
from tunas.api.schemas import PaginatedResponse
from tunas.client import ApiClientError
from tunas.models import Club, Sex, Swimmer
from tunas.services.pipeline import SortDirection, SortState, TableQuery, run_table
from tunas.services.tables import ROSTER_TABLE

logger = get_logger(__name__)

router = APIRouter(prefix="/clubs", tags=["clubs"])


class RosterResponse(BaseModel):
    """Club info plus one page of its (filtered, sorted) swimmers."""

    club: Club
    swimmer_count: int
    swimmers: PaginatedResponse[Swimmer]


@router.get("/{club_code}", response_model=Club)
def get_club(club_code: str, client: ClientDep) -> Club:
    """Get club details."""
    try:
        return client.clubs.get_club(club_code)
    except ApiClientError as e:
        raise upstream_error(e) from None


@router.get("/{club_code}/swimmers", response_model=RosterResponse)
def get_roster(
    club_code: str,
    client: ClientDep,
    settings: SettingsDep,
    search: str = Query("", description="Substring of name or ID"),
    sex: Sex | None = Query(None),
    sort: str = Query("name", description="name, id, sex, age or birthday"),
    direction: SortDirection = Query(SortDirection.ASC),
    page: int = Query(1, ge=1),
) -> RosterResponse:
    """Get one page of a club's swimmers."""
    try:
        ROSTER_TABLE.get_field(sort)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e)) from None

    try:
        data = client.clubs.get_club_swimmers(club_code)
    except ApiClientError as e:
        raise upstream_error(e) from None

    query = TableQuery(
        sort=SortState(sort, direction),
        search=search,
        category=sex.value if sex else None,
        page=page,
    )
    result = run_table(data.swimmers, ROSTER_TABLE, query, settings.page_size)

    logger.info(
        "roster_page_built",
        club_code=club_code.upper(),
        total=result.total,
        page=result.page_index,
    )

    return RosterResponse(
        club=data.club,
        swimmer_count=len(data.swimmers),
        swimmers=PaginatedResponse[Swimmer].from_page(result, sort, direction),
    )

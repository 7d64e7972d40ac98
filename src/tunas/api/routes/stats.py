"""Database statistics endpoint (dashboard home cards)."""

from fastapi import APIRouter

from tunas.api.dependencies import ClientDep, upstream_error
from tunas.client import ApiClientError
from tunas.models import DatabaseStatsResponse

router = APIRouter(prefix="/stats", tags=["stats"])


@router.get("", response_model=DatabaseStatsResponse)
def get_stats(client: ClientDep) -> DatabaseStatsResponse:
    """Club, swimmer, meet and result counts."""
    try:
        return client.stats.get_stats()
    except ApiClientError as e:
        raise upstream_error(e) from None

"""Relay generation endpoint.

Excluded swimmer IDs are checked against the club roster before the request
is forwarded to the optimizer.
"""

from fastapi import APIRouter, HTTPException

from tunas import get_logger
from tunas.api.dependencies import ClientDep, upstream_error
from tunas.client import ApiClientError
from tunas.models import RelayGenerationRequest, RelayGenerationResponse
from tunas.services.relay_form import validate_excluded_id

logger = get_logger(__name__)

router = APIRouter(prefix="/relays", tags=["relays"])


@router.post("/generate", response_model=RelayGenerationResponse)
def generate_relays(
    request: RelayGenerationRequest, client: ClientDep
) -> RelayGenerationResponse:
    """Generate optimal relay teams."""
    if request.excluded_swimmer_ids:
        try:
            roster = client.clubs.get_club_swimmers(request.club_code)
        except ApiClientError as e:
            raise upstream_error(e) from None

        accepted: list[str] = []
        for swimmer_id in request.excluded_swimmer_ids:
            error = validate_excluded_id(swimmer_id, accepted, request.club_code, roster)
            if error:
                raise HTTPException(status_code=422, detail=error)
            accepted.append(swimmer_id.strip())
        request = request.model_copy(update={"excluded_swimmer_ids": accepted})

    try:
        response = client.relays.generate(request)
    except ApiClientError as e:
        raise upstream_error(e) from None

    logger.info(
        "relays_generated",
        club_code=request.club_code,
        event_type=request.event_type.value,
        relays=len(response.relays),
        excluded=len(request.excluded_swimmer_ids),
    )
    return response

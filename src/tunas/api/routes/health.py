"""Health check endpoints."""

from fastapi import APIRouter, HTTPException, status

from tunas import get_logger
from tunas.api.dependencies import ClientDep, SettingsDep
from tunas.client import ApiClientError

logger = get_logger(__name__)

router = APIRouter(tags=["health"])


@router.get("/health")
def health_check() -> dict:
    """Basic health check."""
    return {"status": "healthy"}


@router.get("/health/ready")
def readiness_check(settings: SettingsDep, client: ClientDep) -> dict:
    """Readiness check - verifies the Tunas API is reachable."""
    try:
        upstream = client.stats.health()
    except ApiClientError as e:
        logger.warning("upstream_unavailable", api_url=settings.api_url, error=e.message)
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=f"Tunas API unavailable: {e.message}",
        ) from None

    return {
        "status": "ready",
        "environment": settings.environment.value,
        "upstream": upstream.get("status", "unknown"),
    }

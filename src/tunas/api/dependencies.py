"""FastAPI dependencies for dependency injection.

Usage in routes:
    from tunas.api.dependencies import ClientDep

    @router.get("/stats")
    def get_stats(client: ClientDep):
        return client.stats.get_stats()
"""

from collections.abc import Iterator
from typing import Annotated

from fastapi import Depends, HTTPException, status

from tunas.client import ApiClientError, TunasClient
from tunas.config import Settings, get_settings


def get_settings_dep() -> Settings:
    """Get application settings (dependency wrapper)."""
    return get_settings()


SettingsDep = Annotated[Settings, Depends(get_settings_dep)]


def get_client(settings: SettingsDep) -> Iterator[TunasClient]:
    """Tunas API client scoped to one request."""
    client = TunasClient(base_url=settings.api_url, timeout=settings.request_timeout)
    try:
        yield client
    finally:
        client.close()


ClientDep = Annotated[TunasClient, Depends(get_client)]


def upstream_error(error: ApiClientError) -> HTTPException:
    """Translate a Tunas API failure into an HTTP error for our caller.

    Upstream status codes pass through; transport failures become 502.
    """
    code = error.status if error.status else status.HTTP_502_BAD_GATEWAY
    return HTTPException(status_code=code, detail=error.message)

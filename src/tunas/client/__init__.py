"""HTTP client for the Tunas API.

Usage:
    from tunas.client import TunasClient

    with TunasClient() as client:
        roster = client.clubs.get_club_swimmers("scsc")
"""

import httpx

from tunas.client.base import ApiClientError, BaseApi
from tunas.client.clubs import ClubsApi
from tunas.client.relays import RelaysApi
from tunas.client.stats import StatsApi
from tunas.client.swimmers import SwimmersApi
from tunas.config import get_settings


class TunasClient:
    """Unified API client with one sub-client per resource."""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        http_client: httpx.Client | None = None,
    ):
        if http_client is None:
            settings = get_settings()
            http_client = httpx.Client(
                base_url=base_url or settings.api_url,
                timeout=timeout or settings.request_timeout,
                headers={"Content-Type": "application/json"},
                follow_redirects=True,
            )
        self._http = http_client
        self.swimmers = SwimmersApi(http_client)
        self.clubs = ClubsApi(http_client)
        self.relays = RelaysApi(http_client)
        self.stats = StatsApi(http_client)

    @property
    def base_url(self) -> str:
        return str(self._http.base_url)

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> "TunasClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


__all__ = [
    "ApiClientError",
    "BaseApi",
    "ClubsApi",
    "RelaysApi",
    "StatsApi",
    "SwimmersApi",
    "TunasClient",
]

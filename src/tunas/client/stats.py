"""Stats and health endpoints."""

from typing import Any

from tunas.client.base import BaseApi
from tunas.models import DatabaseStatsResponse


class StatsApi(BaseApi):
    """Client for /api/stats and /health."""

    def get_stats(self) -> DatabaseStatsResponse:
        return self._get("/api/stats", DatabaseStatsResponse)

    def health(self) -> dict[str, Any]:
        return self._request("GET", "/health")

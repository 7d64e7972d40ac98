"""Swimmer endpoints."""

from urllib.parse import quote

from tunas.client.base import BaseApi
from tunas.models import (
    SwimmerBestTimesResponse,
    SwimmerResponse,
    SwimmerTimeHistoryResponse,
)


class SwimmersApi(BaseApi):
    """Client for /api/swimmers."""

    def _path(self, swimmer_id: str, suffix: str = "") -> str:
        return f"/api/swimmers/{quote(swimmer_id.strip(), safe='')}{suffix}"

    def get_swimmer(self, swimmer_id: str) -> SwimmerResponse:
        return self._get(self._path(swimmer_id), SwimmerResponse)

    def get_best_times(self, swimmer_id: str) -> SwimmerBestTimesResponse:
        """Fastest time per event, as computed by the backend."""
        return self._get(self._path(swimmer_id, "/best-times"), SwimmerBestTimesResponse)

    def get_time_history(self, swimmer_id: str) -> SwimmerTimeHistoryResponse:
        """Every recorded swim."""
        return self._get(self._path(swimmer_id, "/times"), SwimmerTimeHistoryResponse)

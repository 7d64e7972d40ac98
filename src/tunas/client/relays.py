"""Relay generation endpoint."""

from tunas.client.base import BaseApi
from tunas.models import RelayGenerationRequest, RelayGenerationResponse


class RelaysApi(BaseApi):
    """Client for /api/relays."""

    def generate(self, request: RelayGenerationRequest) -> RelayGenerationResponse:
        """Ask the backend optimizer for relay teams."""
        return self._post("/api/relays/generate", RelayGenerationResponse, request)

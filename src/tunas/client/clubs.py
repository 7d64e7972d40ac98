"""Club endpoints."""

from urllib.parse import quote

from tunas.client.base import BaseApi
from tunas.models import Club, ClubSwimmersResponse


class ClubsApi(BaseApi):
    """Client for /api/clubs. Club codes are sent upper-cased."""

    def _path(self, club_code: str, suffix: str = "") -> str:
        return f"/api/clubs/{quote(club_code.strip().upper(), safe='')}{suffix}"

    def get_club(self, club_code: str) -> Club:
        return self._get(self._path(club_code), Club)

    def get_club_swimmers(self, club_code: str) -> ClubSwimmersResponse:
        return self._get(self._path(club_code, "/swimmers"), ClubSwimmersResponse)

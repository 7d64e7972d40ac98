"""Shared fixtures: settings isolation, model builders and a fake Tunas API."""

from collections.abc import Callable
from typing import Any

import httpx
import pytest

from factories import result_payload, roster_payload, swimmer_payload
from tunas.client import TunasClient
from tunas.config import get_settings
from tunas.models import ClubSwimmersResponse, MeetResult, Swimmer

TEST_API_URL = "http://tunas.test"


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    """Keep state files and the API URL away from the real environment."""
    monkeypatch.setenv("STATE_DIR", str(tmp_path / "state"))
    monkeypatch.setenv("API_URL", TEST_API_URL)
    monkeypatch.delenv("PAGE_SIZE", raising=False)
    monkeypatch.delenv("MAX_INITIAL_SERIES", raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


# =============================================================================
# MODEL FIXTURES
# =============================================================================


@pytest.fixture
def make_swimmer() -> Callable[..., Swimmer]:
    def _make(**kwargs) -> Swimmer:
        return Swimmer.model_validate(swimmer_payload(**kwargs))

    return _make


@pytest.fixture
def make_result() -> Callable[..., MeetResult]:
    def _make(**kwargs) -> MeetResult:
        return MeetResult.model_validate(result_payload(**kwargs))

    return _make


@pytest.fixture
def roster() -> ClubSwimmersResponse:
    """A small club: two girls, one boy, one swimmer known only by short ID."""
    return ClubSwimmersResponse.model_validate(
        roster_payload(
            [
                swimmer_payload("Amy Adams", "AAAAAAAAAAAAAA", "AMYADA", "F", 11),
                swimmer_payload("Bob Brown", "BBBBBBBBBBBBBB", "BOBBRO", "M", 13),
                swimmer_payload("cara Cole", "CCCCCCCCCCCCCC", None, "F", 12),
                swimmer_payload("Dee Dunn", None, "DEEDUN", "F", 10),
            ]
        )
    )


# =============================================================================
# FAKE TUNAS API
# =============================================================================


class FakeTunasApi:
    """Route table for httpx.MockTransport.

    Unregistered routes answer 404 like the real backend.
    """

    def __init__(self) -> None:
        self.routes: dict[tuple[str, str], tuple[int, Any]] = {}
        self.requests: list[httpx.Request] = []

    def add(self, method: str, path: str, body: Any = None, status: int = 200) -> None:
        self.routes[(method, path)] = (status, body)

    def fail(self, method: str, path: str) -> None:
        """Make ``path`` raise a connection error."""
        self.routes[(method, path)] = (0, None)

    def calls(self, path: str) -> int:
        return sum(1 for request in self.requests if request.url.path == path)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        key = (request.method, request.url.path)
        if key not in self.routes:
            return httpx.Response(404, json={"detail": "Not found"})
        status, body = self.routes[key]
        if status == 0:
            raise httpx.ConnectError("Connection refused", request=request)
        if isinstance(body, str):
            return httpx.Response(status, text=body)
        return httpx.Response(status, json=body)

    def client(self) -> TunasClient:
        http = httpx.Client(base_url=TEST_API_URL, transport=httpx.MockTransport(self.handler))
        return TunasClient(http_client=http)


@pytest.fixture
def fake_api() -> FakeTunasApi:
    return FakeTunasApi()


@pytest.fixture
def tunas_client(fake_api: FakeTunasApi):
    client = fake_api.client()
    yield client
    client.close()

"""Fixtures for API tests."""

import pytest
from fastapi.testclient import TestClient

from tunas.api.app import create_app
from tunas.api.dependencies import get_client, get_settings_dep
from tunas.config import Settings


@pytest.fixture
def api_settings() -> Settings:
    """Small pages so paging is visible with a handful of swimmers."""
    return Settings(page_size=2, max_initial_series=2)


@pytest.fixture
def client(fake_api, api_settings) -> TestClient:
    """Provide a test client backed by the fake Tunas API."""
    app = create_app()

    def mock_get_client():
        tunas_client = fake_api.client()
        try:
            yield tunas_client
        finally:
            tunas_client.close()

    app.dependency_overrides[get_client] = mock_get_client
    app.dependency_overrides[get_settings_dep] = lambda: api_settings

    return TestClient(app)

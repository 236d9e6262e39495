"""Pytest configuration and shared fixtures."""

import os
from unittest.mock import AsyncMock

import httpx
import pytest
from fastapi.testclient import TestClient

# No startup location lookup against the real provider during tests
os.environ["RESOLVE_LOCATION_ON_STARTUP"] = "false"

from tests.factories import make_weather_payload  # noqa: E402
from weather_widget.config import Settings, get_settings  # noqa: E402
from weather_widget.dependencies import get_http_client  # noqa: E402
from weather_widget.main import app as fastapi_app  # noqa: E402
from weather_widget.state_managers import WeatherStateManager  # noqa: E402


@pytest.fixture
def mock_http_client():
    """Mock httpx.AsyncClient for external API calls."""
    mock_client = AsyncMock(spec=httpx.AsyncClient)
    mock_client.get = AsyncMock()
    mock_client.aclose = AsyncMock()
    return mock_client


@pytest.fixture
def mock_settings():
    """Settings instance with test values."""
    return Settings(
        api_host="127.0.0.1",
        api_port=8000,
        weather_api_key="test-weather-key",
        weather_api_url="https://api.example.test/data/2.5/weather",
        resolve_location_on_startup=False,
    )


@pytest.fixture
def weather_manager():
    """Fresh weather state manager."""
    return WeatherStateManager()


@pytest.fixture
def mock_weather_response():
    """Mock OpenWeatherMap API response."""
    return make_weather_payload()


@pytest.fixture
def test_client(mock_http_client, mock_settings):
    """FastAPI test client with lifespan context and mocked outbound HTTP."""
    fastapi_app.dependency_overrides[get_http_client] = lambda: mock_http_client
    fastapi_app.dependency_overrides[get_settings] = lambda: mock_settings
    with TestClient(fastapi_app) as client:
        yield client
    fastapi_app.dependency_overrides.clear()

"""Pydantic models for request/response validation."""

from datetime import datetime

from pydantic import BaseModel, Field

from weather_widget.models.state import RequestState
from weather_widget.models.weather import WeatherSnapshot
from weather_widget.services.theme_classifier import Theme


class HealthResponse(BaseModel):
    """Basic health check response."""

    status: str
    version: str


class DetailedHealthResponse(BaseModel):
    """Detailed health check response with dependency status."""

    status: str = Field(..., description="Overall health status: healthy or unhealthy")
    version: str = Field(..., description="Application version")
    timestamp: datetime = Field(..., description="Current server timestamp")
    checks: dict[str, str] = Field(..., description="Individual health check results")


class WidgetStateResponse(BaseModel):
    """Current widget state with the theme derived from it."""

    state: RequestState
    theme: Theme


class WeatherLookupResponse(BaseModel):
    """Result of a stateless weather lookup."""

    snapshot: WeatherSnapshot
    theme: Theme
    icon_url: str

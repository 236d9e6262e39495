"""Weather API routes with support for JSON and HTML responses."""

from typing import Literal

import httpx
from fastapi import APIRouter, Depends, Query, Request

from weather_widget.config import Settings, get_settings
from weather_widget.core.middleware import DEFAULT_RATE_LIMIT, limiter
from weather_widget.dependencies import get_http_client, get_weather_state_manager
from weather_widget.exceptions import CityValidationException
from weather_widget.models.base_models import WeatherLookupResponse, WidgetStateResponse
from weather_widget.models.state import RequestState
from weather_widget.services import weather_service, widget_service
from weather_widget.services.theme_classifier import classify, theme_for_state
from weather_widget.state_managers import WeatherStateManager
from weather_widget.views.template_renderer import TemplateRenderer

router = APIRouter()


def _state_response(
    request: Request,
    state: RequestState,
    format: Literal["json", "html"],
    city: str = "",
):
    if format == "html":
        return TemplateRenderer.render_weather_tile(request, state, city)
    return WidgetStateResponse(state=state, theme=theme_for_state(state))


@router.get(
    "/state",
    response_model=WidgetStateResponse,
    summary="Get widget state",
    description="Returns the current request state (idle, loading, loaded or failed) and its theme.",
)
@limiter.limit(DEFAULT_RATE_LIMIT)
async def get_state(
    request: Request,
    manager: WeatherStateManager = Depends(get_weather_state_manager),
):
    """Get the current widget state."""
    state = await manager.get_state()
    return WidgetStateResponse(state=state, theme=theme_for_state(state))


@router.post(
    "/search",
    summary="Search weather by city",
    description="""
    Looks up current weather for a city and stores the result as the widget state.

    Failures are reported in the returned state, not as HTTP errors:
    an empty city gives "Please enter a city name", any lookup failure "City not found".

    **Rate Limited:** 60 requests/minute
    """,
)
@limiter.limit(DEFAULT_RATE_LIMIT)
async def search(
    request: Request,
    city: str = Query(default="", description="City name"),
    client: httpx.AsyncClient = Depends(get_http_client),
    manager: WeatherStateManager = Depends(get_weather_state_manager),
    settings: Settings = Depends(get_settings),
    format: Literal["json", "html"] = Query(default="json", description="Response format"),
):
    """Search by city name.

    Returns:
        JSON with the widget state and theme, or the HTML tile fragment
    """
    state = await widget_service.search_city(client, manager, city, settings)
    return _state_response(request, state, format, city)


@router.post(
    "/locate",
    summary="Look up weather by coordinates",
    description="""
    Looks up current weather for a latitude/longitude pair (e.g. from browser
    geolocation) and stores the result as the widget state.

    **Rate Limited:** 60 requests/minute
    """,
)
@limiter.limit(DEFAULT_RATE_LIMIT)
async def locate(
    request: Request,
    lat: float = Query(ge=-90, le=90, description="Latitude"),
    lon: float = Query(ge=-180, le=180, description="Longitude"),
    client: httpx.AsyncClient = Depends(get_http_client),
    manager: WeatherStateManager = Depends(get_weather_state_manager),
    settings: Settings = Depends(get_settings),
    format: Literal["json", "html"] = Query(default="json", description="Response format"),
):
    """Look up weather for coordinates.

    Returns:
        JSON with the widget state and theme, or the HTML tile fragment
    """
    state = await widget_service.search_coords(client, manager, lat, lon, settings)
    return _state_response(request, state, format)


@router.get(
    "/current",
    response_model=WeatherLookupResponse,
    summary="Get current weather",
    description="""
    Stateless lookup by `city` or by `lat` and `lon`. Does not touch the widget state.

    **Rate Limited:** 60 requests/minute
    """,
    responses={
        200: {
            "description": "Successful response",
            "content": {
                "application/json": {
                    "example": {
                        "snapshot": {
                            "location": "Paris",
                            "country": "FR",
                            "temp": 18.4,
                            "feels_like": 17.9,
                            "humidity": 62,
                            "wind_speed": 3.6,
                            "condition": "Clear",
                            "condition_id": 800,
                            "icon": "01d",
                            "description": "clear sky",
                            "sunrise": 1718423000,
                            "sunset": 1718480000,
                        },
                        "theme": "clear",
                        "icon_url": "https://openweathermap.org/img/wn/01d@4x.png",
                    }
                }
            },
        },
        400: {"description": "No city given, or neither city nor coordinates given"},
        502: {"description": "Weather lookup failed"},
    },
)
@limiter.limit(DEFAULT_RATE_LIMIT)
async def get_current_weather(
    request: Request,
    city: str | None = Query(default=None, description="City name"),
    lat: float | None = Query(default=None, ge=-90, le=90, description="Latitude"),
    lon: float | None = Query(default=None, ge=-180, le=180, description="Longitude"),
    client: httpx.AsyncClient = Depends(get_http_client),
    settings: Settings = Depends(get_settings),
):
    """Get current weather without changing the widget state.

    Raises:
        CityValidationException: Empty city, or no query at all (400)
        WeatherFetchException: Lookup failed (502)
    """
    if city is not None:
        snapshot = await weather_service.fetch_by_city(client, city, settings)
    elif lat is not None and lon is not None:
        snapshot = await weather_service.fetch_by_coords(client, lat, lon, settings)
    else:
        raise CityValidationException("Provide a city or both lat and lon")

    return WeatherLookupResponse(snapshot=snapshot, theme=classify(snapshot), icon_url=snapshot.icon_url)

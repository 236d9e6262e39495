"""Page/view routes for serving the widget page and its tile fragment."""

import httpx
from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import HTMLResponse

from weather_widget.config import Settings, get_settings
from weather_widget.dependencies import get_http_client, get_weather_state_manager
from weather_widget.services import widget_service
from weather_widget.state_managers import WeatherStateManager
from weather_widget.views.template_renderer import TemplateRenderer

router = APIRouter()


@router.get("/", response_class=HTMLResponse)
async def index(
    request: Request,
    manager: WeatherStateManager = Depends(get_weather_state_manager),
):
    """Render the widget page with the current state."""
    return TemplateRenderer.render_index(request, await manager.get_state())


@router.get("/tiles/weather", response_class=HTMLResponse)
async def weather_tile(
    request: Request,
    city: str | None = Query(default=None, description="City to search for"),
    lat: float | None = Query(default=None, ge=-90, le=90, description="Latitude from the browser"),
    lon: float | None = Query(default=None, ge=-180, le=180, description="Longitude from the browser"),
    client: httpx.AsyncClient = Depends(get_http_client),
    manager: WeatherStateManager = Depends(get_weather_state_manager),
    settings: Settings = Depends(get_settings),
):
    """Render the weather tile fragment.

    With ``city`` it runs a search (the search form and Enter key), with
    ``lat``/``lon`` a coordinate lookup (browser geolocation), and with
    neither it just renders the current state.
    """
    if city is not None:
        state = await widget_service.search_city(client, manager, city, settings)
    elif lat is not None and lon is not None:
        state = await widget_service.search_coords(client, manager, lat, lon, settings)
    else:
        state = await manager.get_state()

    return TemplateRenderer.render_weather_tile(request, state, city or "")

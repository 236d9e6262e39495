"""Template rendering utilities for HTML views."""

from pathlib import Path
from typing import Any

from fastapi import Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from weather_widget.models.state import Failed, Loaded, Loading, RequestState
from weather_widget.services.theme_classifier import theme_for_state

TEMPLATES_DIR = Path(__file__).parent.parent / "templates"
templates = Jinja2Templates(directory=TEMPLATES_DIR)


def build_widget_context(state: RequestState, city: str = "") -> dict[str, Any]:
    """Prepare the template context for a widget state.

    The theme is derived here on every render, never stored, so a page
    rendered after sunset turns to night without a new fetch.
    """
    return {
        "theme": theme_for_state(state).value,
        "city": city,
        "loading": isinstance(state, Loading),
        "error": state.message if isinstance(state, Failed) else None,
        "weather": state.snapshot if isinstance(state, Loaded) else None,
    }


class TemplateRenderer:
    """Handles rendering of Jinja2 templates for the widget views."""

    @staticmethod
    def render_index(request: Request, state: RequestState) -> HTMLResponse:
        """Render the full widget page."""
        return templates.TemplateResponse(request, "index.html", build_widget_context(state))

    @staticmethod
    def render_weather_tile(request: Request, state: RequestState, city: str = "") -> HTMLResponse:
        """Render the weather tile fragment.

        Args:
            request: FastAPI request object
            state: Widget state to show
            city: Text to keep in the search box

        Returns:
            HTMLResponse with rendered weather tile
        """
        return templates.TemplateResponse(request, "tiles/weather.html", build_widget_context(state, city))

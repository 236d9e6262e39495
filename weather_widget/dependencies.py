"""FastAPI dependencies for dependency injection."""

import httpx
from fastapi import Depends, Request

from weather_widget.state_managers import WeatherStateManager, WidgetSessionRegistry


async def get_http_client(request: Request) -> httpx.AsyncClient:
    """
    Get the shared HTTP client from app state.

    Args:
        request: The FastAPI request object.

    Returns:
        The shared AsyncClient instance.

    Raises:
        RuntimeError: If HTTP client is not initialized.
    """
    client: httpx.AsyncClient | None = getattr(request.app.state, "http_client", None)

    if client is None:
        raise RuntimeError("HTTP client not initialized. This should never happen.")

    return client


async def get_session_registry(request: Request) -> WidgetSessionRegistry:
    """
    Get the widget session registry from app state.

    Args:
        request: The FastAPI request object.

    Returns:
        The shared WidgetSessionRegistry instance.

    Raises:
        RuntimeError: If the registry is not initialized.
    """
    registry: WidgetSessionRegistry | None = getattr(request.app.state, "session_registry", None)

    if registry is None:
        raise RuntimeError("Widget session registry not initialized.")

    return registry


async def get_weather_state_manager(
    request: Request,
    registry: WidgetSessionRegistry = Depends(get_session_registry),
) -> WeatherStateManager:
    """Get the weather state manager for the caller's widget session.

    Raises:
        RuntimeError: If the session middleware did not run for this request.
    """
    session_id: str | None = getattr(request.state, "session_id", None)

    if session_id is None:
        raise RuntimeError("Widget session not assigned.")

    return await registry.get_manager(session_id)

"""Fetch lifecycle for the weather widget.

Each search moves its session's state to Loading, runs one lookup and commits
the outcome. Errors are turned into a Failed state here and go no further.
"""

import httpx

from weather_widget.config import Settings
from weather_widget.exceptions import (
    CITY_NOT_FOUND_MESSAGE,
    COORDS_FETCH_FAILED_MESSAGE,
    CityValidationException,
    WeatherFetchException,
)
from weather_widget.logging_config import get_logger, log_with_context
from weather_widget.models.state import Failed, FetchResult, Loading, RequestState, settled_state
from weather_widget.services import weather_service
from weather_widget.state_managers import WeatherStateManager

logger = get_logger(__name__)


async def search_city(
    client: httpx.AsyncClient,
    manager: WeatherStateManager,
    city: str,
    settings: Settings | None = None,
) -> RequestState:
    """Look up weather for a city and update the widget state.

    An empty city name fails locally without entering Loading.

    Returns:
        The state to show once the lookup has finished
    """
    if not city.strip():
        await manager.reject(CityValidationException().message)
        return await manager.get_state()

    token = await manager.begin_fetch()
    log_with_context(
        logger,
        "info",
        "Weather search started",
        city=city.strip(),
        token=token,
        event_type="weather_search_started",
    )

    result: FetchResult
    try:
        result = await weather_service.fetch_by_city(client, city, settings)
    except WeatherFetchException as e:
        result = Failed(message=e.message)
    except Exception as e:
        _log_unexpected_error(e)
        result = Failed(message=CITY_NOT_FOUND_MESSAGE)

    return await _commit(manager, token, result)


async def search_coords(
    client: httpx.AsyncClient,
    manager: WeatherStateManager,
    lat: float,
    lon: float,
    settings: Settings | None = None,
) -> RequestState:
    """Look up weather for coordinates and update the widget state.

    Returns:
        The state to show once the lookup has finished
    """
    token = await manager.begin_fetch()
    log_with_context(
        logger,
        "info",
        "Weather lookup by coordinates started",
        lat=lat,
        lon=lon,
        token=token,
        event_type="weather_coords_started",
    )

    result: FetchResult
    try:
        result = await weather_service.fetch_by_coords(client, lat, lon, settings)
    except WeatherFetchException as e:
        result = Failed(message=e.message)
    except Exception as e:
        _log_unexpected_error(e)
        result = Failed(message=COORDS_FETCH_FAILED_MESSAGE)

    return await _commit(manager, token, result)


async def _commit(manager: WeatherStateManager, token: int, result: FetchResult) -> RequestState:
    """Commit a finished fetch and pick the state to show its caller.

    A superseded fetch shows the newer request's outcome once that has
    settled. While the newer request is still in flight the caller gets its
    own outcome instead, never a Loading it has no way to leave.
    """
    committed = await manager.complete_fetch(token, result)
    state = await manager.get_state()
    if not committed and isinstance(state, Loading):
        return settled_state(result)
    return state


def _log_unexpected_error(error: Exception) -> None:
    log_with_context(
        logger,
        "error",
        "Unexpected error during weather lookup",
        error=str(error),
        error_type=type(error).__name__,
        event_type="weather_unexpected_error",
    )

"""Weather service for OpenWeatherMap API integration."""

import httpx

from weather_widget.config import Settings, get_settings
from weather_widget.exceptions import (
    CITY_NOT_FOUND_MESSAGE,
    COORDS_FETCH_FAILED_MESSAGE,
    CityValidationException,
    WeatherFetchException,
)
from weather_widget.logging_config import get_logger, log_with_context
from weather_widget.middleware.logging_middleware import redact_sensitive_data
from weather_widget.models.weather import CurrentWeather, WeatherSnapshot

UNITS = "metric"

logger = get_logger(__name__)


async def fetch_by_city(client: httpx.AsyncClient, name: str, settings: Settings | None = None) -> WeatherSnapshot:
    """Get current weather for a city name.

    Args:
        client: Shared HTTP client for making requests
        name: City name as typed by the user
        settings: Settings instance (defaults to singleton)

    Returns:
        WeatherSnapshot for the city

    Raises:
        CityValidationException: If the name is empty after trimming (no request is made)
        WeatherFetchException: If the lookup fails for any reason
    """
    city = name.strip()
    if not city:
        raise CityValidationException()

    return await _fetch_weather(client, {"q": city}, CITY_NOT_FOUND_MESSAGE, settings)


async def fetch_by_coords(
    client: httpx.AsyncClient,
    lat: float,
    lon: float,
    settings: Settings | None = None,
) -> WeatherSnapshot:
    """Get current weather for a latitude/longitude pair.

    Raises:
        WeatherFetchException: If the lookup fails for any reason
    """
    return await _fetch_weather(client, {"lat": str(lat), "lon": str(lon)}, COORDS_FETCH_FAILED_MESSAGE, settings)


async def _fetch_weather(
    client: httpx.AsyncClient,
    query: dict[str, str],
    failure_message: str,
    settings: Settings | None,
) -> WeatherSnapshot:
    """Issue one current-weather request and parse it.

    Every failure is reported with the same user-facing ``failure_message``;
    the upstream detail only goes to the logs and the exception details.
    """
    if settings is None:
        settings = get_settings()

    params: dict[str, str] = {
        **query,
        "appid": settings.weather_api_key,
        "units": UNITS,
    }

    try:
        response = await client.get(settings.weather_api_url, params=params)
        response.raise_for_status()
        data = response.json()

        # Validate and parse into Pydantic model
        current_weather = CurrentWeather.model_validate(data)
        return WeatherSnapshot.from_openweather(current_weather)

    except httpx.HTTPStatusError as e:
        upstream_status = e.response.status_code
        _log_fetch_failure("http_status", query, upstream_status=upstream_status)
        raise WeatherFetchException(
            failure_message,
            details={"error_type": "http_status", "upstream_status": upstream_status},
        ) from e
    except httpx.HTTPError as e:
        _log_fetch_failure("network_error", query, error=redact_sensitive_data(str(e)))
        raise WeatherFetchException(
            failure_message,
            details={"error_type": "network_error"},
        ) from e
    except ValueError as e:
        # Non-JSON body, or a payload that does not match CurrentWeather
        _log_fetch_failure("parsing_error", query, error=str(e)[:300])
        raise WeatherFetchException(
            failure_message,
            details={"error_type": "parsing_error"},
        ) from e


def _log_fetch_failure(error_type: str, query: dict[str, str], **fields) -> None:
    log_with_context(
        logger,
        "warning",
        "Weather lookup failed",
        error_type=error_type,
        query=query,
        event_type="weather_fetch_error",
        **fields,
    )

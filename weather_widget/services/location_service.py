"""Location resolution for the weather widget.

The resolver asks a LocationProvider for the user's position once. A denied
or unknown position is not an error for the user: the widget just stays
idle and waits for a manual search.
"""

import asyncio

import httpx

from weather_widget.config import Settings, get_settings
from weather_widget.exceptions import LocationUnavailableException
from weather_widget.logging_config import get_logger, log_with_context
from weather_widget.models.state import RequestState
from weather_widget.protocols import Coordinates, LocationProvider
from weather_widget.services import widget_service
from weather_widget.state_managers import WeatherStateManager

logger = get_logger(__name__)


class ConfiguredLocationProvider:
    """Provides the default location from settings.

    This is the server's stand-in for a geolocation prompt: with no default
    location configured, the position is unavailable.
    """

    def __init__(self, settings: Settings | None = None):
        self._settings = settings or get_settings()

    async def get_position(self) -> Coordinates:
        """Return the configured default coordinates.

        Raises:
            LocationUnavailableException: If no complete default location is configured
        """
        if not self._settings.has_default_location:
            raise LocationUnavailableException(details={"reason": "no_default_location"})
        return Coordinates(self._settings.default_latitude, self._settings.default_longitude)


class LocationResolver:
    """Resolves the user's location once and loads the weather for it."""

    def __init__(
        self,
        provider: LocationProvider,
        client: httpx.AsyncClient,
        manager: WeatherStateManager,
        settings: Settings | None = None,
    ):
        self._provider = provider
        self._client = client
        self._manager = manager
        self._settings = settings
        self._attempted = False
        self._lock = asyncio.Lock()

    @property
    def attempted(self) -> bool:
        """Whether the provider has already been asked."""
        return self._attempted

    async def resolve_once(self) -> RequestState | None:
        """Ask for the location and, if granted, fetch its weather.

        Only the first call reaches the provider; later calls return None.

        Returns:
            State after the coordinate lookup, or None if nothing was fetched
        """
        async with self._lock:
            if self._attempted:
                return None
            self._attempted = True

        try:
            position = await self._provider.get_position()
        except LocationUnavailableException as e:
            log_with_context(
                logger,
                "debug",
                e.message,
                reason=e.details.get("reason"),
                event_type="location_denied",
            )
            return None

        log_with_context(
            logger,
            "info",
            "Location resolved",
            lat=position.latitude,
            lon=position.longitude,
            event_type="location_resolved",
        )
        return await widget_service.search_coords(
            self._client,
            self._manager,
            position.latitude,
            position.longitude,
            self._settings,
        )

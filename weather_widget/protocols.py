"""Protocol definitions for dependency injection."""

from typing import NamedTuple, Protocol


class Coordinates(NamedTuple):
    """A latitude/longitude pair in decimal degrees."""

    latitude: float
    longitude: float


class LocationProvider(Protocol):
    """Protocol for sources of the user's current position.

    Implementations stand in for the host's geolocation capability,
    allowing the resolver to be tested without one.
    """

    async def get_position(self) -> Coordinates:
        """Return the current coordinates.

        Raises:
            LocationUnavailableException: If the position is denied or unknown
        """
        ...

"""Weather widget models"""

from weather_widget.models.state import Failed, FetchResult, Idle, Loaded, Loading, RequestState, settled_state
from weather_widget.models.weather import CurrentWeather, WeatherSnapshot

__all__ = [
    "CurrentWeather",
    "WeatherSnapshot",
    "Idle",
    "Loading",
    "Loaded",
    "Failed",
    "FetchResult",
    "RequestState",
    "settled_state",
]

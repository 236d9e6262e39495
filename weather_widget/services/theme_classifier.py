"""Background theme classification for weather snapshots."""

from datetime import datetime
from enum import Enum

from weather_widget.models.state import Loaded, RequestState
from weather_widget.models.weather import WeatherSnapshot


class Theme(str, Enum):
    """Display themes, used as the CSS class of the widget container."""

    DEFAULT = "default"
    NIGHT = "night"
    CLEAR = "clear"
    CLOUDY = "cloudy"
    RAINY = "rainy"
    STORMY = "stormy"
    SNOWY = "snowy"
    FOGGY = "foggy"


# Order matters: conditions are not mutually exclusive, first match wins.
# "thunderstorm with rain" therefore resolves to RAINY.
CONDITION_THEMES: list[tuple[Theme, tuple[str, ...]]] = [
    (Theme.CLEAR, ("clear",)),
    (Theme.CLOUDY, ("cloud",)),
    (Theme.RAINY, ("rain", "drizzle")),
    (Theme.STORMY, ("thunder",)),
    (Theme.SNOWY, ("snow",)),
    (Theme.FOGGY, ("mist", "fog", "haze", "smoke")),
]


def _epoch_seconds(now: datetime | float | None) -> float:
    if now is None:
        return datetime.now().timestamp()
    if isinstance(now, datetime):
        return now.timestamp()
    return float(now)


def is_night(snapshot: WeatherSnapshot, now: datetime | float | None = None) -> bool:
    """True when ``now`` falls outside the snapshot's sunrise-sunset window."""
    current = _epoch_seconds(now)
    return current < snapshot.sunrise or current > snapshot.sunset


def classify(snapshot: WeatherSnapshot, now: datetime | float | None = None) -> Theme:
    """Map a weather snapshot to a display theme.

    Night takes precedence over every weather condition. Otherwise the
    lowercased primary condition is matched against CONDITION_THEMES.

    Args:
        snapshot: Weather to classify
        now: Current instant as epoch seconds or datetime (defaults to now)

    Returns:
        The first matching Theme, or Theme.DEFAULT
    """
    if is_night(snapshot, now):
        return Theme.NIGHT

    condition = snapshot.condition.lower()
    for theme, keywords in CONDITION_THEMES:
        if any(keyword in condition for keyword in keywords):
            return theme

    return Theme.DEFAULT


def theme_for_state(state: RequestState, now: datetime | float | None = None) -> Theme:
    """Theme for whatever the widget currently shows; DEFAULT unless weather is loaded."""
    if isinstance(state, Loaded):
        return classify(state.snapshot, now)
    return Theme.DEFAULT

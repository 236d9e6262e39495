"""Pydantic models for weather data."""

import math

from pydantic import BaseModel, ConfigDict, Field

from weather_widget.config import OPENWEATHER_ICON_URL


class WeatherInfo(BaseModel):
    """Weather condition info from OpenWeatherMap."""

    id: int
    main: str
    description: str
    icon: str


class MainInfo(BaseModel):
    """Main weather metrics from OpenWeatherMap."""

    temp: float
    feels_like: float
    humidity: int


class WindInfo(BaseModel):
    """Wind information from OpenWeatherMap."""

    speed: float


class SysInfo(BaseModel):
    """Country and daylight window from OpenWeatherMap."""

    country: str
    sunrise: int
    sunset: int


class CurrentWeather(BaseModel):
    """Raw OpenWeatherMap current weather response.

    Only the fields the widget reads are declared; anything else in the
    payload is ignored.
    """

    name: str
    sys: SysInfo
    main: MainInfo
    wind: WindInfo
    weather: list[WeatherInfo] = Field(min_length=1)


def round_half_up(value: float) -> int:
    """Round to the nearest whole number, halves rounded up."""
    return math.floor(value + 0.5)


class WeatherSnapshot(BaseModel):
    """A single fetched weather result.

    Frozen: a new fetch replaces the snapshot, it is never patched.
    """

    model_config = ConfigDict(frozen=True)

    location: str
    country: str
    temp: float
    feels_like: float
    humidity: int
    wind_speed: float
    condition: str
    condition_id: int
    icon: str
    description: str
    sunrise: int = Field(description="Sunrise as epoch seconds")
    sunset: int = Field(description="Sunset as epoch seconds")

    @property
    def icon_url(self) -> str:
        """Get OpenWeatherMap icon URL from icon code."""
        return OPENWEATHER_ICON_URL.format(icon=self.icon)

    @property
    def temp_display(self) -> int:
        """Temperature rounded to whole degrees for display."""
        return round_half_up(self.temp)

    @property
    def feels_like_display(self) -> int:
        """Feels-like temperature rounded to whole degrees for display."""
        return round_half_up(self.feels_like)

    @classmethod
    def from_openweather(cls, data: CurrentWeather) -> "WeatherSnapshot":
        """Create WeatherSnapshot from OpenWeatherMap data.

        The first entry of ``weather`` is the primary condition.
        """
        primary = data.weather[0]
        return cls(
            location=data.name,
            country=data.sys.country,
            temp=data.main.temp,
            feels_like=data.main.feels_like,
            humidity=data.main.humidity,
            wind_speed=data.wind.speed,
            condition=primary.main,
            condition_id=primary.id,
            icon=primary.icon,
            description=primary.description,
            sunrise=data.sys.sunrise,
            sunset=data.sys.sunset,
        )

from pathlib import Path

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from weather_widget.logging_config import get_logger, log_with_context

logger = get_logger(__name__)

BASE_DIR = Path(__file__).resolve().parent.parent  # weather-widget/

OPENWEATHER_URL = "https://api.openweathermap.org/data/2.5/weather"
OPENWEATHER_ICON_URL = "https://openweathermap.org/img/wn/{icon}@4x.png"


class Settings(BaseSettings):
    """Application settings with validation.

    Nothing is strictly required: a missing weather API key is not checked here
    and simply makes every upstream request fail with the generic fetch error.

    Uses Pydantic v2 API:
    - model_config with SettingsConfigDict
    - @field_validator / @model_validator decorators
    """

    # API server settings
    api_host: str = Field(default="127.0.0.1", min_length=1, description="API server host (e.g., '0.0.0.0')")
    api_port: int = Field(ge=1, le=65535, default=8000, description="API server port")
    trusted_hosts: str = Field(
        default="localhost,127.0.0.1,testserver",
        description="Comma-separated host patterns accepted by TrustedHostMiddleware",
    )

    # Weather provider
    weather_api_key: str = Field(default="", repr=False, description="OpenWeatherMap API key")
    weather_api_url: str = Field(default=OPENWEATHER_URL, pattern=r"^https?://", description="Current weather endpoint")

    # Server-side location used by the startup location resolver
    default_latitude: float | None = Field(default=None, ge=-90, le=90, description="Latitude of the default location")
    default_longitude: float | None = Field(
        default=None, ge=-180, le=180, description="Longitude of the default location"
    )
    resolve_location_on_startup: bool = Field(
        default=True,
        description="Look up the default location once when the app starts",
    )

    # Widget sessions (one state per browser)
    max_sessions: int = Field(
        default=1000,
        ge=1,
        description="Widget sessions kept before the least recently used is dropped",
    )

    model_config = SettingsConfigDict(
        env_file=Path(BASE_DIR / ".env"),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        validate_default=True,
    )

    @field_validator("api_host", mode="after")
    @classmethod
    def validate_api_host(cls, v: str) -> str:
        """Ensure api_host is not empty or whitespace."""
        v = v.strip()
        if not v:
            raise ValueError("api_host cannot be empty")
        return v

    @model_validator(mode="after")
    def warn_on_partial_location(self) -> "Settings":
        """A default location needs both coordinates; one alone is ignored."""
        if (self.default_latitude is None) != (self.default_longitude is None):
            log_with_context(
                logger,
                "warning",
                "Only one default coordinate configured, startup location lookup disabled",
                default_latitude=self.default_latitude,
                default_longitude=self.default_longitude,
                event_type="config_partial_location",
            )
        return self

    @property
    def has_default_location(self) -> bool:
        """True when both default coordinates are configured."""
        return self.default_latitude is not None and self.default_longitude is not None


# Singleton settings instance (cached for performance)
_settings_instance: Settings | None = None


def get_settings() -> Settings:
    """Get singleton Settings instance for dependency injection.

    Creates the instance on first use to avoid re-reading the .env file
    on every request. Use this with FastAPI's Depends().

    Returns:
        Cached Settings instance
    """
    global _settings_instance
    if _settings_instance is None:
        _settings_instance = Settings()
    return _settings_instance

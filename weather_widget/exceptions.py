"""Custom exceptions for the weather widget with proper HTTP status codes."""

from enum import Enum
from typing import Any

CITY_REQUIRED_MESSAGE = "Please enter a city name"
CITY_NOT_FOUND_MESSAGE = "City not found"
COORDS_FETCH_FAILED_MESSAGE = "Unable to fetch weather"
LOCATION_DENIED_MESSAGE = "Location access denied"


class ErrorCode(str, Enum):
    """Error codes for structured error responses."""

    # Generic errors
    WIDGET_ERROR = "WIDGET_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"
    VALIDATION_ERROR = "VALIDATION_ERROR"

    # Weather errors
    WEATHER_FETCH_ERROR = "WEATHER_FETCH_ERROR"

    # Location errors
    LOCATION_UNAVAILABLE = "LOCATION_UNAVAILABLE"


class WidgetException(Exception):
    """Base exception for widget errors with HTTP status code support.

    All custom exceptions inherit from this class so the exception handlers
    can turn them into consistent JSON error responses.
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.WIDGET_ERROR,
        status_code: int = 500,
        details: dict[str, Any] | None = None,
    ):
        """Initialize widget exception.

        Args:
            message: Human-readable error message, safe to show to the user
            code: Error code from ErrorCode enum
            status_code: HTTP status code (default 500)
            details: Additional error context/details
        """
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details or {}
        super().__init__(message)


class CityValidationException(WidgetException):
    """City name missing from a manual search. Raised before any network call."""

    def __init__(self, message: str = CITY_REQUIRED_MESSAGE, details: dict[str, Any] | None = None):
        super().__init__(
            message,
            code=ErrorCode.VALIDATION_ERROR,
            status_code=400,
            details=details,
        )


class WeatherFetchException(WidgetException):
    """Weather lookup failed: bad status, transport error or unexpected payload."""

    def __init__(self, message: str, status_code: int = 502, details: dict[str, Any] | None = None):
        super().__init__(
            message,
            code=ErrorCode.WEATHER_FETCH_ERROR,
            status_code=status_code,
            details=details,
        )


class LocationUnavailableException(WidgetException):
    """The host could not or would not provide coordinates."""

    def __init__(self, message: str = LOCATION_DENIED_MESSAGE, details: dict[str, Any] | None = None):
        super().__init__(
            message,
            code=ErrorCode.LOCATION_UNAVAILABLE,
            status_code=503,
            details=details,
        )

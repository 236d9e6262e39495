"""Tests for weather models and their properties."""

import pytest
from pydantic import ValidationError

from tests.factories import make_snapshot, make_weather_payload
from weather_widget.models.weather import CurrentWeather, WeatherSnapshot, round_half_up


class TestWeatherSnapshot:
    """Tests for WeatherSnapshot."""

    def test_from_openweather_uses_primary_condition(self):
        """Test the first weather entry is the primary condition."""
        payload = make_weather_payload(main="Rain", condition_id=500)
        payload["weather"].append({"id": 701, "main": "Mist", "description": "mist", "icon": "50d"})

        snapshot = WeatherSnapshot.from_openweather(CurrentWeather.model_validate(payload))

        assert snapshot.condition == "Rain"
        assert snapshot.condition_id == 500
        assert snapshot.description == "rain"

    def test_icon_url(self):
        """Test icon URL uses the large provider icon."""
        assert make_snapshot().icon_url == "https://openweathermap.org/img/wn/01d@4x.png"

    def test_display_temperatures_are_rounded(self):
        """Test display temperatures are whole degrees."""
        snapshot = make_snapshot()

        assert snapshot.temp_display == 19
        assert snapshot.feels_like_display == 17

    def test_snapshot_is_frozen(self):
        """Test snapshots cannot be modified after creation."""
        snapshot = make_snapshot()

        with pytest.raises(ValidationError):
            snapshot.location = "Berlin"

    def test_empty_weather_list_rejected(self):
        """Test a payload without a condition is a shape error."""
        payload = {**make_weather_payload(), "weather": []}

        with pytest.raises(ValidationError):
            CurrentWeather.model_validate(payload)


@pytest.mark.parametrize(
    ("value", "expected"),
    [(18.5, 19), (17.4, 17), (-0.5, 0), (-1.5, -1), (-1.6, -2), (0.0, 0)],
)
def test_round_half_up(value, expected):
    """Test halves round towards positive infinity."""
    assert round_half_up(value) == expected

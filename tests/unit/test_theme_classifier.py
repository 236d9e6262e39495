"""Tests for the weather theme classifier."""

from datetime import UTC, datetime

import pytest

from tests.factories import MIDDAY, SUNRISE, SUNSET, make_snapshot
from weather_widget.models.state import Failed, Idle, Loaded, Loading
from weather_widget.services.theme_classifier import Theme, classify, is_night, theme_for_state


class TestNight:
    """Night takes precedence over every condition."""

    @pytest.mark.parametrize("now", [SUNRISE - 1, SUNSET + 1, 0, 10_000])
    @pytest.mark.parametrize("condition", ["Clear", "Rain", "Thunderstorm", "Snow", "Mist", "Tornado"])
    def test_outside_daylight_is_night(self, now, condition):
        """Test any condition before sunrise or after sunset gives night."""
        assert classify(make_snapshot(condition), now) == Theme.NIGHT

    def test_sunrise_and_sunset_are_daytime(self):
        """Test the window boundaries themselves count as day."""
        snapshot = make_snapshot("Clear")

        assert classify(snapshot, SUNRISE) == Theme.CLEAR
        assert classify(snapshot, SUNSET) == Theme.CLEAR

    def test_accepts_datetime(self):
        """Test now can be given as an aware datetime."""
        snapshot = make_snapshot("Clear")

        assert is_night(snapshot, datetime.fromtimestamp(SUNSET + 60, tz=UTC))
        assert not is_night(snapshot, datetime.fromtimestamp(MIDDAY, tz=UTC))

    def test_defaults_to_current_time(self):
        """Test omitting now uses the clock; epoch 1000-2000 is long past."""
        assert classify(make_snapshot("Clear")) == Theme.NIGHT


class TestConditions:
    """Daytime condition matching."""

    @pytest.mark.parametrize(
        ("condition", "expected"),
        [
            ("Clear", Theme.CLEAR),
            ("Clouds", Theme.CLOUDY),
            ("Rain", Theme.RAINY),
            ("Drizzle", Theme.RAINY),
            ("Thunderstorm", Theme.STORMY),
            ("Snow", Theme.SNOWY),
            ("Mist", Theme.FOGGY),
            ("Fog", Theme.FOGGY),
            ("Haze", Theme.FOGGY),
            ("Smoke", Theme.FOGGY),
        ],
    )
    def test_condition_themes(self, condition, expected):
        """Test each OpenWeatherMap main condition maps to its theme."""
        assert classify(make_snapshot(condition), MIDDAY) == expected

    def test_case_insensitive(self):
        """Test matching ignores case."""
        assert classify(make_snapshot("HEAVY RAIN"), MIDDAY) == Theme.RAINY

    def test_rain_checked_before_thunder(self):
        """Test a condition with both rain and thunder resolves to rainy."""
        assert classify(make_snapshot("Thunderstorm with rain"), MIDDAY) == Theme.RAINY

    def test_clear_checked_before_cloud(self):
        """Test the first listed theme wins when several keywords match."""
        assert classify(make_snapshot("Clearing clouds"), MIDDAY) == Theme.CLEAR

    @pytest.mark.parametrize("condition", ["Dust", "Sand", "Ash", "Squall", "Tornado", ""])
    def test_unmatched_is_default(self, condition):
        """Test conditions without a theme fall back to default."""
        assert classify(make_snapshot(condition), MIDDAY) == Theme.DEFAULT


class TestThemeForState:
    """Theme derived from the widget state."""

    @pytest.mark.parametrize("state", [Idle(), Loading(), Failed(message="City not found")])
    def test_non_loaded_states_are_default(self, state):
        """Test only loaded weather produces a weather theme."""
        assert theme_for_state(state, MIDDAY) == Theme.DEFAULT

    def test_loaded_state_uses_snapshot(self):
        """Test a loaded state is classified from its snapshot."""
        state = Loaded(snapshot=make_snapshot("Snow"))

        assert theme_for_state(state, MIDDAY) == Theme.SNOWY
        assert theme_for_state(state, SUNSET + 1) == Theme.NIGHT

"""
Unit tests for the weather to outfit mood rules.

Tests cover:
- Each rule of the ordered decision list
- Rule precedence (cold temperatures beat conditions)
- Boundary temperatures
- Case-insensitive condition matching
- Out-of-range temperatures only logging a warning
"""

import pytest
from structlog.testing import capture_logs

from api.src.models.weather import WeatherRequest
from api.src.services.weather_mood_service import WeatherMoodService, equals_ignore_case


@pytest.fixture
def service() -> WeatherMoodService:
    return WeatherMoodService()


def mood(service: WeatherMoodService, temperature: int, condition: str) -> str:
    return service.determine_outfit_mood(
        WeatherRequest(temperature=temperature, condition=condition)
    )


# ============================================================================
# RULE TESTS
# ============================================================================


class TestDecisionRules:
    """Test each outfit mood rule."""

    def test_cold_temperature_is_cozy_and_warm(self, service):
        """Temperatures below 10 call for cozy and warm outfits."""
        assert mood(service, 5, "clear") == "cozy and warm"

    def test_rainy_condition(self, service):
        """Rain wins over the mild temperature range."""
        assert mood(service, 15, "rainy") == "rainy day outfit"

    def test_snowy_condition(self, service):
        """Snow wins over the mild temperature range."""
        assert mood(service, 12, "snowy") == "snow appropriate"

    def test_mild_temperature_is_casual(self, service):
        """Temperatures from 10 to 20 are casual."""
        assert mood(service, 15, "sunny") == "casual"

    def test_warm_temperature_is_light_and_breezy(self, service):
        """Warm but not hot temperatures are light and breezy."""
        assert mood(service, 25, "clear") == "light and breezy"

    def test_extreme_cold(self, service):
        """Temperatures below -10 need extreme winter protection."""
        assert mood(service, -15, "clear") == "extreme winter protection"

    def test_extreme_heat(self, service):
        """Temperatures above 35 call for minimal and cooling outfits."""
        assert mood(service, 40, "sunny") == "minimal and cooling"


class TestRulePrecedence:
    """Test that rule order decides overlapping inputs."""

    @pytest.mark.parametrize("condition", ["rainy", "snowy", "sunny", "RAINY"])
    @pytest.mark.parametrize("temperature", [-50, -30, -11])
    def test_extreme_cold_ignores_condition(self, service, temperature, condition):
        """Below -10 the condition never matters."""
        assert mood(service, temperature, condition) == "extreme winter protection"

    @pytest.mark.parametrize("condition", ["rainy", "snowy", "sunny"])
    @pytest.mark.parametrize("temperature", [-10, 0, 9])
    def test_cold_ignores_condition(self, service, temperature, condition):
        """From -10 up to 9 the condition never matters."""
        assert mood(service, temperature, condition) == "cozy and warm"

    def test_rain_beats_extreme_heat(self, service):
        """Condition rules come before the heat rule."""
        assert mood(service, 40, "rainy") == "rainy day outfit"


class TestBoundaries:
    """Test threshold edges."""

    def test_ten_degrees_is_casual(self, service):
        """10 is not cold, it falls through to the casual range."""
        assert mood(service, 10, "sunny") == "casual"

    def test_twenty_degrees_is_casual(self, service):
        assert mood(service, 20, "sunny") == "casual"

    def test_twenty_one_degrees_is_light_and_breezy(self, service):
        assert mood(service, 21, "sunny") == "light and breezy"

    def test_thirty_five_degrees_is_light_and_breezy(self, service):
        """Heat rule is strictly greater than 35."""
        assert mood(service, 35, "sunny") == "light and breezy"

    def test_thirty_six_degrees_is_minimal_and_cooling(self, service):
        assert mood(service, 36, "sunny") == "minimal and cooling"


class TestConditionMatching:
    """Test condition comparison."""

    @pytest.mark.parametrize("condition", ["rainy", "RAINY", "Rainy", "rAiNy"])
    def test_rainy_is_case_insensitive(self, service, condition):
        assert mood(service, 15, condition) == "rainy day outfit"

    @pytest.mark.parametrize("condition", ["SNOWY", "Snowy"])
    def test_snowy_is_case_insensitive(self, service, condition):
        assert mood(service, 15, condition) == "snow appropriate"

    def test_unknown_condition_uses_temperature(self, service):
        assert mood(service, 15, "foggy") == "casual"

    def test_dotted_capital_i_matches_rainy(self, service):
        assert mood(service, 15, "RA\u0130NY") == "rainy day outfit"

    def test_long_s_matches_snowy(self, service):
        assert mood(service, 15, "\u017fnowy") == "snow appropriate"

    @pytest.mark.parametrize("condition", ["rain", "rainy ", "rainyy", "sleet"])
    def test_near_misses_do_not_match(self, service, condition):
        assert mood(service, 15, condition) == "casual"


class TestEqualsIgnoreCase:
    """Test the character-wise case-insensitive comparison."""

    @pytest.mark.parametrize(
        "left, right",
        [
            ("rainy", "RAINY"),
            ("RA\u0130NY", "rainy"),
            ("\u017fnowy", "SNOWY"),
            ("", ""),
        ]
    )
    def test_matches(self, left, right):
        assert equals_ignore_case(left, right)

    @pytest.mark.parametrize(
        "left, right",
        [
            ("rainy", "rain"),
            ("stra\u00dfe", "STRASSE"),
            ("snowy", "slowy"),
        ]
    )
    def test_mismatches(self, left, right):
        assert not equals_ignore_case(left, right)


class TestTemperatureRangeCheck:
    """Test the plausibility check on temperatures."""

    def test_out_of_range_logs_warning_without_changing_result(self, service):
        """Implausible temperatures are still answered."""
        with capture_logs() as logs:
            result = mood(service, 60, "sunny")

        assert result == "minimal and cooling"
        assert any(
            entry["event"] == "extreme_temperature_detected" and entry["temperature"] == 60
            for entry in logs
        )

    def test_very_low_temperature_still_answered(self, service):
        with capture_logs() as logs:
            result = mood(service, -100, "rainy")

        assert result == "extreme winter protection"
        assert any(entry["event"] == "extreme_temperature_detected" for entry in logs)

    def test_in_range_does_not_warn(self, service):
        with capture_logs() as logs:
            mood(service, 50, "sunny")

        assert not any(entry["event"] == "extreme_temperature_detected" for entry in logs)

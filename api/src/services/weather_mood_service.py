"""
Weather to outfit mood translation.

The rules are evaluated in order and the first match wins. Cold
temperatures are checked before conditions, so a rainy day at -15 still
calls for extreme winter protection.
"""

import structlog

from api.src.models.weather import WeatherRequest

logger = structlog.get_logger(__name__)

EXTREME_COLD_THRESHOLD = -10
COLD_THRESHOLD = 10
MILD_THRESHOLD = 20
EXTREME_HEAT_THRESHOLD = 35

# Plausible range; values outside are logged but still answered.
MIN_PLAUSIBLE_TEMPERATURE = -50
MAX_PLAUSIBLE_TEMPERATURE = 50


def _simple_upper(char: str) -> str:
    upper = char.upper()
    return upper if len(upper) == 1 else char


def _simple_lower(char: str) -> str:
    # U+0130 is the only character whose lowercase expands; its simple form is "i"
    return char.lower()[0]


def equals_ignore_case(left: str, right: str) -> bool:
    """
    Compare two strings ignoring case, one character at a time.

    Characters match when equal, when their uppercase forms are equal, or
    when the lowercase forms of those uppercase forms are equal. Unlike
    ``str.lower()`` this never changes string length, so "RA\u0130NY" still
    matches "rainy".
    """
    if len(left) != len(right):
        return False

    for a, b in zip(left, right):
        if a == b:
            continue
        upper_a, upper_b = _simple_upper(a), _simple_upper(b)
        if upper_a == upper_b:
            continue
        if _simple_lower(upper_a) != _simple_lower(upper_b):
            return False
    return True


class WeatherMoodService:
    """Service for determining outfit moods based on weather conditions."""

    def determine_outfit_mood(self, weather: WeatherRequest) -> str:
        """
        Determine an outfit mood for the given weather.

        Args:
            weather: Temperature (Celsius) and condition

        Returns:
            One of the fixed outfit mood strings
        """
        temperature = weather.temperature
        condition = weather.condition

        logger.debug("determining_outfit_mood", temperature=temperature, condition=weather.condition)

        self._check_temperature(temperature)

        if temperature < EXTREME_COLD_THRESHOLD:
            return "extreme winter protection"
        if temperature < COLD_THRESHOLD:
            return "cozy and warm"
        if equals_ignore_case(condition, "rainy"):
            return "rainy day outfit"
        if equals_ignore_case(condition, "snowy"):
            return "snow appropriate"
        if COLD_THRESHOLD <= temperature <= MILD_THRESHOLD:
            return "casual"
        if temperature > EXTREME_HEAT_THRESHOLD:
            return "minimal and cooling"
        return "light and breezy"

    def _check_temperature(self, temperature: int) -> None:
        if temperature < MIN_PLAUSIBLE_TEMPERATURE or temperature > MAX_PLAUSIBLE_TEMPERATURE:
            logger.warning("extreme_temperature_detected", temperature=temperature)

"""WMO weather-code lookup used by the Open-Meteo provider."""

from __future__ import annotations

from typing import Dict

from outdoor_insight.domain import ConditionSeverity, WeatherCondition

GOOD = ConditionSeverity.GOOD
MODERATE = ConditionSeverity.MODERATE
BAD = ConditionSeverity.BAD

WEATHER_CODES: Dict[int, WeatherCondition] = {
    0: WeatherCondition(description="Clear sky", severity=GOOD),
    1: WeatherCondition(description="Mainly clear", severity=GOOD),
    2: WeatherCondition(description="Partly cloudy", severity=GOOD),
    3: WeatherCondition(description="Overcast", severity=GOOD),
    45: WeatherCondition(description="Fog", severity=MODERATE),
    48: WeatherCondition(description="Depositing rime fog", severity=MODERATE),
    51: WeatherCondition(description="Light drizzle", severity=MODERATE),
    53: WeatherCondition(description="Moderate drizzle", severity=MODERATE),
    55: WeatherCondition(description="Dense drizzle", severity=BAD),
    56: WeatherCondition(description="Light freezing drizzle", severity=BAD),
    57: WeatherCondition(description="Dense freezing drizzle", severity=BAD),
    61: WeatherCondition(description="Slight rain", severity=MODERATE),
    63: WeatherCondition(description="Moderate rain", severity=BAD),
    65: WeatherCondition(description="Heavy rain", severity=BAD),
    66: WeatherCondition(description="Light freezing rain", severity=BAD),
    67: WeatherCondition(description="Heavy freezing rain", severity=BAD),
    71: WeatherCondition(description="Slight snow", severity=MODERATE),
    73: WeatherCondition(description="Moderate snow", severity=BAD),
    75: WeatherCondition(description="Heavy snow", severity=BAD),
    77: WeatherCondition(description="Snow grains", severity=MODERATE),
    80: WeatherCondition(description="Slight rain showers", severity=MODERATE),
    81: WeatherCondition(description="Moderate rain showers", severity=BAD),
    82: WeatherCondition(description="Violent rain showers", severity=BAD),
    85: WeatherCondition(description="Slight snow showers", severity=MODERATE),
    86: WeatherCondition(description="Heavy snow showers", severity=BAD),
    95: WeatherCondition(description="Thunderstorm", severity=BAD),
    96: WeatherCondition(description="Thunderstorm with slight hail", severity=BAD),
    99: WeatherCondition(description="Thunderstorm with heavy hail", severity=BAD),
}

# Codes missing from the table are not an error; they land in the middle tier.
UNKNOWN_CONDITION = WeatherCondition(description="Unknown", severity=MODERATE)


def classify_weather_code(code: int) -> WeatherCondition:
    """Return the description and severity for a weather code."""
    return WEATHER_CODES.get(code, UNKNOWN_CONDITION)

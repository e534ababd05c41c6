"""Helpers for fetching forecast data from the Open-Meteo API."""
from __future__ import annotations

import math
from typing import Any, Dict, List, Optional

import requests
from pydantic import BaseModel, ConfigDict, ValidationError

from outdoor_insight.errors import InvalidInputError, NetworkError, ParseError
from utils.logging_utils import get_tagged_logger
logger = get_tagged_logger(__name__, tag="open_meteo_client")

# One pooled session per process; no caching or retries on top of it.
session = requests.Session()

OPEN_METEO_WEATHER_URL = "https://api.open-meteo.com/v1/forecast"
DEFAULT_TIMEOUT_SECONDS = 10.0

HOURLY_VARS = [
    "temperature_2m",
    "precipitation_probability",
    "precipitation",
    "weathercode",
    "relativehumidity_2m",
    "apparent_temperature",
    "visibility",
    "uv_index",
]

DAILY_VARS = [
    "temperature_2m_max",
    "temperature_2m_min",
    "precipitation_sum",
    "precipitation_probability_max",
    "sunrise",
    "sunset",
]

EXPECTED_HOURLY_UNITS = {
    "temperature_2m": "°C",
    "precipitation_probability": "%",
    "precipitation": "mm",
    "relativehumidity_2m": "%",
    "apparent_temperature": "°C",
    "visibility": "m",
}

EXPECTED_CURRENT_UNITS = {
    "temperature": "°C",
    "windspeed": "km/h",
}

# Spellings the API uses interchangeably; these do not trigger warnings.
ALLOWED_UNIT_SYNONYMS = {
    "precipitation_probability": {"%", "percent"},
    "relativehumidity_2m": {"%", "percent"},
    "visibility": {"m", "meters"},
    "windspeed": {"km/h", "kmh"},
}


class _ProviderModel(BaseModel):
    """Lenient base for provider payloads: unknown keys are ignored."""

    model_config = ConfigDict(extra="ignore")


class CurrentWeather(_ProviderModel):
    """The `current_weather` block of an Open-Meteo response."""
    time: str
    temperature: float
    windspeed: float
    winddirection: Optional[float] = None
    weathercode: int
    is_day: int


class HourlySeries(_ProviderModel):
    """Parallel hourly arrays, all index-aligned to `time`."""
    time: List[str]
    temperature_2m: List[Optional[float]]
    precipitation_probability: List[Optional[float]]
    precipitation: List[Optional[float]]
    weathercode: List[Optional[int]]
    relativehumidity_2m: List[Optional[float]]
    apparent_temperature: List[Optional[float]]
    visibility: List[Optional[float]]
    uv_index: List[Optional[float]]

    def value_at(self, field: str, index: int) -> Optional[Any]:
        """Return `field[index]`, or None when the slot is missing or null."""
        values = getattr(self, field)
        if 0 <= index < len(values):
            return values[index]
        return None


class DailySeries(_ProviderModel):
    """Parallel daily arrays, all index-aligned to `time`."""
    time: List[str]
    temperature_2m_max: List[Optional[float]]
    temperature_2m_min: List[Optional[float]]
    precipitation_sum: List[Optional[float]]
    precipitation_probability_max: List[Optional[float]]
    sunrise: List[Optional[str]]
    sunset: List[Optional[str]]


class OpenMeteoForecast(_ProviderModel):
    """Raw forecast payload for one coordinate."""
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    timezone: Optional[str] = None
    current_weather: CurrentWeather
    current_weather_units: Dict[str, str] = {}
    hourly: HourlySeries
    hourly_units: Dict[str, str] = {}
    daily: DailySeries
    daily_units: Dict[str, str] = {}


def validate_coordinates(latitude: float, longitude: float) -> None:
    """Raise InvalidInputError unless both coordinates are finite and in range."""
    for name, value, bound in (("latitude", latitude, 90.0), ("longitude", longitude, 180.0)):
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise InvalidInputError(f"{name} must be a number, got {value!r}")
        if not math.isfinite(value) or not -bound <= value <= bound:
            raise InvalidInputError(f"{name} {value} outside [-{bound:g}, {bound:g}]")


def _warn_on_unexpected_units(units: dict, expected_units: dict, *, context: str):
    """Log a warning if Open-Meteo returns units we did not request."""
    if not units:
        return
    for field, expected in expected_units.items():
        actual = units.get(field)
        if not actual or actual == expected:
            continue
        allowed = ALLOWED_UNIT_SYNONYMS.get(field, set())
        if actual not in allowed:
            logger.warning(
                "Unexpected Open-Meteo unit",
                extra={"context": context, "field": field, "unit": actual, "expected": expected},
            )


def _warn_on_ragged_arrays(hourly: HourlySeries):
    """Log when hourly arrays are not the same length as the time axis."""
    n = len(hourly.time)
    for field in HOURLY_VARS:
        length = len(getattr(hourly, field))
        if length != n:
            logger.warning(
                "Hourly array length differs from time axis",
                extra={"field": field, "length": length, "expected": n},
            )


def parse_forecast(data: Any) -> OpenMeteoForecast:
    """Validate a decoded Open-Meteo payload; raise ParseError on missing blocks."""
    if not isinstance(data, dict):
        raise ParseError(f"Expected a JSON object from Open-Meteo, got {type(data).__name__}")
    try:
        forecast = OpenMeteoForecast.model_validate(data)
    except ValidationError as exc:
        missing = [".".join(str(p) for p in err["loc"]) for err in exc.errors()]
        raise ParseError(f"Open-Meteo response missing or malformed fields: {', '.join(missing)}") from exc

    _warn_on_unexpected_units(forecast.current_weather_units, EXPECTED_CURRENT_UNITS, context="current_weather")
    _warn_on_unexpected_units(forecast.hourly_units, EXPECTED_HOURLY_UNITS, context="hourly")
    _warn_on_ragged_arrays(forecast.hourly)
    return forecast


def fetch_forecast(latitude: float,
                   longitude: float,
                   *,
                   timezone: str = "auto",
                   base_url: str = OPEN_METEO_WEATHER_URL,
                   timeout: float = DEFAULT_TIMEOUT_SECONDS,
                   ) -> OpenMeteoForecast:
    """Fetch current, hourly and daily forecast data for the given coordinates."""
    validate_coordinates(latitude, longitude)

    params = {
        "latitude": latitude,
        "longitude": longitude,
        "current_weather": "true",
        "hourly": ",".join(HOURLY_VARS),
        "daily": ",".join(DAILY_VARS),
        "timezone": timezone,
        "temperature_unit": "celsius",
        "wind_speed_unit": "kmh",
        "precipitation_unit": "mm",
    }

    logger.info("Fetching Open-Meteo forecast", extra={"latitude": latitude, "longitude": longitude})
    try:
        resp = session.get(base_url, params=params, timeout=timeout)
        resp.raise_for_status()
    except requests.HTTPError as exc:
        status = exc.response.status_code if exc.response is not None else None
        raise NetworkError(f"Weather API error: {status}", status_code=status, url=base_url) from exc
    except requests.RequestException as exc:
        raise NetworkError(f"Weather API request failed: {exc}", url=base_url) from exc

    # raise_for_status() lets 1xx/3xx through
    if not 200 <= resp.status_code < 300:
        raise NetworkError(f"Weather API error: {resp.status_code}", status_code=resp.status_code, url=base_url)

    try:
        data = resp.json()
    except ValueError as exc:
        raise ParseError("Open-Meteo response body is not valid JSON") from exc

    return parse_forecast(data)

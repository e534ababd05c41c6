"""Turn a raw forecast into a WeatherSnapshot and run the outdoor assessment."""
from __future__ import annotations

from typing import Optional

from outdoor_insight import config
from outdoor_insight.assessment_engine import assess_outdoor_activity
from outdoor_insight.data_sources import ForecastDataSource, build_data_source
from outdoor_insight.data_sources.open_meteo_client import OpenMeteoForecast, validate_coordinates
from outdoor_insight.domain import AssessmentResult, WeatherSnapshot
from outdoor_insight.time_alignment import resolve_current_hour_index
from outdoor_insight.weather_codes import classify_weather_code
from utils.logging_utils import get_tagged_logger
logger = get_tagged_logger(__name__, tag="forecast_service")

# Values used when the aligned hourly slot is missing or null.
DEFAULT_HUMIDITY = 0.0
DEFAULT_PRECIPITATION = 0.0
DEFAULT_PRECIPITATION_PROBABILITY = 0.0
DEFAULT_VISIBILITY_M = 10000.0
DEFAULT_UV_INDEX = 0.0


def _or_default(value: Optional[float], default: float) -> float:
    """Return `value` unless it is None."""
    return default if value is None else value


def _first_or_empty(values: list[Optional[str]]) -> str:
    """Return the first daily entry, or an empty string."""
    if values and values[0] is not None:
        return values[0]
    return ""


def build_weather_snapshot(forecast: OpenMeteoForecast) -> WeatherSnapshot:
    """Collapse a raw forecast into the snapshot for "now"."""
    current = forecast.current_weather
    hourly = forecast.hourly
    idx = resolve_current_hour_index(current.time, hourly.time)
    condition = classify_weather_code(current.weathercode)

    return WeatherSnapshot(
        temperature=current.temperature,
        feels_like=_or_default(hourly.value_at("apparent_temperature", idx), current.temperature),
        humidity=_or_default(hourly.value_at("relativehumidity_2m", idx), DEFAULT_HUMIDITY),
        wind_speed=current.windspeed,
        precipitation=_or_default(hourly.value_at("precipitation", idx), DEFAULT_PRECIPITATION),
        precipitation_probability=_or_default(
            hourly.value_at("precipitation_probability", idx), DEFAULT_PRECIPITATION_PROBABILITY
        ),
        weather_code=current.weathercode,
        weather_description=condition.description,
        visibility=_or_default(hourly.value_at("visibility", idx), DEFAULT_VISIBILITY_M),
        uv_index=_or_default(hourly.value_at("uv_index", idx), DEFAULT_UV_INDEX),
        is_day=current.is_day == 1,
        sunrise=_first_or_empty(forecast.daily.sunrise),
        sunset=_first_or_empty(forecast.daily.sunset),
    )


def get_weather_snapshot(
    latitude: float,
    longitude: float,
    *,
    timezone: str | None = None,
    data_source: ForecastDataSource | None = None,
) -> WeatherSnapshot:
    """
    Fetch the forecast for a coordinate and reduce it to a WeatherSnapshot.

    The `data_source` argument lets you inject alternate providers (a
    different API, a recorded fixture, etc.). Without one, the source and
    timezone come from settings, as for the HTTP route. Every call re-fetches.
    """
    validate_coordinates(latitude, longitude)
    ds = data_source or build_data_source(config.settings)
    timezone = timezone or config.settings.timezone
    forecast = ds.fetch_forecast(latitude, longitude, timezone=timezone)
    return build_weather_snapshot(forecast)


def get_outdoor_assessment(
    latitude: float,
    longitude: float,
    *,
    timezone: str | None = None,
    data_source: ForecastDataSource | None = None,
) -> AssessmentResult:
    """Run the full fetch, align, classify, score and compose pipeline."""
    snapshot = get_weather_snapshot(latitude, longitude, timezone=timezone, data_source=data_source)
    result = assess_outdoor_activity(snapshot)
    logger.info(
        "Computed outdoor assessment",
        extra={
            "latitude": latitude,
            "longitude": longitude,
            "score": result.score,
            "is_good_for_outdoor": result.is_good_for_outdoor,
            "warnings_count": len(result.warnings),
        },
    )
    return result


def main():
    """Manual test helper for the assessment pipeline."""
    lat, lon = 52.52, 13.41  # Berlin

    result = get_outdoor_assessment(lat, lon)
    w = result.weather_data
    print(f"score: {result.score} (good for outdoor: {result.is_good_for_outdoor})\n"
          f"    reason: {result.reason}\n"
          f"    temp: {w.temperature} °C (feels like {w.feels_like} °C)\n"
          f"    precipitation: {w.precipitation} mm ({w.precipitation_probability}%)\n"
          f"    wind: {w.wind_speed} km/h\n"
          f"    visibility: {w.visibility} m\n"
          f"    uv index: {w.uv_index}\n"
          f"    sunrise/sunset: {w.sunrise} / {w.sunset}\n"
          f"    warnings: {result.warnings}")


if __name__ == "__main__":
    main()

"""Data source factories for plugging different forecast backends."""

from .base import CallableForecastDataSource, ForecastDataSource
from .factory import build_data_source
from .open_meteo_client import (
    CurrentWeather,
    DailySeries,
    HourlySeries,
    OpenMeteoForecast,
    fetch_forecast,
    parse_forecast,
    validate_coordinates,
)

__all__ = [
    "build_data_source",
    "ForecastDataSource",
    "CallableForecastDataSource",
    "CurrentWeather",
    "DailySeries",
    "HourlySeries",
    "OpenMeteoForecast",
    "fetch_forecast",
    "parse_forecast",
    "validate_coordinates",
]

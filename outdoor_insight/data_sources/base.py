"""Interfaces and helpers for forecast data sources."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Protocol

from outdoor_insight.data_sources.open_meteo_client import OpenMeteoForecast


class ForecastDataSource(Protocol):
    """Interface for anything that can provide a raw forecast payload."""

    def fetch_forecast(
        self,
        latitude: float,
        longitude: float,
        *,
        timezone: str = "auto",
    ) -> OpenMeteoForecast:
        """Return current, hourly and daily forecast data for a coordinate."""
        ...


@dataclass
class CallableForecastDataSource(ForecastDataSource):
    """Wrap a fetch callable so backends (or test fakes) can be swapped in."""

    forecast: Callable[..., OpenMeteoForecast]

    def fetch_forecast(self, *args, **kwargs) -> OpenMeteoForecast:
        """Delegate to the configured forecast callable."""
        return self.forecast(*args, **kwargs)

"""Factory helpers for choosing a forecast data source at startup."""

from __future__ import annotations

from functools import partial

from outdoor_insight import config
from outdoor_insight.data_sources.base import CallableForecastDataSource, ForecastDataSource
from outdoor_insight.data_sources.open_meteo_client import fetch_forecast
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="data_sources/factory")


DEFAULT_SOURCE_NAME = "open_meteo"


def build_data_source(settings: config.Settings | None = None) -> ForecastDataSource:
    """Instantiate the configured forecast data source."""
    settings = settings or config.settings
    source = (settings.forecast_source or DEFAULT_SOURCE_NAME).lower()

    if source == "open_meteo":
        logger.info("Using Open-Meteo data source", extra={"base_url": settings.open_meteo_url})
        return CallableForecastDataSource(
            forecast=partial(
                fetch_forecast,
                base_url=settings.open_meteo_url,
                timeout=settings.request_timeout_seconds,
            ),
        )

    raise ValueError(f"Unknown forecast source '{source}'")

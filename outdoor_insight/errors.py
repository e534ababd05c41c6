"""Exceptions raised by the outdoor assessment pipeline.

Every error is terminal for a single assessment call: nothing here is retried
or downgraded to a partial result. Callers own any retry policy.
"""

from __future__ import annotations


class WeatherAssessmentError(Exception):
    """Base exception for outdoor assessment failures."""


class NetworkError(WeatherAssessmentError):
    """Raised when the forecast provider cannot be reached or answers non-2xx."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        url: str | None = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.url = url


class ParseError(WeatherAssessmentError):
    """Raised when the provider response lacks the blocks or arrays we need."""


class InvalidInputError(WeatherAssessmentError, ValueError):
    """Raised for coordinates outside the valid latitude/longitude ranges."""

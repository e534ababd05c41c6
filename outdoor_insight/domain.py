"""Domain vocabulary and strict schemas for outdoor-activity assessments.

This module defines the contract between the scoring engine and whoever
consumes its output (the mission suggester, the HTTP API): the severity enum,
the weather snapshot fed into scoring, and the assessment result. Models
serialize with camelCase aliases so the JSON matches the client contract. No
scoring logic lives here.
"""

from __future__ import annotations

from enum import Enum
from typing import List, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

GOOD_FOR_OUTDOOR_THRESHOLD = 60
MIN_SCORE = 0
MAX_SCORE = 100


class _StrictBaseModel(BaseModel):
    """Base model with strict extra handling and camelCase wire names."""

    model_config = ConfigDict(extra="forbid", alias_generator=to_camel, populate_by_name=True)


class _FrozenModel(_StrictBaseModel):
    """Immutable value object."""

    model_config = ConfigDict(frozen=True)


class ConditionSeverity(str, Enum):
    """Coarse tier for a single physical factor."""
    GOOD = "good"
    MODERATE = "moderate"
    BAD = "bad"


Factor = Literal["temperature", "precipitation", "wind", "visibility", "uv_index", "weather_code"]


class WeatherCondition(_FrozenModel):
    """Human description and severity for a provider weather code."""
    description: str
    severity: ConditionSeverity


class WeatherSnapshot(_FrozenModel):
    """Weather at one location and moment, in metric units."""
    temperature: float  # °C
    feels_like: float  # °C
    humidity: float  # %
    wind_speed: float  # km/h
    precipitation: float  # mm
    precipitation_probability: float  # %
    weather_code: int
    weather_description: str
    visibility: float  # m
    uv_index: float
    is_day: bool
    sunrise: str = ""
    sunset: str = ""


class ConditionsMap(_FrozenModel):
    """Per-factor severity; every factor is always present and starts out good."""
    temperature: ConditionSeverity = ConditionSeverity.GOOD
    precipitation: ConditionSeverity = ConditionSeverity.GOOD
    wind: ConditionSeverity = ConditionSeverity.GOOD
    visibility: ConditionSeverity = ConditionSeverity.GOOD
    uv_index: ConditionSeverity = ConditionSeverity.GOOD


class FactorDeduction(_FrozenModel):
    """One triggered scoring tier."""
    factor: Factor
    severity: ConditionSeverity
    points: int = Field(ge=0)
    warning: str | None = None


class ScoreBreakdown(_StrictBaseModel):
    """Unclamped scorer output; raw_score may be negative."""
    raw_score: int
    deductions: List[FactorDeduction] = Field(default_factory=list)
    warnings: List[str] = Field(default_factory=list)
    conditions: ConditionsMap = Field(default_factory=ConditionsMap)


class AssessmentResult(_StrictBaseModel):
    """Final outdoor-activity assessment handed to collaborators."""
    score: int = Field(ge=MIN_SCORE, le=MAX_SCORE)
    is_good_for_outdoor: bool
    reason: str
    warnings: List[str] = Field(default_factory=list)
    conditions: ConditionsMap
    weather_data: WeatherSnapshot

    @model_validator(mode="after")
    def _recommendation_matches_score(self) -> "AssessmentResult":
        """Keep the boolean recommendation tied to the score threshold."""
        if self.is_good_for_outdoor != (self.score >= GOOD_FOR_OUTDOOR_THRESHOLD):
            raise ValueError(
                f"is_good_for_outdoor={self.is_good_for_outdoor} disagrees with score {self.score}"
            )
        return self

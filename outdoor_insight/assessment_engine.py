"""Deterministic outdoor-activity scoring.

This module turns a WeatherSnapshot into an AssessmentResult in two steps:
`score_conditions` applies independent, additive deductions from a baseline
of 100 (one judge per physical factor), and `compose_assessment` clamps the
total, derives the go/no-go flag and writes the narrative reason. Both are
pure functions; nothing here performs I/O.
"""

from __future__ import annotations

import math

from outdoor_insight.domain import (
    AssessmentResult,
    ConditionSeverity,
    ConditionsMap,
    Factor,
    FactorDeduction,
    ScoreBreakdown,
    WeatherSnapshot,
    GOOD_FOR_OUTDOOR_THRESHOLD,
    MAX_SCORE,
    MIN_SCORE,
)
from outdoor_insight.weather_codes import classify_weather_code
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="assessment_engine")

BASELINE_SCORE = 100


def _clamp_score(score: int) -> int:
    """Clamp a score to the 0-100 range."""
    return max(MIN_SCORE, min(MAX_SCORE, score))


def _round_half_up(value: float) -> int:
    """Round .5 upwards (-2.5 -> -2, 2.5 -> 3) rather than to even."""
    return math.floor(value + 0.5)


def _deduct(
    deductions: list[FactorDeduction],
    factor: Factor,
    severity: ConditionSeverity,
    points: int,
    warning: str | None,
) -> ConditionSeverity:
    """Record a triggered tier and return its severity."""
    deductions.append(FactorDeduction(factor=factor, severity=severity, points=points, warning=warning))
    return severity


def _judge_temperature(temp_c: float, deductions: list[FactorDeduction]) -> ConditionSeverity:
    """Penalize freezing, cold, hot and extreme-heat temperatures."""
    if temp_c < 0:
        return _deduct(deductions, "temperature", ConditionSeverity.BAD, 40,
                       "Freezing temperatures - dress warmly and limit exposure")
    if temp_c < 10:
        return _deduct(deductions, "temperature", ConditionSeverity.MODERATE, 20,
                       "Cold weather - wear layers")
    if temp_c > 35:
        return _deduct(deductions, "temperature", ConditionSeverity.BAD, 40,
                       "Extreme heat - risk of heat exhaustion, stay hydrated")
    if temp_c > 30:
        return _deduct(deductions, "temperature", ConditionSeverity.MODERATE, 20,
                       "Hot weather - drink plenty of water")
    return ConditionSeverity.GOOD


def _judge_precipitation(probability: float, amount_mm: float,
                         deductions: list[FactorDeduction]) -> ConditionSeverity:
    """Penalize likely or measurable precipitation; either trigger is enough."""
    if probability > 70 or amount_mm > 2:
        return _deduct(deductions, "precipitation", ConditionSeverity.BAD, 40,
                       "High chance of precipitation - bring rain gear or stay indoors")
    if probability > 40 or amount_mm > 0.5:
        return _deduct(deductions, "precipitation", ConditionSeverity.MODERATE, 20,
                       "Possible precipitation - consider bringing an umbrella")
    return ConditionSeverity.GOOD


def _judge_wind(wind_kmh: float, deductions: list[FactorDeduction]) -> ConditionSeverity:
    """Penalize windy and stormy conditions."""
    if wind_kmh > 50:
        return _deduct(deductions, "wind", ConditionSeverity.BAD, 40,
                       "Strong winds - outdoor activities may be dangerous")
    if wind_kmh > 30:
        return _deduct(deductions, "wind", ConditionSeverity.MODERATE, 20,
                       "Windy conditions - may affect some activities")
    return ConditionSeverity.GOOD


def _judge_visibility(visibility_m: float, deductions: list[FactorDeduction]) -> ConditionSeverity:
    """Penalize fog and haze; thresholds are in kilometres."""
    visibility_km = visibility_m / 1000
    if visibility_km < 1:
        return _deduct(deductions, "visibility", ConditionSeverity.BAD, 30,
                       "Poor visibility - be cautious outdoors")
    if visibility_km < 5:
        return _deduct(deductions, "visibility", ConditionSeverity.MODERATE, 15,
                       "Reduced visibility")
    return ConditionSeverity.GOOD


def _judge_uv(uv_index: float, deductions: list[FactorDeduction]) -> ConditionSeverity:
    """Penalize high and very high UV exposure."""
    if uv_index >= 8:
        return _deduct(deductions, "uv_index", ConditionSeverity.BAD, 25,
                       "Very high UV index - wear sunscreen and limit sun exposure")
    if uv_index >= 6:
        return _deduct(deductions, "uv_index", ConditionSeverity.MODERATE, 10,
                       "High UV index - sun protection recommended")
    return ConditionSeverity.GOOD


def _judge_weather_code(code: int, deductions: list[FactorDeduction]) -> None:
    """Penalize the general sky condition; surfaces through the reason, not a warning."""
    # unknown codes classify as moderate and so also cost 15
    severity = classify_weather_code(code).severity
    if severity == ConditionSeverity.BAD:
        _deduct(deductions, "weather_code", severity, 30, None)
    elif severity == ConditionSeverity.MODERATE:
        _deduct(deductions, "weather_code", severity, 15, None)


def score_conditions(snapshot: WeatherSnapshot) -> ScoreBreakdown:
    """Pure function: apply every factor's deductions to the baseline score."""
    deductions: list[FactorDeduction] = []

    # order matters: it fixes the order of the warnings list
    conditions = ConditionsMap(
        temperature=_judge_temperature(snapshot.temperature, deductions),
        precipitation=_judge_precipitation(snapshot.precipitation_probability, snapshot.precipitation, deductions),
        wind=_judge_wind(snapshot.wind_speed, deductions),
        visibility=_judge_visibility(snapshot.visibility, deductions),
        uv_index=_judge_uv(snapshot.uv_index, deductions),
    )
    _judge_weather_code(snapshot.weather_code, deductions)

    raw_score = BASELINE_SCORE - sum(d.points for d in deductions)
    warnings = [d.warning for d in deductions if d.warning]

    return ScoreBreakdown(
        raw_score=raw_score,
        deductions=deductions,
        warnings=warnings,
        conditions=conditions,
    )


def _build_reason(score: int, snapshot: WeatherSnapshot, warnings: list[str]) -> str:
    """Pick the narrative for the score band."""
    summary = f"{snapshot.weather_description}, {_round_half_up(snapshot.temperature)}°C."
    if score >= 80:
        return f"Great conditions for outdoor activities! {summary}"
    if score >= GOOD_FOR_OUTDOOR_THRESHOLD:
        first_warning = warnings[0] if warnings else ""
        return f"Decent weather for outdoor activities. {summary} {first_warning}".rstrip()
    if score >= 40:
        return f"Not ideal for outdoor activities. {summary} Consider indoor alternatives."
    return f"Poor conditions for outdoor activities. {summary} Indoor activities recommended."


def compose_assessment(snapshot: WeatherSnapshot, breakdown: ScoreBreakdown) -> AssessmentResult:
    """Clamp the breakdown into a final assessment with reason text."""
    score = _clamp_score(breakdown.raw_score)
    return AssessmentResult(
        score=score,
        is_good_for_outdoor=score >= GOOD_FOR_OUTDOOR_THRESHOLD,
        reason=_build_reason(score, snapshot, breakdown.warnings),
        warnings=list(breakdown.warnings),
        conditions=breakdown.conditions,
        weather_data=snapshot,
    )


def assess_outdoor_activity(snapshot: WeatherSnapshot) -> AssessmentResult:
    """Score a snapshot and compose the final assessment."""
    breakdown = score_conditions(snapshot)
    result = compose_assessment(snapshot, breakdown)
    logger.debug(
        "Assessed outdoor conditions",
        extra={
            "raw_score": breakdown.raw_score,
            "score": result.score,
            "deductions": [f"{d.factor}:{d.points}" for d in breakdown.deductions],
        },
    )
    return result

import pytest

from outdoor_insight.domain import ConditionSeverity
from outdoor_insight.weather_codes import WEATHER_CODES, classify_weather_code


@pytest.mark.parametrize("code", [0, 1, 2, 3])
def test_clear_and_cloudy_are_good(code):
    assert classify_weather_code(code).severity == ConditionSeverity.GOOD


@pytest.mark.parametrize("code", [45, 48, 51, 61, 71, 80])
def test_fog_and_light_precipitation_are_moderate(code):
    assert classify_weather_code(code).severity == ConditionSeverity.MODERATE


@pytest.mark.parametrize("code", [56, 57, 65, 66, 67, 75, 82, 86, 95, 96, 99])
def test_heavy_freezing_and_storms_are_bad(code):
    assert classify_weather_code(code).severity == ConditionSeverity.BAD


def test_known_code_description():
    assert classify_weather_code(95).description == "Thunderstorm"
    assert classify_weather_code(0).description == "Clear sky"


def test_unknown_code_defaults_to_moderate():
    condition = classify_weather_code(9999)
    assert condition.description == "Unknown"
    assert condition.severity == ConditionSeverity.MODERATE


def test_table_covers_standard_codes():
    assert len(WEATHER_CODES) == 28
    assert 4 not in WEATHER_CODES

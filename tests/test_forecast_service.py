import copy
import unittest
from unittest import mock

from outdoor_insight import config, forecast_service
from outdoor_insight.data_sources import CallableForecastDataSource, parse_forecast
from outdoor_insight.errors import InvalidInputError, ParseError
from outdoor_insight.forecast_service import (
    build_weather_snapshot,
    get_outdoor_assessment,
    get_weather_snapshot,
)

_PAYLOAD = {
    "current_weather": {
        "time": "2024-01-15T08:15",
        "temperature": -5.0,
        "windspeed": 8.0,
        "winddirection": 90.0,
        "weathercode": 0,
        "is_day": 0,
    },
    "hourly": {
        "time": ["2024-01-15T07:00", "2024-01-15T08:00", "2024-01-15T09:00"],
        "temperature_2m": [-6.0, -5.0, -4.0],
        "precipitation_probability": [0, 5, 90],
        "precipitation": [0.0, 0.0, 3.0],
        "weathercode": [0, 0, 71],
        "relativehumidity_2m": [80, 78, 75],
        "apparent_temperature": [-9.0, -8.5, -7.0],
        "visibility": [30000.0, 25000.0, 800.0],
        "uv_index": [0.0, 0.2, 0.5],
    },
    "daily": {
        "time": ["2024-01-15"],
        "temperature_2m_max": [-1.0],
        "temperature_2m_min": [-9.0],
        "precipitation_sum": [3.0],
        "precipitation_probability_max": [90],
        "sunrise": ["2024-01-15T08:10"],
        "sunset": ["2024-01-15T16:25"],
    },
}


def _payload(**hourly_overrides):
    data = copy.deepcopy(_PAYLOAD)
    data["hourly"].update(hourly_overrides)
    return data


class TestBuildWeatherSnapshot(unittest.TestCase):
    def test_uses_nearest_hourly_slot(self):
        snap = build_weather_snapshot(parse_forecast(_payload()))
        # 08:15 aligns to the 08:00 slot
        self.assertEqual(snap.feels_like, -8.5)
        self.assertEqual(snap.humidity, 78)
        self.assertEqual(snap.precipitation_probability, 5)
        self.assertEqual(snap.visibility, 25000.0)
        self.assertEqual(snap.uv_index, 0.2)

    def test_current_block_fields(self):
        snap = build_weather_snapshot(parse_forecast(_payload()))
        self.assertEqual(snap.temperature, -5.0)
        self.assertEqual(snap.wind_speed, 8.0)
        self.assertEqual(snap.weather_code, 0)
        self.assertEqual(snap.weather_description, "Clear sky")
        self.assertFalse(snap.is_day)
        self.assertEqual(snap.sunrise, "2024-01-15T08:10")
        self.assertEqual(snap.sunset, "2024-01-15T16:25")

    def test_null_slots_fall_back_to_defaults(self):
        nulls = [None, None, None]
        data = _payload(
            apparent_temperature=nulls,
            relativehumidity_2m=nulls,
            precipitation=nulls,
            precipitation_probability=nulls,
            visibility=nulls,
            uv_index=nulls,
        )
        snap = build_weather_snapshot(parse_forecast(data))
        self.assertEqual(snap.feels_like, -5.0)
        self.assertEqual(snap.humidity, 0)
        self.assertEqual(snap.precipitation, 0)
        self.assertEqual(snap.precipitation_probability, 0)
        self.assertEqual(snap.visibility, 10000)
        self.assertEqual(snap.uv_index, 0)

    def test_short_arrays_fall_back_to_defaults(self):
        data = _payload(visibility=[30000.0])
        snap = build_weather_snapshot(parse_forecast(data))
        self.assertEqual(snap.visibility, 10000)

    def test_missing_daily_entries_give_empty_sun_times(self):
        data = copy.deepcopy(_PAYLOAD)
        data["daily"]["sunrise"] = []
        data["daily"]["sunset"] = [None]
        snap = build_weather_snapshot(parse_forecast(data))
        self.assertEqual(snap.sunrise, "")
        self.assertEqual(snap.sunset, "")

    def test_empty_hourly_times_raise_parse_error(self):
        data = _payload(time=[])
        with self.assertRaises(ParseError):
            build_weather_snapshot(parse_forecast(data))


class TestOutdoorAssessmentPipeline(unittest.TestCase):
    def _source(self, payload, calls=None):
        def fake_forecast(latitude, longitude, **kwargs):
            if calls is not None:
                calls.append((latitude, longitude, kwargs))
            return parse_forecast(payload)

        return CallableForecastDataSource(forecast=fake_forecast)

    def test_freezing_clear_morning_is_borderline_good(self):
        result = get_outdoor_assessment(52.52, 13.41, data_source=self._source(_payload()))
        self.assertEqual(result.score, 60)
        self.assertTrue(result.is_good_for_outdoor)
        self.assertEqual(result.weather_data.weather_description, "Clear sky")

    def test_every_call_refetches(self):
        calls = []
        ds = self._source(_payload(), calls)
        get_outdoor_assessment(52.52, 13.41, data_source=ds)
        get_outdoor_assessment(52.52, 13.41, data_source=ds)
        self.assertEqual(len(calls), 2)

    def test_timezone_is_forwarded(self):
        calls = []
        get_weather_snapshot(52.52, 13.41, timezone="Europe/Berlin", data_source=self._source(_payload(), calls))
        self.assertEqual(calls[0][2]["timezone"], "Europe/Berlin")

    def test_default_source_and_timezone_come_from_settings(self):
        calls = []
        built_with = []

        def fake_build(settings=None):
            built_with.append(settings)
            return self._source(_payload(), calls)

        custom = config.Settings(timezone="America/Denver", open_meteo_url="http://weather.test/v1/forecast")
        with mock.patch.object(forecast_service, "build_data_source", fake_build), \
                mock.patch.object(config, "settings", custom):
            get_outdoor_assessment(52.52, 13.41)

        self.assertEqual(built_with, [custom])
        self.assertEqual(calls[0][2]["timezone"], "America/Denver")

    def test_invalid_coordinates_rejected_before_fetch(self):
        calls = []
        with self.assertRaises(InvalidInputError):
            get_outdoor_assessment(120.0, 13.41, data_source=self._source(_payload(), calls))
        self.assertEqual(calls, [])


if __name__ == "__main__":
    unittest.main()

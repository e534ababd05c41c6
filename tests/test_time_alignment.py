import pytest

from outdoor_insight import time_alignment
from outdoor_insight.errors import ParseError
from outdoor_insight.time_alignment import resolve_current_hour_index


def _hours(n=24, day="2024-06-01"):
    return [f"{day}T{h:02d}:00" for h in range(n)]


def test_exact_match_returns_index():
    assert resolve_current_hour_index("2024-06-01T05:00", _hours()) == 5


def test_exact_match_skips_nearest_search(monkeypatch):
    def fail(*_args, **_kwargs):
        raise AssertionError("nearest search should not run on exact match")

    monkeypatch.setattr(time_alignment, "_millis_between", fail)
    assert resolve_current_hour_index("2024-06-01T05:00", _hours()) == 5


def test_nearest_slot_when_no_exact_match():
    # 05:20 is closer to 05:00 than 06:00
    assert resolve_current_hour_index("2024-06-01T05:20", _hours()) == 5
    # 05:45 is closer to 06:00
    assert resolve_current_hour_index("2024-06-01T05:45", _hours()) == 6


def test_tie_keeps_first_slot():
    assert resolve_current_hour_index("2024-06-01T05:30", _hours()) == 5


def test_tie_with_duplicate_timestamps_keeps_first():
    hours = ["2024-06-01T04:00", "2024-06-01T06:00", "2024-06-01T06:00"]
    assert resolve_current_hour_index("2024-06-01T06:15", hours) == 1


def test_current_after_last_slot_picks_last():
    assert resolve_current_hour_index("2024-06-02T03:00", _hours()) == 23


def test_current_with_seconds_is_aligned():
    assert resolve_current_hour_index("2024-06-01T12:00:30", _hours()) == 12


def test_unparseable_slots_are_skipped():
    hours = ["garbage", "2024-06-01T10:00", "2024-06-01T11:00"]
    assert resolve_current_hour_index("2024-06-01T10:50", hours) == 2


def test_no_parseable_slots_defaults_to_zero():
    assert resolve_current_hour_index("2024-06-01T10:50", ["x", "y"]) == 0


def test_empty_hourly_raises_parse_error():
    with pytest.raises(ParseError):
        resolve_current_hour_index("2024-06-01T10:00", [])


def test_unparseable_current_raises_parse_error():
    with pytest.raises(ParseError):
        resolve_current_hour_index("not-a-time", _hours())


def test_aware_current_compared_against_naive_slots_as_utc():
    assert resolve_current_hour_index("2024-06-01T09:10+02:00", _hours()) == 7

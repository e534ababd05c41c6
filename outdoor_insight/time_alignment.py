"""Match the provider's "current" timestamp to a slot in the hourly arrays."""

from __future__ import annotations

import datetime as dt
from typing import Optional, Sequence

from outdoor_insight.errors import ParseError
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="time_alignment")


def _parse_timestamp(value: str) -> Optional[dt.datetime]:
    """Parse an ISO-8601 timestamp; aware values are normalized to naive UTC."""
    try:
        parsed = dt.datetime.fromisoformat(value)
    except (TypeError, ValueError):
        return None
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(dt.timezone.utc).replace(tzinfo=None)
    return parsed


def _millis_between(a: dt.datetime, b: dt.datetime) -> float:
    """Absolute difference between two timestamps in milliseconds."""
    return abs((a - b).total_seconds()) * 1000.0


def resolve_current_hour_index(current_time: str, hourly_times: Sequence[str]) -> int:
    """
    Return the index of the hourly slot that represents `current_time`.

    An exact string match wins outright. Otherwise every slot is scanned once
    and the one closest in time is chosen; on a tie the earliest slot is kept.
    Slots whose timestamps cannot be parsed are ignored.
    """
    if not hourly_times:
        raise ParseError("Hourly time series is empty; cannot align current conditions")

    try:
        exact = list(hourly_times).index(current_time)
    except ValueError:
        exact = None
    if exact is not None:
        logger.debug("Current time matched hourly slot exactly", extra={"index": exact})
        return exact

    current = _parse_timestamp(current_time)
    if current is None:
        raise ParseError(f"Unparseable current timestamp: {current_time!r}")

    best_index = 0
    best_diff: float | None = None
    for i, raw in enumerate(hourly_times):
        slot = _parse_timestamp(raw)
        if slot is None:
            continue
        diff = _millis_between(slot, current)
        # strict < keeps the first slot on ties
        if best_diff is None or diff < best_diff:
            best_diff = diff
            best_index = i

    logger.debug(
        "Current time aligned to nearest hourly slot",
        extra={"current_time": current_time, "index": best_index, "diff_ms": best_diff},
    )
    return best_index

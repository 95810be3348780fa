"""
Itinerary construction and normalization
"""

import math
import re
from collections.abc import Mapping
from datetime import date, datetime
from typing import Any

from trip_planner.core.dates import utc_midnight
from trip_planner.models.itinerary import Activity, DayPlan

# Decimal or exponent notation, or a 0x/0o/0b integer literal without separators
_NUMERIC = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|0[xX][0-9a-fA-F]+|0[oO][0-7]+|0[bB][01]+")


def day_label(index: int) -> str:
    """Positional label for the zero-based day `index`."""
    return f"Day {index + 1}"


def count_days(start: date | datetime | str, end: date | datetime | str) -> int:
    """
    Inclusive number of calendar days between start and end.

    Both ends are reduced to UTC midnight first. An inverted range still
    yields one day.
    """
    delta = utc_midnight(end) - utc_midnight(start)
    return max(1, delta.days + 1)


def build_empty_itinerary(start: date | datetime | str, end: date | datetime | str) -> list[DayPlan]:
    return [DayPlan(label=day_label(i)) for i in range(count_days(start, end))]


def _parse_number(text: str) -> float:
    if not _NUMERIC.fullmatch(text):
        return math.nan
    if text[:2].lower() in ("0x", "0o", "0b"):
        return float(int(text, 0))
    return float(text)


def coerce_cost(value: Any) -> float | None:
    """
    Return `value` as a finite number, or None.

    Numbers pass through and numeric strings are parsed. Empty strings, None,
    booleans, unparseable text, NaN and infinities all become None.
    """
    if value is None or isinstance(value, bool):
        return None
    try:
        if isinstance(value, (int, float)):
            number = float(value)
        elif isinstance(value, str):
            number = _parse_number(value.strip())
        else:
            return None
    except OverflowError:
        return None

    if not math.isfinite(number):
        return None
    return number


def _text(value: Any) -> str:
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def normalize_activity(raw: Any) -> Activity:
    data = raw if isinstance(raw, Mapping) else {}
    return Activity(
        start_time=_text(data.get("startTime", data.get("start_time"))),
        activity=_text(data.get("activity")),
        cost=coerce_cost(data.get("cost")),
        notes=_text(data.get("notes")),
    )


def normalize_day(raw: Any, index: int) -> DayPlan:
    data = raw if isinstance(raw, Mapping) else {}
    label = data.get("day") or data.get("label")
    activities = data.get("activities")
    if not isinstance(activities, list):
        activities = []
    return DayPlan(
        label=_text(label) if label else day_label(index),
        activities=[normalize_activity(a) for a in activities],
    )


def normalize_itinerary(raw: Any) -> list[DayPlan]:
    """
    Normalize a client-supplied itinerary for a full replacement.

    One day comes out per day that went in; the count is not reconciled
    with the trip's date range.
    """
    if not isinstance(raw, list):
        return []
    return [normalize_day(day, i) for i, day in enumerate(raw)]

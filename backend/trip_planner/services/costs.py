"""
Cost aggregation over a trip itinerary
"""

import math
from collections.abc import Iterable, Mapping
from datetime import datetime
from typing import Any

from trip_planner.core.dates import add_days
from trip_planner.models.itinerary import Activity, CostSummary, DayCost, DayPlan
from trip_planner.services.itinerary import coerce_cost, day_label


def traveler_divisor(travelers: Any) -> int:
    """
    Whole number of travelers to split costs by. Anything that is not a
    number of at least one traveler counts as 1.
    """
    if travelers is None or isinstance(travelers, bool):
        return 1
    try:
        count = float(travelers)
    except (TypeError, ValueError, OverflowError):
        return 1
    if not math.isfinite(count) or count < 1:
        return 1
    return int(count)


def _activity_cost(activity: Activity | Mapping | Any) -> float:
    if isinstance(activity, Activity):
        cost = activity.cost
    elif isinstance(activity, Mapping):
        cost = activity.get("cost")
    else:
        cost = None
    return coerce_cost(cost) or 0.0


def _day_parts(day: DayPlan | Mapping | Any, index: int) -> tuple[str, list]:
    if isinstance(day, DayPlan):
        return day.label or day_label(index), day.activities
    if isinstance(day, Mapping):
        activities = day.get("activities")
        label = day.get("day") or day.get("label") or day_label(index)
        return str(label), activities if isinstance(activities, list) else []
    return day_label(index), []


def summarize_costs(
    itinerary: Iterable[DayPlan | Mapping] | None,
    travelers: Any,
    start_date: datetime | None = None,
) -> CostSummary:
    """
    Total, per-traveler and per-day cost of an itinerary.

    Null and non-numeric costs add nothing to the sums and are left untouched.
    When `start_date` is given each day is dated `start_date + index` days.
    """
    days: list[DayCost] = []
    for index, day in enumerate(itinerary or []):
        label, activities = _day_parts(day, index)
        days.append(
            DayCost(
                label=label,
                date=add_days(start_date, index) if start_date else None,
                subtotal=sum(_activity_cost(a) for a in activities),
            )
        )

    total = sum(d.subtotal for d in days)
    divisor = traveler_divisor(travelers)
    return CostSummary(
        total=total,
        per_traveler=total / divisor,
        travelers=divisor,
        days=days,
    )

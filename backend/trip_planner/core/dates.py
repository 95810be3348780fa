"""
Calendar date helpers

Trip dates carry no time-of-day. Every value is reduced to a naive datetime at
UTC midnight so it can be stored in MongoDB and subtracted safely.
"""

from datetime import date, datetime, timedelta, timezone


def utc_midnight(value: date | datetime | str) -> datetime:
    """
    Normalize a date, datetime or ISO-8601 string to naive UTC midnight.

    Aware datetimes are converted to UTC first; naive ones are taken as UTC.
    Raises ValueError for strings that are not ISO-8601.
    """
    if isinstance(value, str):
        text = value.strip()
        if not text:
            raise ValueError("date string is empty")
        value = datetime.fromisoformat(text)

    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return datetime(value.year, value.month, value.day)

    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)

    raise ValueError(f"unsupported date value: {value!r}")


def add_days(start: datetime, days: int) -> datetime:
    return utc_midnight(start) + timedelta(days=days)


def utc_isoformat(value: datetime) -> str:
    """ISO-8601 with millisecond precision and an explicit `Z`, as JavaScript's Date.toJSON emits."""
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value.isoformat(timespec="milliseconds") + "Z"

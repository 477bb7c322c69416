from __future__ import annotations

import calendar
from datetime import date, datetime, time
from typing import TypedDict

DEFAULT_DATE_FIELD = "created_at"

DateInput = date | datetime | str


class DateBounds(TypedDict, total=False):
    gte: datetime
    lte: datetime


def _as_datetime(value: date | datetime) -> datetime:
    if isinstance(value, datetime):
        return value
    return datetime.combine(value, time.min)


def parse_date_input(value: DateInput) -> datetime:
    """Parse a date-like value; date-only strings resolve to local midnight.

    Strings must be ISO 8601; anything else raises ``ValueError``.
    """
    if isinstance(value, str):
        text = value.strip()
        if len(text) == 10:
            return datetime.combine(date.fromisoformat(text), time.min)
        return datetime.fromisoformat(text)
    return _as_datetime(value)


def to_start_of_day(value: date | datetime) -> datetime:
    return _as_datetime(value).replace(hour=0, minute=0, second=0, microsecond=0)


def to_end_of_day(value: date | datetime) -> datetime:
    # Millisecond precision.
    return _as_datetime(value).replace(hour=23, minute=59, second=59, microsecond=999000)


def _coerce(value: DateInput | None) -> datetime | None:
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    try:
        return parse_date_input(value)
    except (TypeError, ValueError):
        return None


def build_date_range_filter(
    start: DateInput | None = None,
    end: DateInput | None = None,
    field_name: str = DEFAULT_DATE_FIELD,
) -> dict[str, DateBounds] | None:
    """Build a day-aligned ``{field_name: {"gte": ..., "lte": ...}}`` filter.

    Returns ``None`` when neither bound is given, meaning "do not filter".
    A bound that cannot be parsed is dropped as if it were not given.
    The ordering of ``start`` and ``end`` is not checked.
    """
    start_value = _coerce(start)
    end_value = _coerce(end)
    if start_value is None and end_value is None:
        return None

    bounds: DateBounds = {}
    if start_value is not None:
        bounds["gte"] = to_start_of_day(start_value)
    if end_value is not None:
        bounds["lte"] = to_end_of_day(end_value)
    return {field_name: bounds}


def first_day_of_month(year: int, month: int) -> datetime:
    return datetime(year, month, 1)


def last_day_of_month(year: int, month: int) -> datetime:
    last_day = calendar.monthrange(year, month)[1]
    return to_end_of_day(date(year, month, last_day))


def is_same_month(first: date | datetime, second: date | datetime) -> bool:
    return first.year == second.year and first.month == second.month


def to_iso_date_string(value: date | datetime) -> str:
    if isinstance(value, datetime):
        value = value.date()
    return value.isoformat()

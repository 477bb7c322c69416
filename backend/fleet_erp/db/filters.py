from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime
from typing import Any

from sqlalchemy import ColumnElement

from fleet_erp.utils.dates import DateBounds


def _as_aware(value: datetime) -> datetime:
    # Naive bounds are local wall-clock times; pin them before comparing with timestamptz columns.
    if value.tzinfo is None:
        return value.astimezone()
    return value


def date_range_conditions(model: Any, date_filter: Mapping[str, DateBounds] | None) -> list[ColumnElement[bool]]:
    """Translate a ``build_date_range_filter`` result into column comparisons."""
    if not date_filter:
        return []

    conditions: list[ColumnElement[bool]] = []
    for field_name, bounds in date_filter.items():
        column = getattr(model, field_name)
        if "gte" in bounds:
            conditions.append(column >= _as_aware(bounds["gte"]))
        if "lte" in bounds:
            conditions.append(column <= _as_aware(bounds["lte"]))
    return conditions

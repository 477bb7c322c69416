from __future__ import annotations

from typing import TypeVar

from fleet_erp.core.exceptions import NotFoundError

T = TypeVar("T")


def require_record(record: T | None, entity_name: str = "Record") -> T:
    if not record:
        raise NotFoundError(f"{entity_name} not found")
    return record


def require_not_deleted(record: T | None, entity_name: str = "Record") -> T:
    record = require_record(record, entity_name)
    if getattr(record, "deleted_at", None) is not None:
        raise NotFoundError(f"{entity_name} has been deleted")
    return record

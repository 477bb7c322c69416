from __future__ import annotations

from datetime import date, datetime

from fastapi import Query
from pydantic import BaseModel

from fleet_erp.utils.dates import build_date_range_filter
from fleet_erp.utils.pagination import PaginationRequest


class BaseReadModel(BaseModel):
    model_config = {"from_attributes": True}


class ListQuery:
    """Page/limit and day-aligned date range shared by list endpoints.

    Values are taken as given; clamping happens in the pagination calculator.
    """

    def __init__(
        self,
        page: int | None = Query(default=None),
        limit: int | None = Query(default=None),
        start_date: date | datetime | None = Query(default=None),
        end_date: date | datetime | None = Query(default=None),
    ) -> None:
        self.page = page
        self.limit = limit
        self.start_date = start_date
        self.end_date = end_date

    @property
    def pagination(self) -> PaginationRequest:
        return PaginationRequest(page=self.page, limit=self.limit)

    def date_filter(self, field_name: str = "created_at"):
        return build_date_range_filter(self.start_date, self.end_date, field_name)

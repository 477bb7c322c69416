"""Pagination helpers shared by list endpoints and repositories.

Every function here is total: out-of-range numbers are coerced, never rejected.
"""

from __future__ import annotations

import math
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
MAX_LIMIT = 100

T = TypeVar("T")


@dataclass(frozen=True)
class PaginationRequest:
    page: int | None = None
    limit: int | None = None


@dataclass(frozen=True)
class PaginationResult:
    skip: int
    take: int
    page: int
    limit: int


@dataclass(frozen=True)
class PaginationMeta:
    total: int
    page: int
    limit: int
    total_pages: int
    has_next: bool
    has_prev: bool

    def to_dict(self) -> dict[str, Any]:
        return {
            "total": self.total,
            "page": self.page,
            "limit": self.limit,
            "total_pages": self.total_pages,
            "has_next": self.has_next,
            "has_prev": self.has_prev,
        }


@dataclass(frozen=True)
class Page(Generic[T]):
    items: list[T] = field(default_factory=list)
    meta: PaginationMeta | None = None


def _read_request(request: PaginationRequest | Mapping[str, Any] | None) -> tuple[int | None, int | None]:
    if request is None:
        return None, None
    if isinstance(request, Mapping):
        return request.get("page"), request.get("limit")
    return request.page, request.limit


def compute_pagination(
    request: PaginationRequest | Mapping[str, Any] | None = None,
    default_limit: int = DEFAULT_LIMIT,
) -> PaginationResult:
    """Turn a requested page/limit into offset bounds for a query.

    ``page`` is floored at 1. A missing or zero ``limit`` falls back to
    ``default_limit``; a negative one clamps to 1 rather than to the default.
    The resolved limit never exceeds ``MAX_LIMIT``.
    """
    raw_page, raw_limit = _read_request(request)
    page = max(1, raw_page or DEFAULT_PAGE)
    limit = min(MAX_LIMIT, max(1, raw_limit or default_limit))
    skip = (page - 1) * limit
    return PaginationResult(skip=skip, take=limit, page=page, limit=limit)


def compute_pagination_meta(total: int, page: int, limit: int) -> PaginationMeta:
    """Build response metadata for a page of ``total`` records.

    ``total_pages`` is never 0 so pagers always have at least one page.
    """
    total_pages = (math.ceil(total / limit) if limit > 0 else 0) or 1
    return PaginationMeta(
        total=total,
        page=page,
        limit=limit,
        total_pages=total_pages,
        has_next=page < total_pages,
        has_prev=page > 1,
    )


def paginate_in_memory(items: Sequence[T], page: int = DEFAULT_PAGE, limit: int = DEFAULT_LIMIT) -> Page[T]:
    bounds = compute_pagination(PaginationRequest(page=page, limit=limit))
    sliced = list(items[bounds.skip : bounds.skip + bounds.take])
    return Page(items=sliced, meta=compute_pagination_meta(len(items), bounds.page, bounds.limit))

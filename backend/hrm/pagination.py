# backend/hrm/pagination.py
"""Offset pagination shared by every list endpoint.

Query Parameters:
    - page: 1-based page number (default: 1)
    - limit: items per page (default: DEFAULT_PAGE_SIZE, max: MAX_PAGE_SIZE)

``nextPage`` is simply ``page + 1`` while rows remain; it is not a stable cursor, so
rows can be skipped or repeated if the table changes between requests.
"""
from dataclasses import dataclass
from typing import Any, List, Optional

from fastapi import Query

from .config import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE


@dataclass
class PageParams:
    page: int = 1
    limit: int = DEFAULT_PAGE_SIZE

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


def page_params(
    page: int = Query(1, ge=1),
    limit: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
) -> PageParams:
    return PageParams(page=page, limit=limit)


def next_page(params: PageParams, total: int) -> Optional[int]:
    return params.page + 1 if params.offset + params.limit < total else None


def paginate(query, params: PageParams) -> dict:
    """Run ``query`` for one page; returns the ``{data, total, nextPage}`` envelope."""
    total = query.order_by(None).count()
    items: List[Any] = query.offset(params.offset).limit(params.limit).all()
    return {"data": items, "total": total, "nextPage": next_page(params, total)}

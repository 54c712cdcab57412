"""
Pagination and sorting helpers shared by every list endpoint.

Raw query parameters are normalized into safe values here so that no
user-supplied string ever reaches an ORDER BY or LIMIT clause directly.
"""
import math
from dataclasses import dataclass
from typing import Any, Callable, Mapping, Optional

from sqlalchemy.orm import Query

from synergysphere.constants import DEFAULT_LIMIT, DEFAULT_PAGE, MAX_LIMIT
from synergysphere.enums import SortOrder


@dataclass(frozen=True)
class PageParams:
    page: int
    limit: int

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


def _to_int(value: Any) -> Optional[int]:
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(str(value).strip())
    except (TypeError, ValueError):
        try:
            number = float(str(value).strip())
        except (TypeError, ValueError):
            return None
        if math.isnan(number) or math.isinf(number):
            return None
        return int(number)


def parse_pagination(page: Any = None, limit: Any = None) -> PageParams:
    """
    page < 1 or non-numeric -> 1
    limit < 1 or non-numeric -> 20, limit > 100 -> 100
    """
    page_num = _to_int(page)
    limit_num = _to_int(limit)

    if page_num is None or page_num < 1:
        page_num = DEFAULT_PAGE
    if limit_num is None or limit_num < 1:
        limit_num = DEFAULT_LIMIT
    if limit_num > MAX_LIMIT:
        limit_num = MAX_LIMIT

    return PageParams(page=page_num, limit=limit_num)


def resolve_sort(sort: Optional[str], allowed: Mapping[str, Any], default: str):
    """
    Maps a logical sort key to a column through an allow-list.
    Unknown keys silently fall back to the default column.
    """
    if sort and sort in allowed:
        return allowed[sort]
    return allowed[default]


def resolve_order(order: Optional[str], default: SortOrder = SortOrder.DESC) -> SortOrder:
    if order:
        try:
            return SortOrder(str(order).strip().lower())
        except ValueError:
            pass
    return default


def order_clause(column, order: SortOrder):
    return column.asc() if order == SortOrder.ASC else column.desc()


def build_page(items: list, params: PageParams, total: int) -> dict:
    total_pages = max(1, math.ceil(total / params.limit))
    return {
        "items": items,
        "page": params.page,
        "limit": params.limit,
        "total": total,
        "totalPages": total_pages,
        "hasPrev": params.page > 1,
        "hasNext": params.page * params.limit < total,
    }


def paginate(query: Query, params: PageParams, serialize: Optional[Callable[[Any], Any]] = None) -> dict:
    """
    Runs COUNT(*) over the filtered query, then fetches one page of it.
    The count ignores ORDER BY so both queries share the same predicate.
    Pages past the end skip the page query; their offset may not fit a
    database integer.
    """
    total = query.order_by(None).count()
    if params.offset >= total:
        rows = []
    else:
        rows = query.offset(params.offset).limit(params.limit).all()
    items = [serialize(row) for row in rows] if serialize else rows
    return build_page(items, params, total)

"""Task Query — pure pagination, ordering and date-parsing rules for task listings.

Invariants:
    - page is 1..MAX_PAGE and limit >= 1; offset = (page - 1) * limit
    - Priority rank is high=1 < medium=2 < low=3; unknown values rank as medium
    - sort_order defaults to DESC whenever a sort field is given without one
    - total_pages is ceil(total / limit), 0 for an empty listing

Design Decisions:
    - Rank table lives here (not in SQL text) so the store's CASE expression and
      any in-memory ordering share one source of truth
"""

import math
from dataclasses import dataclass
from datetime import date, datetime

from tasktracker.core.domain_types import Priority, SortField, SortOrder

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
MAX_LIMIT = 100
# INTEGER column range; keeps ids and offsets inside what the driver can bind
MAX_TASK_ID = 2**31 - 1
MAX_PAGE = 2**31 - 1

PRIORITY_RANK: dict[Priority, int] = {
    Priority.HIGH: 1,
    Priority.MEDIUM: 2,
    Priority.LOW: 3,
}
DEFAULT_RANK = PRIORITY_RANK[Priority.MEDIUM]


@dataclass(frozen=True)
class TaskListQuery:
    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_LIMIT
    sort_by: SortField | None = None
    sort_order: SortOrder | None = None

    def __post_init__(self):
        if not 1 <= self.page <= MAX_PAGE:
            raise ValueError(f"page must be between 1 and {MAX_PAGE}")
        if self.limit < 1:
            raise ValueError("limit must be >= 1")

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


def resolve_sort_order(sort_order: SortOrder | None) -> SortOrder:
    return sort_order or SortOrder.DESC


def priority_rank(priority: Priority | str | None) -> int:
    try:
        return PRIORITY_RANK[Priority(priority)]
    except ValueError:
        return DEFAULT_RANK


def total_pages(total: int, limit: int) -> int:
    if limit < 1:
        raise ValueError("limit must be >= 1")
    return math.ceil(total / limit)


def parse_end_date(value: date | str | None) -> date | None:
    """Accept a calendar date or an ISO 8601 date/datetime string; keep the date part."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        raise ValueError("end_date must be a valid ISO 8601 date (YYYY-MM-DD)")
    text = value.strip()
    if not text:
        raise ValueError("end_date must be a valid ISO 8601 date (YYYY-MM-DD)")
    try:
        return date.fromisoformat(text)
    except ValueError:
        pass
    try:
        # "Z" suffix is only accepted by fromisoformat on newer interpreters
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    except ValueError:
        raise ValueError("end_date must be a valid ISO 8601 date (YYYY-MM-DD)")

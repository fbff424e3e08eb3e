"""Task Query — pagination math, priority rank, sort defaults, date parsing."""

from datetime import date, datetime

import pytest

from tasktracker.core.domain_types import Priority, SortOrder
from tasktracker.core.task_query import (
    MAX_PAGE, TaskListQuery, parse_end_date, priority_rank, resolve_sort_order,
    total_pages,
)


def test_defaults_are_first_page_of_ten():
    q = TaskListQuery()
    assert (q.page, q.limit, q.offset) == (1, 10, 0)
    assert q.sort_by is None


def test_offset_is_page_minus_one_times_limit():
    assert TaskListQuery(page=2, limit=10).offset == 10
    assert TaskListQuery(page=4, limit=25).offset == 75


@pytest.mark.parametrize("page,limit", [(0, 10), (1, 0), (-1, 5)])
def test_rejects_non_positive_page_or_limit(page, limit):
    with pytest.raises(ValueError):
        TaskListQuery(page=page, limit=limit)


def test_page_is_capped_so_offset_stays_bindable():
    q = TaskListQuery(page=MAX_PAGE, limit=100)
    assert q.offset < 2**63
    with pytest.raises(ValueError):
        TaskListQuery(page=MAX_PAGE + 1)


def test_priority_rank_is_not_lexical():
    ranks = sorted(Priority, key=priority_rank)
    assert ranks == [Priority.HIGH, Priority.MEDIUM, Priority.LOW]
    # lexical order would be high, low, medium
    assert sorted(p.value for p in Priority) == ["high", "low", "medium"]


def test_unknown_priority_ranks_as_medium():
    assert priority_rank("urgent") == priority_rank(Priority.MEDIUM)
    assert priority_rank(None) == priority_rank(Priority.MEDIUM)


def test_sort_order_defaults_to_desc():
    assert resolve_sort_order(None) is SortOrder.DESC
    assert resolve_sort_order(SortOrder.ASC) is SortOrder.ASC


@pytest.mark.parametrize("total,limit,expected", [
    (0, 10, 0), (15, 10, 2), (20, 10, 2), (21, 10, 3), (1, 100, 1),
])
def test_total_pages(total, limit, expected):
    assert total_pages(total, limit) == expected


def test_parse_end_date_accepts_calendar_date():
    assert parse_end_date("2026-03-01") == date(2026, 3, 1)


def test_parse_end_date_keeps_date_part_of_datetime():
    assert parse_end_date("2026-03-01T15:30:00Z") == date(2026, 3, 1)
    assert parse_end_date(datetime(2026, 3, 1, 23, 59)) == date(2026, 3, 1)


def test_parse_end_date_passes_none_through():
    assert parse_end_date(None) is None


@pytest.mark.parametrize("value", ["", "tomorrow", "2026-13-01", 20260301])
def test_parse_end_date_rejects_garbage(value):
    with pytest.raises(ValueError):
        parse_end_date(value)

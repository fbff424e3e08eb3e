"""Domain Types — verifies rich type definitions and enum values.

Tests:
    - NewType wrappers exist and are callable
    - Priority has exactly 3 members
    - RequestContext is immutable
"""

import dataclasses

import pytest

from tasktracker.core.domain_types import (
    Priority, RequestContext, SortField, SortOrder, TaskId, UserId,
)


def test_identity_types_wrap_int():
    assert UserId(3) == 3
    assert TaskId(4) == 4


def test_priority_has_exactly_three_levels():
    assert {p.value for p in Priority} == {"low", "medium", "high"}


def test_sort_enums_match_query_values():
    assert {f.value for f in SortField} == {"end_date", "priority"}
    assert {o.value for o in SortOrder} == {"asc", "desc"}


def test_request_context_is_frozen():
    ctx = RequestContext(user_id=UserId(1))
    with pytest.raises(dataclasses.FrozenInstanceError):
        ctx.user_id = UserId(2)

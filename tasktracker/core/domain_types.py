"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - UserId and TaskId wrap ints — database-assigned, immutable
    - Priority has exactly three members; its rank order is NOT its lexical order
    - All valid states encoded as Enums — no raw string matching

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
"""

from dataclasses import dataclass
from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

UserId = NewType("UserId", int)
TaskId = NewType("TaskId", int)


# ─── Enums ───────────────────────────────────────────────────────

class Priority(str, Enum):
    """Task priority — stored as the DB enum `task_priority`."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class SortField(str, Enum):
    """Columns a task listing may be ordered by."""
    END_DATE = "end_date"
    PRIORITY = "priority"


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"


# ─── Request Context ─────────────────────────────────────────────

@dataclass(frozen=True)
class RequestContext:
    """Identity resolved by the auth gate, threaded into handlers."""
    user_id: UserId

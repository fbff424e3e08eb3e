"""ORM Models — SQLAlchemy declarative models for all domain entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - User owns Task rows through tasks.user_id

Design Decisions:
    - One file per entity for locality
    - All models imported here so Base.metadata (create_all, alembic) sees every
      table and the tasks.user_id foreign key resolves
"""

from tasktracker.models.user import User  # noqa: F401
from tasktracker.models.task import Task  # noqa: F401

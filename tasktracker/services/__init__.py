"""Services Layer — credential store, task store, and auth orchestration.

Invariants:
    - Stores take an AsyncSession in their constructor (no global session)
    - Every task operation is scoped by an owner id supplied by the caller
"""

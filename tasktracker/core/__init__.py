"""Core Layer — pure domain logic, no IO, no async, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - All functions are deterministic given their inputs (clock and salt aside)

Design Decisions:
    - Functional core separated from imperative shell
"""

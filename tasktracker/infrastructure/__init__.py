"""Infrastructure Layer — database session management and logging setup.

Invariants:
    - Infrastructure never imports from services/ or api/
    - SQLAlchemy failures mapped to PersistenceError at the session boundary
"""

# persistence/__init__.py
"""
Persistence layer.

Provides the SQLite-backed Database handle shared by the user, session
and task stores.
"""

from persistence.db import Database, StoreError, ConstraintError, MEMORY_PATH

__all__ = [
    "Database",
    "StoreError",
    "ConstraintError",
    "MEMORY_PATH",
]

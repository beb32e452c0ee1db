# tasks/__init__.py
"""
Task module.

Provides:
- Task model
- Owner-scoped task store
- Task service (list, create, toggle, update, delete)
"""

from tasks.models import Task
from tasks.store import TaskStore
from tasks.service import TaskService, UNSET
from tasks.exceptions import (
    TaskError,
    TaskNotFoundError,
    InvalidTitleError,
    InvalidDueDateError,
)

__all__ = [
    "Task",
    "TaskStore",
    "TaskService",
    "UNSET",
    "TaskError",
    "TaskNotFoundError",
    "InvalidTitleError",
    "InvalidDueDateError",
]

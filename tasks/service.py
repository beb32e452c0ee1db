# tasks/service.py
"""
Task service.

CRUD over the task store for one authenticated user at a time. The caller
passes the user ID it resolved from the session; every read and write is
scoped to that owner.
"""

from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Optional

from auth.exceptions import UnauthenticatedError
from tasks.exceptions import InvalidDueDateError, InvalidTitleError, TaskNotFoundError
from tasks.models import Task
from tasks.store import TaskStore

_logger = logging.getLogger(__name__)

# Marks "field not supplied" in partial updates (None means "clear it")
UNSET = object()


def _require_user(user_id: Optional[str]) -> str:
    if not user_id:
        raise UnauthenticatedError()
    return user_id


def clean_title(title) -> str:
    """Trimmed title, or InvalidTitleError if nothing is left."""
    if not isinstance(title, str) or not title.strip():
        raise InvalidTitleError()
    return title.strip()


def clean_due_date(due_date) -> Optional[str]:
    """
    Validate an optional due date and return it unchanged.

    Empty values mean "no due date". Anything else must parse as an ISO
    date ("2024-05-01") or datetime ("2024-05-01T09:00:00Z").
    """
    if due_date is None or due_date == "":
        return None
    if not isinstance(due_date, str):
        raise InvalidDueDateError()

    try:
        date.fromisoformat(due_date)
        return due_date
    except ValueError:
        pass

    try:
        datetime.fromisoformat(due_date.replace("Z", "+00:00"))
    except ValueError:
        raise InvalidDueDateError()
    return due_date


class TaskService:
    """Per-user task operations."""

    def __init__(self, store: TaskStore):
        self.store = store

    def list(self, user_id: Optional[str]) -> list[Task]:
        """The caller's tasks, most recent first."""
        return self.store.list_for_owner(_require_user(user_id))

    def create(self, user_id: Optional[str], title, due_date=None) -> Task:
        """
        Create a task owned by the caller.

        Raises:
            UnauthenticatedError: No user ID
            InvalidTitleError: Title blank after trimming
            InvalidDueDateError: Due date not ISO-8601
        """
        owner_id = _require_user(user_id)
        task = Task.new(
            owner_id=owner_id,
            title=clean_title(title),
            due_date=clean_due_date(due_date),
        )
        self.store.insert(task)
        _logger.info(f"Created task {task.id} for user: {owner_id}")
        return task

    def toggle_complete(self, user_id: Optional[str], task_id: str) -> Task:
        """Flip a task's completed flag."""
        task = self.store.toggle_completed(_require_user(user_id), task_id)
        if task is None:
            raise TaskNotFoundError()
        return task

    def update(self, user_id: Optional[str], task_id: str, title=UNSET, due_date=UNSET) -> Task:
        """
        Partially update a task's title and/or due date.

        Fields left as UNSET are kept. due_date=None clears the due date.

        Raises:
            TaskNotFoundError: No such task for this user
            InvalidTitleError: Title supplied but blank
        """
        owner_id = _require_user(user_id)

        # Validate before the lookup so bad input is a 400 either way
        new_title = clean_title(title) if title is not UNSET else UNSET
        new_due_date = clean_due_date(due_date) if due_date is not UNSET else UNSET

        task = self.store.get_for_owner(owner_id, task_id)
        if task is None:
            raise TaskNotFoundError()

        if new_title is not UNSET:
            task.title = new_title
        if new_due_date is not UNSET:
            task.due_date = new_due_date

        if not self.store.update(task):
            # Deleted between the read and the write
            raise TaskNotFoundError()
        return task

    def delete(self, user_id: Optional[str], task_id: str) -> None:
        """Delete one of the caller's tasks."""
        owner_id = _require_user(user_id)
        if not self.store.delete_for_owner(owner_id, task_id):
            raise TaskNotFoundError()
        _logger.info(f"Deleted task {task_id} for user: {owner_id}")

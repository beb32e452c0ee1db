# tasks/exceptions.py
"""
Task errors, each with a client-safe message and HTTP status.
"""

from __future__ import annotations

from typing import Optional


class TaskError(Exception):
    """Base task error."""

    status_code = 400
    default_message = "Invalid task request"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class TaskNotFoundError(TaskError):
    """No such task for this user (missing and not-owned look the same)."""

    status_code = 404
    default_message = "Task not found"


class InvalidTitleError(TaskError):
    """Title is missing or blank after trimming."""

    default_message = "Task title is required"


class InvalidDueDateError(TaskError):
    """Due date isn't an ISO-8601 date or datetime."""

    default_message = "Due date must be an ISO date"

# tasks/models.py
"""
Task model.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional
import uuid


@dataclass
class Task:
    """
    To-do item owned by exactly one user.

    Attributes:
        id: Unique task ID (UUID)
        owner_id: ID of the owning user; set once at creation
        title: Non-empty, whitespace-trimmed title
        completed: Completion flag
        due_date: Optional ISO-8601 date or datetime, kept as given
        created_at: Creation timestamp (drives list ordering)
    """
    id: str
    owner_id: str
    title: str
    completed: bool = False
    due_date: Optional[str] = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def new(cls, owner_id: str, title: str, due_date: Optional[str] = None) -> Task:
        """Create a new, incomplete task with generated ID."""
        return cls(
            id=str(uuid.uuid4()),
            owner_id=owner_id,
            title=title,
            completed=False,
            due_date=due_date,
            created_at=datetime.now(timezone.utc),
        )

    def to_dict(self) -> dict:
        """
        JSON shape served to the browser.

        "_id" mirrors "id" for clients written against the document-store
        API. The owner is never exposed.
        """
        return {
            "_id": self.id,
            "id": self.id,
            "title": self.title,
            "completed": self.completed,
            "dueDate": self.due_date,
            "createdAt": self.created_at.isoformat(),
        }

# tasks/store.py
"""
Task store.

Every query is keyed on owner_id as well as the task ID, so a task owned by
someone else looks exactly like a task that doesn't exist.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from persistence.db import Database
from tasks.models import Task


class TaskStore:
    """Persists tasks in the tasks table."""

    def __init__(self, db: Database):
        self._db = db

    def insert(self, task: Task) -> Task:
        with self._db.connect() as conn:
            conn.execute(
                """
                INSERT INTO tasks (id, owner_id, title, completed, due_date, created_at)
                VALUES (?, ?, ?, ?, ?, ?)
                """,
                (
                    task.id,
                    task.owner_id,
                    task.title,
                    int(task.completed),
                    task.due_date,
                    task.created_at.isoformat(),
                ),
            )
        return task

    def list_for_owner(self, owner_id: str) -> list[Task]:
        """All of one user's tasks, newest first."""
        with self._db.connect() as conn:
            rows = conn.execute(
                """
                SELECT * FROM tasks
                WHERE owner_id = ?
                ORDER BY created_at DESC, rowid DESC
                """,
                (owner_id,),
            ).fetchall()

        return [_row_to_task(row) for row in rows]

    def get_for_owner(self, owner_id: str, task_id: str) -> Optional[Task]:
        with self._db.connect() as conn:
            row = conn.execute(
                "SELECT * FROM tasks WHERE id = ? AND owner_id = ?",
                (task_id, owner_id),
            ).fetchone()

        return _row_to_task(row) if row else None

    def toggle_completed(self, owner_id: str, task_id: str) -> Optional[Task]:
        """Flip the completed flag in place. None if not found for this owner."""
        with self._db.connect() as conn:
            cursor = conn.execute(
                """
                UPDATE tasks SET completed = NOT completed
                WHERE id = ? AND owner_id = ?
                """,
                (task_id, owner_id),
            )
            if cursor.rowcount == 0:
                return None

            row = conn.execute(
                "SELECT * FROM tasks WHERE id = ?",
                (task_id,),
            ).fetchone()

        return _row_to_task(row)

    def update(self, task: Task) -> bool:
        """Write back title and due date. owner_id is never rewritten."""
        with self._db.connect() as conn:
            cursor = conn.execute(
                """
                UPDATE tasks SET title = ?, due_date = ?
                WHERE id = ? AND owner_id = ?
                """,
                (task.title, task.due_date, task.id, task.owner_id),
            )
            return cursor.rowcount > 0

    def delete_for_owner(self, owner_id: str, task_id: str) -> bool:
        with self._db.connect() as conn:
            cursor = conn.execute(
                "DELETE FROM tasks WHERE id = ? AND owner_id = ?",
                (task_id, owner_id),
            )
            return cursor.rowcount > 0


def _row_to_task(row) -> Task:
    """Convert a database row to a Task object."""
    return Task(
        id=row["id"],
        owner_id=row["owner_id"],
        title=row["title"],
        completed=bool(row["completed"]),
        due_date=row["due_date"],
        created_at=datetime.fromisoformat(row["created_at"]),
    )

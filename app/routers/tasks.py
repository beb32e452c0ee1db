"""
Task API endpoints.

Every route depends on get_required_user_id, so the session cookie is
checked before the task service is touched.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel, ConfigDict, Field

from auth.middleware import get_required_user_id
from tasks.exceptions import InvalidTitleError
from tasks.service import UNSET, TaskService

router = APIRouter(prefix="/api/tasks", tags=["tasks"])


# =============================================================================
# Request Schemas
# =============================================================================

class TaskCreateRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    title: str
    due_date: Optional[str] = Field(default=None, alias="dueDate")


class TaskUpdateRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    title: Optional[str] = None
    due_date: Optional[str] = Field(default=None, alias="dueDate")


def get_task_service(request: Request) -> TaskService:
    """FastAPI dependency: the application's TaskService."""
    return request.app.state.task_service


# =============================================================================
# Routes
# =============================================================================

@router.get("")
def list_tasks(
    user_id: str = Depends(get_required_user_id),
    task_service: TaskService = Depends(get_task_service),
):
    """The caller's tasks, newest first."""
    return [task.to_dict() for task in task_service.list(user_id)]


@router.post("", status_code=201)
def create_task(
    body: TaskCreateRequest,
    user_id: str = Depends(get_required_user_id),
    task_service: TaskService = Depends(get_task_service),
):
    """Create a task."""
    task = task_service.create(user_id, body.title, body.due_date)
    return task.to_dict()


@router.patch("/{task_id}")
def toggle_task(
    task_id: str,
    user_id: str = Depends(get_required_user_id),
    task_service: TaskService = Depends(get_task_service),
):
    """Toggle complete/incomplete."""
    return task_service.toggle_complete(user_id, task_id).to_dict()


@router.put("/{task_id}")
def update_task(
    task_id: str,
    body: TaskUpdateRequest,
    user_id: str = Depends(get_required_user_id),
    task_service: TaskService = Depends(get_task_service),
):
    """Update title and (if sent) due date."""
    if body.title is None:
        raise InvalidTitleError()

    due_date = body.due_date if "due_date" in body.model_fields_set else UNSET
    task = task_service.update(user_id, task_id, title=body.title, due_date=due_date)
    return task.to_dict()


@router.delete("/{task_id}")
def delete_task(
    task_id: str,
    user_id: str = Depends(get_required_user_id),
    task_service: TaskService = Depends(get_task_service),
):
    """Delete a task."""
    task_service.delete(user_id, task_id)
    return {"message": "Task deleted successfully"}

from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from ..config import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from ..database import get_db
from ..dependencies import require_capability
from ..errors import ValidationError
from ..models import TaskStatus, User
from ..permissions import Capability
from ..schemas.task import DeleteResponse, TaskCreate, TaskPage, TaskResponse, TaskUpdate
from ..services import tasks as task_service
from .auth import get_current_user

router = APIRouter()


def _parse_status_filter(value: Optional[str]) -> Optional[TaskStatus]:
    if value is None or value == "" or value == "all":
        return None
    try:
        return TaskStatus(value)
    except ValueError:
        raise ValidationError("Invalid status filter")


@router.post("/tasks", response_model=TaskResponse, status_code=status.HTTP_201_CREATED)
def create_task(
    task: TaskCreate,
    current_user: User = Depends(require_capability(Capability.CREATE_TASK)),
    db: Session = Depends(get_db),
):
    """Create a new task owned by the current user."""
    return task_service.create_task(db, current_user.id, task)


@router.get("/tasks", response_model=TaskPage)
def get_tasks(
    page: int = Query(1, ge=1),
    limit: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
    status: Optional[str] = None,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Get the current user's tasks, newest first, one page at a time."""
    return task_service.list_tasks(
        db,
        current_user.id,
        page=page,
        page_size=limit,
        status=_parse_status_filter(status),
    )


@router.get("/tasks/{task_id}", response_model=TaskResponse)
def get_task(
    task_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return task_service.get_task(db, current_user.id, task_id)


@router.put("/tasks/{task_id}", response_model=TaskResponse)
def update_task(
    task_id: str,
    task_update: TaskUpdate,
    current_user: User = Depends(require_capability(Capability.UPDATE_OWN_TASK)),
    db: Session = Depends(get_db),
):
    """Update a task. Only the owner may do this."""
    return task_service.update_task(db, current_user.id, task_id, task_update)


@router.delete("/tasks/{task_id}", response_model=DeleteResponse)
def delete_task(
    task_id: str,
    current_user: User = Depends(require_capability(Capability.DELETE_ANY_TASK)),
    db: Session = Depends(get_db),
):
    """Delete a task (admin only, any owner)."""
    task_service.delete_task(db, current_user.role, task_id)
    return {"message": "Task removed successfully"}

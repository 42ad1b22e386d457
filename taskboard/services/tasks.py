"""Ownership-checked task operations.

Routers translate HTTP into these calls; everything here raises the errors
from ``taskboard.errors`` and never touches request objects.
"""

import math
from typing import Any, Dict, Optional, Union

from sqlalchemy.orm import Session

from ..errors import ForbiddenError, NotFoundError, ValidationError
from ..models import Task, TaskStatus, UserRole
from ..permissions import Capability, ensure_capability
from ..schemas.task import TaskCreate, TaskPage, TaskResponse, TaskUpdate
from ..utils.logging import get_logger
from ..utils.time import utcnow

logger = get_logger(__name__)

_UPDATABLE_FIELDS = ("title", "description", "status")


def _is_blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


def _get_update_data(task_update: TaskUpdate) -> Dict[str, Any]:
    return task_update.model_dump(exclude_unset=True)


def _load_task(db: Session, task_id: str) -> Task:
    task = db.query(Task).filter(Task.id == task_id).first()
    if not task:
        raise NotFoundError("Task not found")
    return task


def _ensure_owner(task: Task, owner_id: str, action: str) -> None:
    if task.owner_id != owner_id:
        logger.warning("User %s tried to %s task %s owned by %s", owner_id, action, task.id, task.owner_id)
        raise ForbiddenError(f"Not authorized to {action} this task")


def create_task(db: Session, owner_id: str, data: TaskCreate) -> Task:
    """Create a task for ``owner_id``. Status defaults to Pending."""
    if _is_blank(data.title) or _is_blank(data.description):
        raise ValidationError("Please provide title and description")

    task = Task(
        title=data.title,
        description=data.description,
        status=data.status or TaskStatus.PENDING,
        owner_id=owner_id,
    )
    db.add(task)
    db.commit()
    db.refresh(task)
    logger.info("Created task %s for user %s", task.id, owner_id)
    return task


def list_tasks(
    db: Session,
    owner_id: str,
    page: int = 1,
    page_size: int = 10,
    status: Optional[TaskStatus] = None,
) -> TaskPage:
    """Return one page of the owner's tasks, newest first.

    Ties on ``created_at`` are broken by id so that consecutive pages never
    overlap or skip rows for a static dataset.
    """
    if page < 1:
        raise ValidationError("page must be at least 1")
    if page_size < 1:
        raise ValidationError("limit must be at least 1")

    query = db.query(Task).filter(Task.owner_id == owner_id)
    if status is not None:
        query = query.filter(Task.status == status)

    total = query.count()
    rows = (
        query.order_by(Task.created_at.desc(), Task.id.desc())
        .offset((page - 1) * page_size)
        .limit(page_size)
        .all()
    )

    return TaskPage(
        tasks=[TaskResponse.model_validate(row) for row in rows],
        current_page=page,
        total_pages=math.ceil(total / page_size),
        total_tasks=total,
    )


def get_task(db: Session, owner_id: str, task_id: str) -> Task:
    task = _load_task(db, task_id)
    _ensure_owner(task, owner_id, "access")
    return task


def update_task(db: Session, owner_id: str, task_id: str, task_update: TaskUpdate) -> Task:
    """Overwrite the fields present in ``task_update``.

    Missing, null and empty values keep the previous value, so a field can
    never be cleared through an update.
    """
    task = _load_task(db, task_id)
    _ensure_owner(task, owner_id, "update")

    for field, value in _get_update_data(task_update).items():
        if field not in _UPDATABLE_FIELDS or not value:
            continue
        if isinstance(value, str) and not value.strip():
            continue
        setattr(task, field, value)

    task.updated_at = utcnow()

    db.commit()
    db.refresh(task)
    logger.info("Updated task %s", task.id)
    return task


def delete_task(db: Session, requester_role: Union[UserRole, str], task_id: str) -> None:
    """Delete any task. Only roles holding DELETE_ANY_TASK may do this."""
    ensure_capability(requester_role, Capability.DELETE_ANY_TASK)

    task = _load_task(db, task_id)
    db.delete(task)
    db.commit()
    logger.info("Deleted task %s", task_id)

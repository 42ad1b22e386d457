from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from datetime import datetime
from typing import List, Optional

from ..models.task import TaskStatus


class TaskCreate(BaseModel):
    """Schema for creating new tasks.

    Title and description are optional here so that a missing field is
    reported as a validation error by the service rather than by pydantic.
    """
    title: Optional[str] = None
    description: Optional[str] = None
    status: Optional[TaskStatus] = None


class TaskUpdate(BaseModel):
    """Schema for updating existing tasks."""
    title: Optional[str] = None
    description: Optional[str] = None
    status: Optional[TaskStatus] = None


class TaskResponse(BaseModel):
    """Task as returned by the API."""
    id: str
    title: str
    description: str
    status: TaskStatus
    owner_id: str
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True, alias_generator=to_camel, populate_by_name=True)


class TaskPage(BaseModel):
    """One page of a user's tasks."""
    tasks: List[TaskResponse]
    current_page: int
    total_pages: int
    total_tasks: int

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class DeleteResponse(BaseModel):
    message: str

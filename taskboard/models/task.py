from sqlmodel import SQLModel, Field, Relationship
from datetime import datetime
from typing import Optional
from uuid import uuid4
import enum

from ..utils.time import utcnow


class TaskStatus(str, enum.Enum):
    PENDING = "Pending"
    COMPLETED = "Completed"


class Task(SQLModel, table=True):
    """Task owned by exactly one user.

    ``owner_id`` is set at creation and never changes.
    """
    __tablename__ = "tasks"

    id: str = Field(default_factory=lambda: str(uuid4()), primary_key=True)
    title: str
    description: str
    status: TaskStatus = Field(default=TaskStatus.PENDING, index=True)
    created_at: datetime = Field(default_factory=utcnow, index=True)
    updated_at: datetime = Field(default_factory=utcnow)
    owner_id: str = Field(foreign_key="users.id", index=True)

    # Relationship back to user
    owner: Optional["User"] = Relationship(back_populates="tasks")

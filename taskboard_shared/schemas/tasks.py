"""Task-related Pydantic schemas for shared use across server and frontend codegen."""

from __future__ import annotations

from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from .common import Section, TaskGroup, TaskStatus, TaskType


# ---------------------------------------------------------------------------
# Task CRUD
# ---------------------------------------------------------------------------

class TaskBase(BaseModel):
    title: str
    description: str = ""
    group: TaskGroup = TaskGroup.PERSONAL
    task_type: TaskType = TaskType.REGULAR
    project_id: Optional[str] = None
    due_date: Optional[date] = None
    priority: Optional[int] = None

    @field_validator("due_date", mode="before")
    @classmethod
    def _blank_due_date(cls, v):
        # The UI sends "" when a date picker is cleared
        return None if v == "" else v


class TaskCreate(TaskBase):
    pass


class TaskUpdate(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    group: Optional[TaskGroup] = None
    task_type: Optional[TaskType] = None
    project_id: Optional[str] = None
    due_date: Optional[date] = None
    priority: Optional[int] = None
    status: Optional[TaskStatus] = None
    order_rank: Optional[float] = None

    @field_validator("due_date", mode="before")
    @classmethod
    def _blank_due_date(cls, v):
        # The UI sends "" when a date picker is cleared
        return None if v == "" else v


class TaskRead(BaseModel):
    id: str
    title: str
    description: str = ""
    status: TaskStatus
    group: TaskGroup
    task_type: TaskType
    project_id: Optional[str] = None
    due_date: Optional[date] = None
    is_longer_term: bool
    priority: Optional[int] = None
    order_rank: float
    completed_at: Optional[datetime] = None
    archived_at: Optional[datetime] = None
    deleted_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


# ---------------------------------------------------------------------------
# Scheduling operations
# ---------------------------------------------------------------------------

class TaskStatusChange(BaseModel):
    """Request body for POST /tasks/{taskId}/status."""
    status: TaskStatus


class TaskSnooze(BaseModel):
    """Request body for POST /tasks/{taskId}/snooze.

    ``client_today`` is the caller's local calendar date. It is optional in the
    schema so the service can reject its absence with a domain error instead
    of a generic request-validation failure.
    """
    client_today: Optional[date] = None


class TaskReorder(BaseModel):
    """Request body for POST /tasks/{taskId}/reorder."""
    target_section: Section
    before_task_id: Optional[str] = None
    after_task_id: Optional[str] = None
    client_today: Optional[date] = None


# ---------------------------------------------------------------------------
# Board
# ---------------------------------------------------------------------------

class BoardSection(BaseModel):
    section: Section
    title: str
    tasks: List[TaskRead] = Field(default_factory=list)


class BoardRead(BaseModel):
    today: date
    sections: List[BoardSection] = Field(default_factory=list)
    work_focus: List[TaskRead] = Field(default_factory=list)

"""Task model."""

from __future__ import annotations

from datetime import date, datetime
from typing import Any, Optional

from pydantic import Field, computed_field, field_validator

from taskboard_shared.schemas.common import TaskGroup, TaskStatus, TaskType

from .base import TimestampMixin, UUIDMixin, now_ms


class Task(UUIDMixin, TimestampMixin):
    title: str
    description: str = ""
    status: TaskStatus = TaskStatus.OPEN
    group: TaskGroup = TaskGroup.PERSONAL
    task_type: TaskType = TaskType.REGULAR
    project_id: Optional[str] = None
    due_date: Optional[date] = None
    priority: Optional[int] = None
    order_rank: float = Field(default_factory=now_ms)
    completed_at: Optional[datetime] = None
    archived_at: Optional[datetime] = None
    deleted_at: Optional[datetime] = None

    @field_validator("task_type", mode="before")
    @classmethod
    def _legacy_task_type(cls, v):
        # Documents written before task types existed carry no value
        return v or TaskType.REGULAR

    @field_validator("due_date", "project_id", mode="before")
    @classmethod
    def _blank_to_none(cls, v):
        return v or None

    @computed_field
    @property
    def is_longer_term(self) -> bool:
        return self.due_date is None

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None

    @property
    def is_archived(self) -> bool:
        return self.archived_at is not None

    @classmethod
    def from_document(cls, doc: dict[str, Any]) -> "Task":
        return cls.model_validate(doc)

    def to_document(self) -> dict[str, Any]:
        return self.model_dump(mode="json")

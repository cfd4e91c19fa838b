"""
Section population: group a task collection into the board's display sections.

Only regular work tasks are date-bucketed. Special task types are pinned to
their own sections, and personal tasks all land in personal-focus.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Iterable, Optional

from taskboard.models.task import Task
from taskboard.services.scheduling import date_section
from taskboard_shared.schemas.common import (
    DATE_SECTIONS,
    Section,
    TaskGroup,
    TaskStatus,
    TaskType,
)


@dataclass
class TaskFilter:
    """Optional board filters. ``None`` means "all"."""
    group: Optional[TaskGroup] = None
    status: Optional[TaskStatus] = None
    project_id: Optional[str] = None
    search: Optional[str] = None

    def matches(self, task: Task) -> bool:
        if self.group is not None and task.group != self.group:
            return False
        if self.status is not None and task.status != self.status:
            return False
        if self.project_id is not None and task.project_id != self.project_id:
            return False
        if self.search and self.search.lower() not in task.title.lower():
            return False
        return True


@dataclass
class Board:
    sections: dict[Section, list[Task]]
    work_focus: list[Task] = field(default_factory=list)


def _by_rank(task: Task) -> float:
    return task.order_rank


def _personal_sort_key(task: Task) -> tuple:
    # Dated tasks first, by date; undated after; rank breaks ties
    if task.due_date is None:
        return (1, date.max, task.order_rank)
    return (0, task.due_date, task.order_rank)


def populate_sections(
    tasks: Iterable[Task],
    today: date,
    task_filter: Optional[TaskFilter] = None,
) -> Board:
    """Build every section for ``today``. Archived and deleted tasks are skipped."""
    sections: dict[Section, list[Task]] = {section: [] for section in Section}
    work_focus: list[Task] = []
    task_filter = task_filter or TaskFilter()

    for task in tasks:
        if task.is_deleted or task.is_archived or not task_filter.matches(task):
            continue

        if task.task_type == TaskType.WORK_FOCUS:
            work_focus.append(task)
        elif task.task_type == TaskType.TO_READ:
            sections[Section.TO_READ].append(task)
        elif task.group == TaskGroup.PERSONAL:
            sections[Section.PERSONAL_FOCUS].append(task)
        else:
            sections[date_section(task.due_date, today)].append(task)

    sections[Section.PERSONAL_FOCUS].sort(key=_personal_sort_key)
    for section in [*DATE_SECTIONS, Section.TO_READ]:
        sections[section].sort(key=_by_rank)
    work_focus.sort(key=_by_rank)

    return Board(sections=sections, work_focus=work_focus)

"""
Task endpoints: CRUD, status, archive, snooze, reorder, board.

Sections: Personal Focus, To Read, Today, This Week, Next Week,
After Next Week, Backlog.
- Date-sensitive operations take the client's local date (``client_today``
  in bodies, ``today`` in queries). The server clock is never used for it.
- Reorder resolves a drag-and-drop into a new due date and order rank.
- Delete is a soft delete.
"""

from __future__ import annotations

from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from taskboard.core.store import KVStore, get_store
from taskboard.models.task import Task
from taskboard.services.sections import TaskFilter, populate_sections
from taskboard.services.tasks import (
    archive_task,
    create_task,
    delete_task,
    get_task_or_404,
    list_archived_tasks,
    list_tasks,
    reorder_task,
    snooze_task,
    toggle_status,
    update_task,
)
from taskboard_shared.schemas.common import SECTION_TITLES, Section, TaskGroup, TaskStatus
from taskboard_shared.schemas.tasks import (
    BoardRead,
    BoardSection,
    TaskCreate,
    TaskRead,
    TaskReorder,
    TaskSnooze,
    TaskStatusChange,
    TaskUpdate,
)

router = APIRouter()

# Display order of the board
BOARD_ORDER = [
    Section.PERSONAL_FOCUS,
    Section.TO_READ,
    Section.TODAY,
    Section.THIS_WEEK,
    Section.NEXT_WEEK,
    Section.AFTER_NEXT_WEEK,
    Section.LONGER_TERM,
]


def _read(task: Task) -> TaskRead:
    return TaskRead.model_validate(task)


# ---------------------------------------------------------------------------
# Collections
# ---------------------------------------------------------------------------


@router.get("/", response_model=List[TaskRead])
async def list_tasks_endpoint(store: KVStore = Depends(get_store)):
    """List active (non-archived, non-deleted) tasks."""
    return [_read(t) for t in await list_tasks(store)]


@router.get("/archived", response_model=List[TaskRead])
async def list_archived_endpoint(store: KVStore = Depends(get_store)):
    """List archived tasks."""
    return [_read(t) for t in await list_archived_tasks(store)]


@router.get("/board", response_model=BoardRead)
async def board_endpoint(
    today: date = Query(..., description="Client's local date, YYYY-MM-DD"),
    group: Optional[TaskGroup] = None,
    status: Optional[TaskStatus] = None,
    project_id: Optional[str] = None,
    search: Optional[str] = None,
    store: KVStore = Depends(get_store),
):
    """Active tasks grouped into display sections for the given day."""
    task_filter = TaskFilter(group=group, status=status, project_id=project_id, search=search)
    board = populate_sections(await list_tasks(store), today, task_filter)
    return BoardRead(
        today=today,
        sections=[
            BoardSection(
                section=section,
                title=SECTION_TITLES[section],
                tasks=[_read(t) for t in board.sections[section]],
            )
            for section in BOARD_ORDER
        ],
        work_focus=[_read(t) for t in board.work_focus],
    )


@router.post("/", response_model=TaskRead, status_code=201)
async def create_task_endpoint(task_in: TaskCreate, store: KVStore = Depends(get_store)):
    """Quick-add a task. Unset fields get server defaults."""
    return _read(await create_task(store, task_in))


# ---------------------------------------------------------------------------
# Single task
# ---------------------------------------------------------------------------


@router.get("/{task_id}", response_model=TaskRead)
async def get_task_endpoint(task_id: str, store: KVStore = Depends(get_store)):
    return _read(await get_task_or_404(store, task_id))


@router.patch("/{task_id}", response_model=TaskRead)
async def update_task_endpoint(
    task_id: str,
    task_in: TaskUpdate,
    store: KVStore = Depends(get_store),
):
    """Partial update. Only fields present in the body change."""
    return _read(await update_task(store, task_id, task_in))


@router.delete("/{task_id}")
async def delete_task_endpoint(task_id: str, store: KVStore = Depends(get_store)):
    """Soft-delete a task."""
    await delete_task(store, task_id)
    return {"ok": True}


@router.post("/{task_id}/status", response_model=TaskRead)
async def toggle_status_endpoint(
    task_id: str,
    body: TaskStatusChange,
    store: KVStore = Depends(get_store),
):
    return _read(await toggle_status(store, task_id, body.status))


@router.post("/{task_id}/archive", response_model=TaskRead)
async def archive_task_endpoint(task_id: str, store: KVStore = Depends(get_store)):
    return _read(await archive_task(store, task_id))


# ---------------------------------------------------------------------------
# Scheduling
# ---------------------------------------------------------------------------


@router.post("/{task_id}/snooze", response_model=TaskRead)
async def snooze_task_endpoint(
    task_id: str,
    body: TaskSnooze,
    store: KVStore = Depends(get_store),
):
    """Push the due date one day past max(client_today, due date)."""
    return _read(await snooze_task(store, task_id, body.client_today))


@router.post("/{task_id}/reorder", response_model=TaskRead)
async def reorder_task_endpoint(
    task_id: str,
    body: TaskReorder,
    store: KVStore = Depends(get_store),
):
    """Drop a task into a section between two neighbours."""
    task = await reorder_task(
        store,
        task_id,
        body.target_section,
        body.before_task_id,
        body.after_task_id,
        body.client_today,
    )
    return _read(task)

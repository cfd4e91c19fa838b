"""
Task service layer: lifecycle operations and the scheduling engine.

Handles:
- Task CRUD (quick-add, partial update, soft delete, archive)
- Status toggling with completion timestamps
- Snooze (push the due date one day past the later of today and the due date)
- Reorder: resolve a drop event into a new due date and order rank

Every mutation is a single full-document write. Soft-deleted tasks behave as
missing everywhere.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from typing import Optional

import structlog

from taskboard.core.errors import NotFoundError, ValidationError
from taskboard.core.store import TASK_PREFIX, KVStore, task_key
from taskboard.models.task import Task
from taskboard.services.ranking import allocate_rank
from taskboard.services.scheduling import date_in_section, default_due_date
from taskboard_shared.schemas.common import Section, TaskStatus
from taskboard_shared.schemas.tasks import TaskCreate, TaskUpdate

log = structlog.get_logger()

# Sections whose drop never inherits a neighbour's date
NO_INHERIT_SECTIONS = {Section.TODAY, Section.LONGER_TERM}

# Fields a partial update may set to null
CLEARABLE_FIELDS = {"due_date", "project_id", "priority"}


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


async def _load_task(store: KVStore, task_id: str) -> Optional[Task]:
    doc = await store.get(task_key(task_id))
    if not doc:
        return None
    task = Task.from_document(doc)
    if task.is_deleted:
        return None
    return task


async def get_task_or_404(store: KVStore, task_id: str) -> Task:
    task = await _load_task(store, task_id)
    if task is None:
        raise NotFoundError("Task not found")
    return task


async def _save(store: KVStore, task: Task) -> Task:
    task.touch()
    await store.set(task_key(task.id), task.to_document())
    return task


def _require_today(client_today: Optional[date]) -> date:
    if client_today is None:
        raise ValidationError("Missing client_today parameter")
    return client_today


def _apply_status(task: Task, status: TaskStatus) -> None:
    if status == TaskStatus.DONE and task.status != TaskStatus.DONE:
        task.completed_at = datetime.now(timezone.utc)
    elif status == TaskStatus.OPEN:
        task.completed_at = None
    task.status = status


# ---------------------------------------------------------------------------
# Reads
# ---------------------------------------------------------------------------


async def _all_tasks(store: KVStore) -> list[Task]:
    docs = await store.get_by_prefix(TASK_PREFIX)
    tasks = [Task.from_document(doc) for doc in docs if doc]
    return [t for t in tasks if not t.is_deleted]


async def list_tasks(store: KVStore) -> list[Task]:
    """Active tasks: not deleted, not archived."""
    return [t for t in await _all_tasks(store) if not t.is_archived]


async def list_archived_tasks(store: KVStore) -> list[Task]:
    return [t for t in await _all_tasks(store) if t.is_archived]


# ---------------------------------------------------------------------------
# CRUD
# ---------------------------------------------------------------------------


async def create_task(store: KVStore, task_in: TaskCreate) -> Task:
    task = Task(**task_in.model_dump())
    await store.set(task_key(task.id), task.to_document())
    log.info("task.created", task_id=task.id, group=task.group.value, due_date=str(task.due_date))
    return task


async def update_task(store: KVStore, task_id: str, task_in: TaskUpdate) -> Task:
    task = await get_task_or_404(store, task_id)
    data = task_in.model_dump(exclude_unset=True)

    status = data.pop("status", None)
    if status is not None:
        _apply_status(task, status)

    for key, value in data.items():
        if value is None and key not in CLEARABLE_FIELDS:
            continue
        setattr(task, key, value)

    return await _save(store, task)


async def toggle_status(store: KVStore, task_id: str, status: TaskStatus) -> Task:
    task = await get_task_or_404(store, task_id)
    _apply_status(task, status)
    return await _save(store, task)


async def archive_task(store: KVStore, task_id: str) -> Task:
    task = await get_task_or_404(store, task_id)
    task.archived_at = datetime.now(timezone.utc)
    log.info("task.archived", task_id=task_id)
    return await _save(store, task)


async def delete_task(store: KVStore, task_id: str) -> None:
    """Soft delete: the document stays, stamped with deleted_at."""
    task = await get_task_or_404(store, task_id)
    task.deleted_at = datetime.now(timezone.utc)
    await _save(store, task)
    log.info("task.deleted", task_id=task_id)


# ---------------------------------------------------------------------------
# Scheduling
# ---------------------------------------------------------------------------


async def snooze_task(store: KVStore, task_id: str, client_today: Optional[date]) -> Task:
    """Move the due date to the day after max(today, current due date)."""
    task = await get_task_or_404(store, task_id)
    today = _require_today(client_today)

    current = task.due_date or today
    task.due_date = max(today, current) + timedelta(days=1)

    log.info("task.snoozed", task_id=task_id, due_date=task.due_date.isoformat())
    return await _save(store, task)


def _resolve_due_date(
    task: Task,
    target_section: Section,
    before_task: Optional[Task],
    today: date,
) -> tuple[Optional[date], Optional[date]]:
    """Return (new due date, inherited date or None)."""
    if target_section == Section.PERSONAL_FOCUS:
        # Personal tasks are never date-bucketed; keep the schedule as-is
        return task.due_date, None

    if (
        before_task is not None
        and before_task.due_date is not None
        and target_section not in NO_INHERIT_SECTIONS
        and date_in_section(before_task.due_date, target_section, today)
    ):
        return before_task.due_date, before_task.due_date

    return default_due_date(target_section, today), None


async def reorder_task(
    store: KVStore,
    task_id: str,
    target_section: Section,
    before_task_id: Optional[str],
    after_task_id: Optional[str],
    client_today: Optional[date],
) -> Task:
    """
    Apply a drop of ``task_id`` into ``target_section``.

    ``before_task_id`` is the task that ends up directly above the dropped
    one and ``after_task_id`` the one directly below. Neighbours are read at
    call time; one that is missing or deleted counts as absent.

    The due date is preserved for personal-focus, inherited from the task
    above when that task's date buckets into the target section, and
    otherwise set to the section default. The rank goes between the
    neighbours. Nothing is written if validation fails.
    """
    task = await get_task_or_404(store, task_id)
    today = _require_today(client_today)

    before_task = await _load_task(store, before_task_id) if before_task_id else None
    after_task = await _load_task(store, after_task_id) if after_task_id else None

    old_due_date = task.due_date
    new_due_date, inherited = _resolve_due_date(task, target_section, before_task, today)
    new_rank = allocate_rank(
        before_task.order_rank if before_task else None,
        after_task.order_rank if after_task else None,
    )

    task.due_date = new_due_date
    task.order_rank = new_rank

    log.info(
        "task.reordered",
        task_id=task_id,
        target_section=target_section.value,
        before_task_id=before_task_id,
        after_task_id=after_task_id,
        old_due_date=old_due_date.isoformat() if old_due_date else None,
        new_due_date=new_due_date.isoformat() if new_due_date else None,
        inherited_date=inherited.isoformat() if inherited else None,
        client_today=today.isoformat(),
        order_rank=new_rank,
    )
    return await _save(store, task)

#!/usr/bin/env python3
"""Seed the configured document store with sample projects and tasks.

Usage:
    python scripts/seed_dev_data.py [--today YYYY-MM-DD]

Writes to the store selected by TASKBOARD_STORE_BACKEND / TASKBOARD_REDIS_URL.
Due dates are spread relative to --today so every section has something in it.
"""

import argparse
import asyncio
from datetime import date, timedelta

from taskboard.core.redis import close_redis
from taskboard.core.store import get_store
from taskboard.services.projects import create_project
from taskboard.services.tasks import create_task
from taskboard_shared.schemas.common import TaskGroup, TaskType
from taskboard_shared.schemas.projects import ProjectCreate
from taskboard_shared.schemas.tasks import TaskCreate


async def seed(today: date):
    store = await get_store()

    projects = [
        ("Platform", "#7E3DD4"),
        ("Hiring", "#2F80ED"),
    ]
    project_ids = []
    for name, color in projects:
        project = await create_project(store, ProjectCreate(name=name, color=color))
        project_ids.append(project.id)

    # (title, group, task_type, days from today or None, project index or None)
    task_specs = [
        ("Review incident postmortem", TaskGroup.WORK, TaskType.REGULAR, -2, 0),
        ("Ship rate limiter", TaskGroup.WORK, TaskType.REGULAR, 0, 0),
        ("Prep interview loop", TaskGroup.WORK, TaskType.REGULAR, 2, 1),
        ("Quarterly planning draft", TaskGroup.WORK, TaskType.REGULAR, 8, 0),
        ("Offsite agenda", TaskGroup.WORK, TaskType.REGULAR, 20, None),
        ("Migrate cron jobs", TaskGroup.WORK, TaskType.REGULAR, None, 0),
        ("Deep work: storage design", TaskGroup.WORK, TaskType.WORK_FOCUS, None, 0),
        ("Read: Designing Data-Intensive Applications", TaskGroup.PERSONAL, TaskType.TO_READ, None, None),
        ("Renew passport", TaskGroup.PERSONAL, TaskType.REGULAR, 5, None),
        ("Book dentist", TaskGroup.PERSONAL, TaskType.REGULAR, None, None),
    ]
    for title, group, task_type, offset, project_index in task_specs:
        await create_task(
            store,
            TaskCreate(
                title=title,
                group=group,
                task_type=task_type,
                due_date=today + timedelta(days=offset) if offset is not None else None,
                project_id=project_ids[project_index] if project_index is not None else None,
            ),
        )

    await close_redis()
    print(f"Seeded {len(project_ids)} projects and {len(task_specs)} tasks relative to {today}.")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--today", type=date.fromisoformat, default=date.today())
    args = parser.parse_args()
    asyncio.run(seed(args.today))

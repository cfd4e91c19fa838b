"""
Shared fixtures: an in-memory document store and an API client bound to it.
"""

from datetime import date

import pytest
from httpx import ASGITransport, AsyncClient

from taskboard.core.store import MemoryKVStore, get_store, task_key
from taskboard.main import app
from taskboard.models.task import Task

# Tuesday. Next Saturday 2026-03-14, next Sunday 2026-03-15.
TUESDAY = date(2026, 3, 10)


@pytest.fixture
def store():
    return MemoryKVStore()


@pytest.fixture
async def client(store):
    app.dependency_overrides[get_store] = lambda: store
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
def put_task(store):
    """Write a task document straight into the store and return the model."""

    async def _put(**fields) -> Task:
        fields.setdefault("title", "task")
        task = Task(**fields)
        await store.set(task_key(task.id), task.to_document())
        return task

    return _put

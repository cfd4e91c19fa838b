"""
HTTP-level tests for the task endpoints and error envelope.
"""

from __future__ import annotations

from datetime import date

import pytest
from httpx import AsyncClient

from taskboard.core.errors import StoreError
from taskboard.core.store import get_store, task_key
from taskboard.main import app
from taskboard_shared.schemas.common import TaskGroup, TaskType


# ---------------------------------------------------------------------------
# System
# ---------------------------------------------------------------------------


async def test_health_check(client: AsyncClient):
    response = await client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


async def test_security_headers(client: AsyncClient):
    response = await client.get("/health")
    assert response.headers["X-Content-Type-Options"] == "nosniff"


async def test_api_root(client: AsyncClient):
    response = await client.get("/api/v1/")
    assert response.status_code == 200
    data = response.json()
    assert data["api"] == "v1"
    assert "/tasks/board" in data["endpoints"]


# ---------------------------------------------------------------------------
# CRUD
# ---------------------------------------------------------------------------


async def test_create_and_fetch(client: AsyncClient):
    response = await client.post(
        "/api/v1/tasks/",
        json={"title": "Write doc", "group": "work", "due_date": "2026-03-12"},
    )
    assert response.status_code == 201
    created = response.json()
    assert created["due_date"] == "2026-03-12"
    assert created["is_longer_term"] is False
    assert created["status"] == "open"

    fetched = await client.get(f"/api/v1/tasks/{created['id']}")
    assert fetched.status_code == 200
    assert fetched.json()["title"] == "Write doc"


async def test_patch_clears_due_date(client: AsyncClient, put_task):
    task = await put_task(due_date=date(2026, 3, 12))

    response = await client.patch(f"/api/v1/tasks/{task.id}", json={"due_date": ""})

    assert response.status_code == 200
    assert response.json()["due_date"] is None
    assert response.json()["is_longer_term"] is True


async def test_status_archive_delete(client: AsyncClient, put_task):
    task = await put_task()

    done = await client.post(f"/api/v1/tasks/{task.id}/status", json={"status": "done"})
    assert done.json()["completed_at"] is not None

    archived = await client.post(f"/api/v1/tasks/{task.id}/archive")
    assert archived.json()["archived_at"] is not None
    assert (await client.get("/api/v1/tasks/")).json() == []
    assert len((await client.get("/api/v1/tasks/archived")).json()) == 1

    deleted = await client.delete(f"/api/v1/tasks/{task.id}")
    assert deleted.json() == {"ok": True}
    assert (await client.get(f"/api/v1/tasks/{task.id}")).status_code == 404


# ---------------------------------------------------------------------------
# Scheduling
# ---------------------------------------------------------------------------


async def test_reorder_inherits_neighbour_date(client: AsyncClient, put_task):
    b = await put_task(group=TaskGroup.WORK, due_date=date(2026, 3, 12), order_rank=10)
    c = await put_task(group=TaskGroup.WORK)

    response = await client.post(
        f"/api/v1/tasks/{c.id}/reorder",
        json={"target_section": "this-week", "before_task_id": b.id, "client_today": "2026-03-10"},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["due_date"] == "2026-03-12"
    assert body["order_rank"] == 11


async def test_reorder_without_client_today_is_rejected(client: AsyncClient, store, put_task):
    task = await put_task(group=TaskGroup.WORK, due_date=date(2026, 3, 12))
    original = await store.get(task_key(task.id))

    response = await client.post(
        f"/api/v1/tasks/{task.id}/reorder",
        json={"target_section": "today"},
    )

    assert response.status_code == 400
    assert response.json() == {
        "error": {
            "code": "VALIDATION_FAILED",
            "message": "Missing client_today parameter",
            "status": 400,
        }
    }
    assert await store.get(task_key(task.id)) == original


async def test_reorder_unknown_section_is_422(client: AsyncClient, put_task):
    task = await put_task()
    response = await client.post(
        f"/api/v1/tasks/{task.id}/reorder",
        json={"target_section": "someday", "client_today": "2026-03-10"},
    )
    assert response.status_code == 422


async def test_reorder_missing_task_is_404(client: AsyncClient):
    response = await client.post(
        "/api/v1/tasks/nope/reorder",
        json={"target_section": "today", "client_today": "2026-03-10"},
    )
    assert response.status_code == 404
    assert response.json()["error"]["code"] == "NOT_FOUND"


async def test_snooze(client: AsyncClient, put_task):
    task = await put_task(due_date=date(2026, 3, 20))

    response = await client.post(f"/api/v1/tasks/{task.id}/snooze", json={"client_today": "2026-03-10"})

    assert response.status_code == 200
    assert response.json()["due_date"] == "2026-03-21"


async def test_snooze_without_body_field_is_rejected(client: AsyncClient, put_task):
    task = await put_task()
    response = await client.post(f"/api/v1/tasks/{task.id}/snooze", json={})
    assert response.status_code == 400


async def test_board(client: AsyncClient, put_task):
    await put_task(title="today", group=TaskGroup.WORK, due_date=date(2026, 3, 10))
    await put_task(title="later", group=TaskGroup.WORK, due_date=date(2026, 3, 16))
    await put_task(title="mine", group=TaskGroup.PERSONAL, due_date=date(2026, 3, 10))
    await put_task(title="focus", group=TaskGroup.WORK, task_type=TaskType.WORK_FOCUS)

    response = await client.get("/api/v1/tasks/board", params={"today": "2026-03-10"})

    assert response.status_code == 200
    board = response.json()
    sections = {s["section"]: [t["title"] for t in s["tasks"]] for s in board["sections"]}
    assert list(sections) == [
        "personal-focus",
        "to-read",
        "today",
        "this-week",
        "next-week",
        "after-next-week",
        "longer-term",
    ]
    assert sections["today"] == ["today"]
    assert sections["next-week"] == ["later"]
    assert sections["personal-focus"] == ["mine"]
    assert [t["title"] for t in board["work_focus"]] == ["focus"]
    assert board["sections"][-1]["title"] == "Backlog"


async def test_board_requires_today(client: AsyncClient):
    response = await client.get("/api/v1/tasks/board")
    assert response.status_code == 422


async def test_board_filters(client: AsyncClient, put_task):
    await put_task(title="Alpha", group=TaskGroup.WORK, due_date=date(2026, 3, 10))
    await put_task(title="Beta", group=TaskGroup.WORK, due_date=date(2026, 3, 10))

    response = await client.get("/api/v1/tasks/board", params={"today": "2026-03-10", "search": "alp"})

    today = next(s for s in response.json()["sections"] if s["section"] == "today")
    assert [t["title"] for t in today["tasks"]] == ["Alpha"]


# ---------------------------------------------------------------------------
# Store failures
# ---------------------------------------------------------------------------


class _DownStore:
    async def get(self, key):
        raise StoreError("Document store unavailable during get")


@pytest.fixture
async def down_client(client):
    app.dependency_overrides[get_store] = lambda: _DownStore()
    yield client


async def test_store_outage_is_503(down_client: AsyncClient):
    response = await down_client.get("/api/v1/tasks/some-id")
    assert response.status_code == 503
    assert response.json()["error"]["code"] == "STORE_UNAVAILABLE"


@pytest.mark.parametrize("field", ["title", "description", "group", "task_type", "order_rank", "status"])
async def test_patch_null_leaves_document_intact(client: AsyncClient, store, put_task, field):
    task = await put_task(title="keep", group=TaskGroup.WORK, due_date=date(2026, 3, 10), order_rank=5)
    original = await store.get(task_key(task.id))

    response = await client.patch(f"/api/v1/tasks/{task.id}", json={field: None})

    assert response.status_code == 200
    stored = await store.get(task_key(task.id))
    assert stored[field] == original[field]

    board = await client.get("/api/v1/tasks/board", params={"today": "2026-03-10"})
    assert board.status_code == 200
    today = next(s for s in board.json()["sections"] if s["section"] == "today")
    assert [t["title"] for t in today["tasks"]] == ["keep"]

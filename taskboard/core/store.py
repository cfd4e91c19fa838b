"""
Key-value document store.

Tasks and projects are self-contained JSON documents addressed by key
(``task:<id>``, ``project:<id>``). The service layer only needs four
primitives, so the store is a narrow interface with two backends:

- RedisKVStore: production backend; retries transient failures with
  exponential backoff and raises StoreError once attempts are exhausted
- MemoryKVStore: in-process backend for local development and tests
"""

from __future__ import annotations

import asyncio
import copy
import json
import random
from abc import ABC, abstractmethod
from typing import Any, Awaitable, Callable, TypeVar

import redis.asyncio as redis
import structlog
from redis.exceptions import ConnectionError as RedisConnectionError
from redis.exceptions import TimeoutError as RedisTimeoutError

from taskboard.core.config import get_settings
from taskboard.core.errors import StoreError
from taskboard.core.redis import get_redis

log = structlog.get_logger()

T = TypeVar("T")

TASK_PREFIX = "task:"
PROJECT_PREFIX = "project:"

# Failures worth retrying: the store may come back on the next attempt
TRANSIENT_ERRORS = (RedisConnectionError, RedisTimeoutError, OSError)


def task_key(task_id: str) -> str:
    return f"{TASK_PREFIX}{task_id}"


def project_key(project_id: str) -> str:
    return f"{PROJECT_PREFIX}{project_id}"


class KVStore(ABC):
    """Document store primitives consumed by the service layer."""

    @abstractmethod
    async def get(self, key: str) -> dict[str, Any] | None:
        """Return the document stored at ``key`` or None."""

    @abstractmethod
    async def set(self, key: str, value: dict[str, Any]) -> None:
        """Overwrite the whole document at ``key``."""

    @abstractmethod
    async def delete(self, key: str) -> None:
        """Remove ``key``. Missing keys are ignored."""

    @abstractmethod
    async def get_by_prefix(self, prefix: str) -> list[dict[str, Any]]:
        """Return every document whose key starts with ``prefix``."""


class MemoryKVStore(KVStore):
    """Dict-backed store. Documents are copied in and out like a real store."""

    def __init__(self) -> None:
        self._data: dict[str, dict[str, Any]] = {}

    async def get(self, key: str) -> dict[str, Any] | None:
        value = self._data.get(key)
        return copy.deepcopy(value) if value is not None else None

    async def set(self, key: str, value: dict[str, Any]) -> None:
        self._data[key] = copy.deepcopy(value)

    async def delete(self, key: str) -> None:
        self._data.pop(key, None)

    async def get_by_prefix(self, prefix: str) -> list[dict[str, Any]]:
        return [
            copy.deepcopy(value)
            for key, value in sorted(self._data.items())
            if key.startswith(prefix)
        ]


class RedisKVStore(KVStore):
    """
    Redis-backed store holding JSON-encoded string values.

    Every primitive runs through ``_with_retry``: connection errors and
    timeouts are retried up to ``max_retries`` attempts with exponential
    backoff plus jitter. Anything else propagates immediately.
    """

    def __init__(
        self,
        client: redis.Redis,
        max_retries: int = 3,
        retry_base_seconds: float = 0.1,
    ):
        self._client = client
        self._max_retries = max(1, max_retries)
        self._retry_base_seconds = retry_base_seconds

    async def _with_retry(self, op: str, fn: Callable[[], Awaitable[T]]) -> T:
        last_exc: Exception | None = None
        for attempt in range(self._max_retries):
            try:
                return await fn()
            except TRANSIENT_ERRORS as exc:
                last_exc = exc

            if attempt == self._max_retries - 1:
                break
            backoff = self._retry_base_seconds * (2 ** attempt)
            backoff += random.uniform(0, self._retry_base_seconds)
            log.warning(
                "store.retry",
                op=op,
                attempt=attempt + 1,
                backoff=round(backoff, 3),
                error=str(last_exc),
            )
            await asyncio.sleep(backoff)

        log.error("store.unavailable", op=op, attempts=self._max_retries, error=str(last_exc))
        raise StoreError(f"Document store unavailable during {op}") from last_exc

    async def get(self, key: str) -> dict[str, Any] | None:
        raw = await self._with_retry("get", lambda: self._client.get(key))
        return json.loads(raw) if raw is not None else None

    async def set(self, key: str, value: dict[str, Any]) -> None:
        payload = json.dumps(value)
        await self._with_retry("set", lambda: self._client.set(key, payload))

    async def delete(self, key: str) -> None:
        await self._with_retry("delete", lambda: self._client.delete(key))

    async def get_by_prefix(self, prefix: str) -> list[dict[str, Any]]:
        async def scan() -> list[str | None]:
            keys = sorted([k async for k in self._client.scan_iter(match=f"{prefix}*")])
            if not keys:
                return []
            return await self._client.mget(keys)

        raws = await self._with_retry("get_by_prefix", scan)
        # A key can expire or be deleted between SCAN and MGET
        return [json.loads(raw) for raw in raws if raw is not None]


_memory_store: MemoryKVStore | None = None


async def get_store() -> KVStore:
    """FastAPI dependency returning the configured document store."""
    global _memory_store
    settings = get_settings()
    if settings.store_backend == "memory":
        if _memory_store is None:
            _memory_store = MemoryKVStore()
        return _memory_store
    return RedisKVStore(
        await get_redis(),
        max_retries=settings.store_max_retries,
        retry_base_seconds=settings.store_retry_base_seconds,
    )

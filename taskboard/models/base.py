"""Base mixins for stored documents."""

from datetime import datetime, timezone
import time
import uuid

from pydantic import BaseModel, Field


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def now_ms() -> float:
    """Wall-clock time in epoch milliseconds."""
    return float(int(time.time() * 1000))


class TimestampMixin(BaseModel):
    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)

    def touch(self) -> None:
        self.updated_at = _utcnow()


class UUIDMixin(BaseModel):
    id: str = Field(default_factory=lambda: str(uuid.uuid4()))

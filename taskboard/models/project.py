"""Project model."""

from typing import Any

from taskboard_shared.schemas.projects import DEFAULT_PROJECT_COLOR

from .base import TimestampMixin, UUIDMixin


class Project(UUIDMixin, TimestampMixin):
    name: str
    color: str = DEFAULT_PROJECT_COLOR

    @classmethod
    def from_document(cls, doc: dict[str, Any]) -> "Project":
        return cls.model_validate(doc)

    def to_document(self) -> dict[str, Any]:
        return self.model_dump(mode="json")

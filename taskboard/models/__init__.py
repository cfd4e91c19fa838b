# Document models persisted in the key-value store.
from .base import UUIDMixin, TimestampMixin  # noqa: F401
from .project import Project  # noqa: F401
from .task import Task  # noqa: F401

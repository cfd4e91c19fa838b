"""
Project service layer.

Projects are labels. Deleting one removes only the project document; tasks
keep their project_id and consumers treat an unknown id as "no project".
"""

from __future__ import annotations

import structlog

from taskboard.core.errors import NotFoundError
from taskboard.core.store import PROJECT_PREFIX, KVStore, project_key
from taskboard.models.project import Project
from taskboard_shared.schemas.projects import ProjectCreate, ProjectUpdate

log = structlog.get_logger()


async def get_project_or_404(store: KVStore, project_id: str) -> Project:
    doc = await store.get(project_key(project_id))
    if not doc:
        raise NotFoundError("Project not found")
    return Project.from_document(doc)


async def list_projects(store: KVStore) -> list[Project]:
    docs = await store.get_by_prefix(PROJECT_PREFIX)
    return [Project.from_document(doc) for doc in docs if doc]


async def create_project(store: KVStore, project_in: ProjectCreate) -> Project:
    project = Project(**project_in.model_dump())
    await store.set(project_key(project.id), project.to_document())
    log.info("project.created", project_id=project.id, name=project.name)
    return project


async def update_project(store: KVStore, project_id: str, project_in: ProjectUpdate) -> Project:
    project = await get_project_or_404(store, project_id)
    for key, value in project_in.model_dump(exclude_unset=True).items():
        if value is not None:
            setattr(project, key, value)
    project.touch()
    await store.set(project_key(project.id), project.to_document())
    return project


async def delete_project(store: KVStore, project_id: str) -> None:
    await get_project_or_404(store, project_id)
    await store.delete(project_key(project_id))
    log.info("project.deleted", project_id=project_id)

"""
Project endpoints: CRUD.

Deleting a project leaves its tasks untouched.
"""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends

from taskboard.core.store import KVStore, get_store
from taskboard.services.projects import (
    create_project,
    delete_project,
    list_projects,
    update_project,
)
from taskboard_shared.schemas.projects import ProjectCreate, ProjectRead, ProjectUpdate

router = APIRouter()


@router.get("/", response_model=List[ProjectRead])
async def list_projects_endpoint(store: KVStore = Depends(get_store)):
    return [ProjectRead.model_validate(p) for p in await list_projects(store)]


@router.post("/", response_model=ProjectRead, status_code=201)
async def create_project_endpoint(project_in: ProjectCreate, store: KVStore = Depends(get_store)):
    return ProjectRead.model_validate(await create_project(store, project_in))


@router.patch("/{project_id}", response_model=ProjectRead)
async def update_project_endpoint(
    project_id: str,
    project_in: ProjectUpdate,
    store: KVStore = Depends(get_store),
):
    return ProjectRead.model_validate(await update_project(store, project_id, project_in))


@router.delete("/{project_id}")
async def delete_project_endpoint(project_id: str, store: KVStore = Depends(get_store)):
    await delete_project(store, project_id)
    return {"ok": True}

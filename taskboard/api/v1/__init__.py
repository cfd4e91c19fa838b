"""
API v1 Router

Single-user service: no org scoping and no authentication.
"""

from fastapi import APIRouter
from . import projects, tasks

router = APIRouter()

router.include_router(projects.router, prefix="/projects", tags=["Projects"])
router.include_router(tasks.router, prefix="/tasks", tags=["Tasks"])


@router.get("/", tags=["API"])
async def api_root():
    """API root: returns version and available endpoints."""
    return {
        "api": "v1",
        "version": "0.1.0",
        "endpoints": [
            "/projects",
            "/tasks",
            "/tasks/archived",
            "/tasks/board",
        ],
    }

"""
Taskboard API Server

Entry point for the FastAPI application.
"""

from __future__ import annotations

import argparse

import structlog
import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from taskboard import __version__
from taskboard.core.config import get_settings
from taskboard.core.errors import register_error_handlers
from taskboard.core.logging import configure_logging
from taskboard.core.middleware import RequestLogMiddleware, SecurityHeadersMiddleware
from taskboard.core.redis import close_redis
from taskboard.api.v1 import router as api_v1_router

settings = get_settings()
log = structlog.get_logger()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="Taskboard",
        description="Personal task tracker with date-bucketed sections and drag-and-drop scheduling.",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )

    # Middleware (order matters, outermost first)
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(RequestLogMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PATCH", "PUT", "DELETE"],
        allow_headers=["Content-Type"],
    )

    register_error_handlers(app)

    app.include_router(api_v1_router, prefix="/api/v1")

    @app.get("/health", tags=["System"])
    async def health_check():
        """Health check endpoint for liveness probes."""
        return {"status": "ok"}

    @app.get("/ready", tags=["System"])
    async def readiness_check():
        """Readiness check endpoint for startup probes."""
        return {"status": "ready", "store": settings.store_backend}

    @app.on_event("startup")
    async def on_startup():
        log.info("taskboard.starting", store=settings.store_backend)

    @app.on_event("shutdown")
    async def on_shutdown():
        log.info("taskboard.stopping")
        await close_redis()

    return app


app = create_app()


def run() -> None:
    """CLI entry point for the server."""
    parser = argparse.ArgumentParser(description="Taskboard API server")
    parser.add_argument("--host", default=settings.host, help=f"Bind address (default: {settings.host})")
    parser.add_argument("--port", type=int, default=settings.port, help=f"Port (default: {settings.port})")
    args = parser.parse_args()

    configure_logging(settings.log_level, settings.log_format)
    log.info("taskboard.config_loaded", host=args.host, port=args.port, store=settings.store_backend)

    uvicorn.run(app, host=args.host, port=args.port, log_level=settings.log_level)


if __name__ == "__main__":
    run()

"""
Domain errors and their HTTP rendering.

Every error the service layer raises on purpose derives from
``TaskboardError``. The API renders them with the same envelope the
middleware uses for rejected requests::

    {"error": {"code": "...", "message": "...", "status": 404}}
"""

from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse


class TaskboardError(Exception):
    code = "INTERNAL_ERROR"
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(TaskboardError):
    """Referenced record is missing or soft-deleted."""

    code = "NOT_FOUND"
    status_code = 404


class ValidationError(TaskboardError):
    """Required contextual input is missing. Raised before any write."""

    code = "VALIDATION_FAILED"
    status_code = 400


class StoreError(TaskboardError):
    """The document store stayed unreachable after all retries."""

    code = "STORE_UNAVAILABLE"
    status_code = 503


def error_body(exc: TaskboardError) -> dict:
    return {
        "error": {
            "code": exc.code,
            "message": exc.message,
            "status": exc.status_code,
        }
    }


async def taskboard_error_handler(request: Request, exc: TaskboardError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=error_body(exc))


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(TaskboardError, taskboard_error_handler)

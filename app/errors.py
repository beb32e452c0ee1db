# app/errors.py
"""
Maps domain errors to HTTP responses.

- Auth errors answer {"success": false, "message": ...} (what the login and
  signup forms read), except a missing session which is a plain 401.
- Task errors answer {"message": ...}.
- Store failures are logged with their trace and answered with a generic 500.
"""
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from auth.exceptions import AuthError, UnauthenticatedError
from persistence.db import StoreError
from tasks.exceptions import TaskError

logger = logging.getLogger(__name__)

AUTH_PATH_PREFIX = "/api/auth"


async def auth_error_handler(request: Request, exc: AuthError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "message": exc.message},
    )


async def unauthenticated_handler(request: Request, exc: UnauthenticatedError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"message": exc.message})


async def task_error_handler(request: Request, exc: TaskError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"message": exc.message})


async def store_error_handler(request: Request, exc: StoreError) -> JSONResponse:
    request_id = getattr(request.state, "request_id", None)
    logger.error(
        f"Store failure on {request.method} {request.url.path} request_id={request_id}",
        exc_info=exc,
    )
    return JSONResponse(status_code=exc.status_code, content={"message": exc.message})


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed bodies are a plain 400; field details stay server-side."""
    logger.info(f"Rejected request body on {request.url.path}: {len(exc.errors())} error(s)")
    content = {"message": "Invalid request body"}
    if request.url.path.startswith(AUTH_PATH_PREFIX):
        content = {"success": False, **content}
    return JSONResponse(status_code=400, content=content)


def register_error_handlers(app: FastAPI) -> None:
    """Install all handlers on an application."""
    app.add_exception_handler(AuthError, auth_error_handler)
    app.add_exception_handler(UnauthenticatedError, unauthenticated_handler)
    app.add_exception_handler(TaskError, task_error_handler)
    app.add_exception_handler(StoreError, store_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)

"""Application errors and their JSON rendering."""
import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from app.core.config import get_settings

logger = logging.getLogger(__name__)


class AppError(Exception):
    """Base error carrying the HTTP status it maps to."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidInput(AppError):
    status_code = 400


class Unauthorized(AppError):
    status_code = 401


class Forbidden(AppError):
    status_code = 403


class NotFound(AppError):
    status_code = 404


class Conflict(AppError):
    status_code = 409


class PersistenceFailure(AppError):
    """A gateway call failed partway through a submission; earlier steps stay applied."""

    status_code = 500

    def __init__(self, step: str, message: str):
        super().__init__(f"{step} failed: {message}")
        self.step = step


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    body = {"error": True, "message": exc.message}
    if isinstance(exc, PersistenceFailure):
        logger.error("%s %s -> %s", request.method, request.url.path, exc.message)
        if not get_settings().debug:
            body["message"] = "Internal server error"
    return JSONResponse(status_code=exc.status_code, content=body)


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, app_error_handler)

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)

class AppError(Exception):
    """Base for errors that map onto an http status with a short message."""

    status_code = 500
    default_message = "internal server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)

class Unauthorized(AppError):
    status_code = 401
    default_message = "unauthorized"

class Forbidden(AppError):
    status_code = 403
    default_message = "forbidden"

class NotFound(AppError):
    status_code = 404
    default_message = "not found"

class Conflict(AppError):
    status_code = 409
    default_message = "conflict"

class ValidationError(AppError):
    status_code = 400
    default_message = "invalid request"

class InternalError(AppError):
    status_code = 500
    default_message = "internal server error"

def _validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return ValidationError.default_message
    first = errors[0]
    # drop the "body"/"query" prefix from the location
    loc = [str(p) for p in first.get("loc", ())[1:]]
    msg = str(first.get("msg", "invalid value"))
    return f"{'.'.join(loc)}: {msg}" if loc else msg

async def _app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})

async def _request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(status_code=400, content={"detail": _validation_message(exc)})

async def _unhandled_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"detail": InternalError.default_message})

def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, _app_error_handler)
    app.add_exception_handler(RequestValidationError, _request_validation_handler)
    app.add_exception_handler(Exception, _unhandled_handler)

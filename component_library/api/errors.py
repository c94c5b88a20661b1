"""Unified error handling — every failure becomes ``{"success": false, ...}``."""

from __future__ import annotations

from typing import Any

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from component_library.api.schemas.common import ErrorBody
from component_library.services import NotFoundError, ServiceError, StoreError

log = structlog.get_logger("component_library.api")


def error_body(error: str, details: str | None = None) -> dict[str, Any]:
    return ErrorBody(error=error, details=details).model_dump(exclude_none=True)


def _error(status: int, error: str, details: str | None = None) -> JSONResponse:
    return JSONResponse(status_code=status, content=error_body(error, details))


async def _service_error(_request: Request, exc: ServiceError) -> JSONResponse:
    if isinstance(exc, NotFoundError):
        return _error(404, str(exc))
    details = exc.details if isinstance(exc, StoreError) else None
    log.error("api.store_error", error=str(exc), details=details)
    return _error(500, str(exc), details)


async def _invalid_request(_request: Request, exc: RequestValidationError) -> JSONResponse:
    problems = [
        "{}: {}".format(".".join(str(p) for p in err["loc"]), err["msg"]) for err in exc.errors()
    ]
    return _error(422, "Invalid request", "; ".join(problems))


async def _http_error(_request: Request, exc: StarletteHTTPException) -> JSONResponse:
    # unmatched routes surface here as a bare 404
    if exc.status_code == 404:
        return _error(404, "Endpoint not found")
    return _error(exc.status_code, str(exc.detail))


async def _unhandled(_request: Request, _exc: Exception) -> JSONResponse:
    # the request middleware has already logged the traceback with the request id
    return _error(500, "Internal server error")


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ServiceError, _service_error)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, _invalid_request)  # type: ignore[arg-type]
    app.add_exception_handler(StarletteHTTPException, _http_error)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, _unhandled)

"""Request logging middleware — one structured access line per request, tagged with an id."""

from __future__ import annotations

import time
import uuid

import structlog
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

log = structlog.get_logger("component_library.api")

REQUEST_ID_HEADER = "X-Request-ID"
_MAX_ID_LENGTH = 128


def _request_id(raw: str) -> str:
    """Reuse a caller-supplied id if it is printable and short, else mint one."""
    if raw and len(raw) <= _MAX_ID_LENGTH and raw.isprintable():
        return raw
    return uuid.uuid4().hex


def _level(status_code: int) -> str:
    if status_code >= 500:
        return "error"
    if status_code >= 400:
        return "warning"
    return "info"


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Tag every log line of a request with ``request_id`` and echo the id back."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        rid = _request_id(request.headers.get(REQUEST_ID_HEADER, ""))
        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            request_id=rid, method=request.method, path=request.url.path
        )
        started = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            log.exception("http.failed", duration_ms=_elapsed_ms(started))
            structlog.contextvars.clear_contextvars()
            raise

        response.headers[REQUEST_ID_HEADER] = rid
        getattr(log, _level(response.status_code))(
            "http.served",
            status_code=response.status_code,
            content_type=response.headers.get("content-type"),
            duration_ms=_elapsed_ms(started),
        )
        structlog.contextvars.clear_contextvars()
        return response


def _elapsed_ms(start: float) -> float:
    return round((time.perf_counter() - start) * 1000, 1)

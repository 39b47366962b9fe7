"""Per-request log context: every event logged while serving a request carries
its id, method and path."""

from __future__ import annotations

import time
from uuid import uuid4

import structlog
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from worklog_chat.observability.logger import get_logger

logger = get_logger("http")

REQUEST_ID_HEADER = "X-Request-ID"
DURATION_HEADER = "X-Duration-MS"


def _elapsed_ms(started: float) -> float:
    return round((time.monotonic() - started) * 1000, 2)


class RequestContextMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next) -> Response:
        # An upstream id wins over a fresh one
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid4().hex
        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            method=request.method,
            path=request.url.path,
        )

        started = time.monotonic()
        try:
            response = await call_next(request)
        except Exception:
            logger.exception("request_crashed", duration_ms=_elapsed_ms(started))
            raise

        duration_ms = _elapsed_ms(started)
        response.headers[REQUEST_ID_HEADER] = request_id
        response.headers[DURATION_HEADER] = str(duration_ms)
        log = logger.warning if response.status_code >= 500 else logger.info
        log("request_served", status=response.status_code, duration_ms=duration_ms)
        return response

"""
Notes API — Request Logging Middleware
========================================

What:  One access log line per HTTP request.
How:   Times the rest of the stack, then logs method, path, status,
       duration, request ID and client address. Requests addressed to a
       single note (/api/notes/{id}) also carry that note id, so every
       read or delete of a note can be traced in the logs by id.
Who:   Applied to every request via Starlette middleware.
When:  Runs inside RequestIDMiddleware, so the request ID is already set.

Example lines:
    INFO  notes_api.access: POST /api/notes 201 4.2ms [1f2e3d4c] from 127.0.0.1
    WARNING notes_api.access: GET /api/notes/{id} 404 1.3ms [9a8b7c6d] from 127.0.0.1 note=5a3d...

Request bodies are never logged; note content stays out of the logs.
"""

import logging
import re
import time
from typing import Optional

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from notes_api.middleware.request_id import request_id_var

logger = logging.getLogger("notes_api.access")

# Polled every few seconds by orchestrators
_UNLOGGED_PATHS = {"/health"}

_NOTE_PATH = re.compile(r"^/api/notes/(?P<note_id>[^/]+)/?$")


def note_id_from_path(path: str) -> Optional[str]:
    """The raw {id} segment of /api/notes/{id}, or None for other paths."""
    match = _NOTE_PATH.match(path)
    return match.group("note_id") if match else None


def level_for_status(status: int) -> int:
    """5xx → ERROR, 4xx → WARNING, everything else → INFO."""
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs each request once, after the response status is known."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        path = request.url.path
        if path in _UNLOGGED_PATHS:
            return await call_next(request)

        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = round((time.perf_counter() - started) * 1000, 2)

        note_id = note_id_from_path(path)
        record = {
            "request_id": request_id_var.get(""),
            "method": request.method,
            # Templated so per-note requests aggregate under one path
            "path": "/api/notes/{id}" if note_id else path,
            "status": response.status_code,
            "duration_ms": elapsed_ms,
            "client_ip": request.client.host if request.client else "unknown",
            "note_id": note_id,
        }

        message = "%(method)s %(path)s %(status)d %(duration_ms).1fms [%(request_id)s] from %(client_ip)s"
        if note_id:
            message += " note=%(note_id)s"
        logger.log(level_for_status(record["status"]), message, record, extra=record)

        return response

"""
Bookshelf Backend - Request Logging Middleware
================================================

What:  One access-log line per book API request: method, path, status,
       duration, and the book id when the route has one.
When:  Runs inside RequestIDMiddleware, so the request id is already set.

Levels:
    5xx → ERROR, 4xx → WARNING, everything else → INFO.
    /health and the API docs are not logged.

A request whose handler raised is logged as 500 before the exception
travels on to RequestIDMiddleware. Request bodies are never logged.
"""

import logging
import time
from typing import Optional

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from bookshelf.middleware.request_id import request_id_var

logger = logging.getLogger("bookshelf.access")

UNLOGGED_PATHS = frozenset({"/health", "/docs", "/docs/oauth2-redirect", "/redoc", "/openapi.json"})


def status_log_level(status: int) -> int:
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs method, path, status and duration of each book API request."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        path = request.url.path
        if path in UNLOGGED_PATHS:
            return await call_next(request)

        start_time = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            self._log(request, 500, start_time)
            raise

        self._log(request, response.status_code, start_time)
        return response

    def _log(self, request: Request, status: int, start_time: float) -> None:
        duration_ms = (time.perf_counter() - start_time) * 1000
        rid = request_id_var.get("")
        client_ip = request.client.host if request.client else "unknown"
        # Raw path segment; populated once the router has matched /books/{book_id}
        book_id: Optional[str] = request.path_params.get("book_id")

        logger.log(
            status_log_level(status),
            "%s %s %d %.1fms [%s] from %s%s",
            request.method,
            request.url.path,
            status,
            duration_ms,
            rid,
            client_ip,
            f" book={book_id}" if book_id is not None else "",
            extra={
                "request_id": rid,
                "method": request.method,
                "path": request.url.path,
                "status": status,
                "duration_ms": round(duration_ms, 2),
                "client_ip": client_ip,
                "book_id": book_id,
            },
        )

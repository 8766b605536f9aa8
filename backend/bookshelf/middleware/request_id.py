"""
Bookshelf Backend - Request ID Middleware
===========================================

What:  Assigns a correlation id to each incoming request and returns it
       in the X-Request-ID response header, on every response.
How:   Uses the client's X-Request-ID when it is a short token of safe
       characters, otherwise a short random id. The id is stored in a
       ContextVar so loggers and exception handlers can read it without
       access to the request object.

Unexpected exceptions (anything the book exception handlers did not turn
into a response) are caught here, logged with their traceback, and
answered with a generic 500 that still carries the request id.
"""

import logging
import re
import uuid
from contextvars import ContextVar
from typing import Optional

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

logger = logging.getLogger(__name__)

# Coroutine-local: concurrent requests on one event loop each see their own id
request_id_var: ContextVar[str] = ContextVar("request_id", default="")

# Client ids end up in log lines; anything else is replaced
_CLIENT_ID_PATTERN = re.compile(r"[A-Za-z0-9._-]{1,64}")

UNEXPECTED_ERROR_MESSAGE = "An unexpected error occurred"


def resolve_request_id(header_value: Optional[str]) -> str:
    """Return the client's id if it is usable, else a fresh 8-character id."""
    if header_value and _CLIENT_ID_PATTERN.fullmatch(header_value):
        return header_value
    return uuid.uuid4().hex[:8]


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Tags each request and response with a request id."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = resolve_request_id(request.headers.get("X-Request-ID"))

        request_id_var.set(rid)
        request.state.request_id = rid

        try:
            response = await call_next(request)
        except Exception as e:
            logger.error(
                "[%s] Unexpected error on %s %s: %s",
                rid,
                request.method,
                request.url.path,
                str(e),
                exc_info=True,
            )
            response = JSONResponse(
                status_code=500,
                content={"message": UNEXPECTED_ERROR_MESSAGE},
            )

        response.headers["X-Request-ID"] = rid
        return response

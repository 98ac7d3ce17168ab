"""
Request context middleware.

WHAT: Middleware that assigns every request an ID, makes it available for
the duration of the request, and logs the request outcome.

WHY: One ID per request ties together the access log line and every
log line written while serving it, and lets clients quote the ID
back when reporting a problem.

HOW: The context is stored on request.state for handlers and in a ContextVar
for code that has no request object (services, DAOs, log filters).
"""

import logging
import time
import uuid
from contextvars import ContextVar
from dataclasses import dataclass
from typing import Optional, Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


@dataclass(frozen=True)
class RequestContext:
    """
    Container for request-scoped context data.

    Fields:
    - request_id: Identifier for the request (for log correlation)
    - path: Request path
    - method: HTTP method (GET, POST, etc.)
    """

    request_id: str
    path: str
    method: str


_request_context: ContextVar[Optional[RequestContext]] = ContextVar(
    "request_context", default=None
)


def get_request_context() -> Optional[RequestContext]:
    """
    Get the current request context.

    Returns:
        RequestContext if within a request, None otherwise
    """
    return _request_context.get()


class RequestContextMiddleware(BaseHTTPMiddleware):
    """
    Middleware that captures and stores request context.

    An inbound X-Request-ID header is reused so IDs assigned by a proxy
    survive; otherwise a fresh UUID4 is generated. The ID is echoed back in
    the response headers.

    WHY: Request logging belongs to the outermost layer, so every response,
    including errors, gets exactly one access log line.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """
        Process request and add context.

        Args:
            request: Incoming request
            call_next: Next middleware/handler

        Returns:
            Response with request ID header added
        """
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())

        context = RequestContext(
            request_id=request_id,
            path=request.url.path,
            method=request.method,
        )
        request.state.context = context
        token = _request_context.set(context)

        started = time.perf_counter()
        try:
            response = await call_next(request)
            response.headers[REQUEST_ID_HEADER] = request_id

            elapsed_ms = (time.perf_counter() - started) * 1000
            logger.info(
                f"{request.method} {request.url.path} -> {response.status_code} "
                f"({elapsed_ms:.1f} ms)"
            )
            return response

        finally:
            _request_context.reset(token)

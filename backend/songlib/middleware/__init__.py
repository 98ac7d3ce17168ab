"""
Middleware package.

Cross-cutting request handling that applies to every route.
"""

from songlib.middleware.request_context import (
    RequestContextMiddleware,
    RequestContext,
    get_request_context,
    REQUEST_ID_HEADER,
)

__all__ = [
    "RequestContextMiddleware",
    "RequestContext",
    "get_request_context",
    "REQUEST_ID_HEADER",
]

"""
Logging setup.

WHAT: Configures the root logger once at startup, either as one JSON object
per line or as plain text, and stamps every record with the request ID of
the request being served.

WHY: Structured logs can be shipped to a log aggregator as-is, while
text logs stay readable during local development.

HOW: RequestIdFilter reads the request context set by
RequestContextMiddleware, so log lines from services and DAOs can be
correlated without threading the request through every call.
"""

import json
import logging
from datetime import datetime, timezone

from songlib.middleware.request_context import get_request_context

TEXT_FORMAT = "%(asctime)s %(levelname)s [%(request_id)s] %(name)s: %(message)s"


class RequestIdFilter(logging.Filter):
    """Attach the current request ID (or "-") to every record."""

    def filter(self, record: logging.LogRecord) -> bool:
        ctx = get_request_context()
        record.request_id = ctx.request_id if ctx else "-"
        return True


class JSONFormatter(logging.Formatter):
    """Format log records as single-line JSON."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "request_id": getattr(record, "request_id", "-"),
        }
        for key in ("song_id", "group", "song", "page", "limit"):
            val = record.__dict__.get(key)
            if val is not None:
                log[key] = val
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False)


def setup_logging(level: str = "INFO", fmt: str = "json") -> logging.Handler:
    """
    Configure the root logger.

    Calling it again replaces the handler installed by the previous call
    instead of stacking a second one.

    Args:
        level: Log level name (DEBUG, INFO, ...)
        fmt: "json" or "text"

    Returns:
        The installed handler
    """
    root = logging.getLogger()
    for existing in list(root.handlers):
        if getattr(existing, "_songlib_handler", False):
            root.removeHandler(existing)

    handler = logging.StreamHandler()
    handler._songlib_handler = True
    handler.addFilter(RequestIdFilter())
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(TEXT_FORMAT))

    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    return handler

"""
Logging setup with per-request context.

Every log record gets ``request_id``, ``request_method`` and ``request_path``
attributes taken from the request being handled ("-" outside a request).
"""

import logging
import sys
from contextvars import ContextVar

from .types import RequestContext

LOG_FORMAT = (
    "%(asctime)s %(levelname)-8s [%(request_id)s] %(request_method)s %(request_path)s "
    "%(name)s: %(message)s"
)

_request_context: ContextVar[RequestContext | None] = ContextVar(
    "htmlshot_request_context", default=None
)


class RequestContextFilter(logging.Filter):
    """Inject the current request context into log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        ctx = _request_context.get()
        record.request_id = ctx.request_id if ctx else "-"
        record.request_method = (ctx.method if ctx else None) or "-"
        record.request_path = (ctx.path if ctx else None) or "-"
        return True


def setup_logging(level: str = "INFO") -> None:
    """Configure the root logger. Safe to call more than once."""
    root = logging.getLogger()
    root.setLevel(level.upper())

    for handler in root.handlers:
        if getattr(handler, "_htmlshot", False):
            return

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler.addFilter(RequestContextFilter())
    handler._htmlshot = True  # type: ignore[attr-defined]
    root.addHandler(handler)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def set_request_context(ctx: RequestContext) -> None:
    _request_context.set(ctx)


def clear_request_context() -> None:
    _request_context.set(None)

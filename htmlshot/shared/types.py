"""Shared types."""

from dataclasses import dataclass


@dataclass(frozen=True)
class RequestContext:
    """Per-request context carried through logging."""
    request_id: str
    method: str | None = None
    path: str | None = None

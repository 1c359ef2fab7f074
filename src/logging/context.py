# src/logging/context.py — v2
"""Contextual logging support — attach request_id, content type, fingerprint
and pipeline stage to log records.
"""

from __future__ import annotations

import contextvars
import uuid
from dataclasses import dataclass
from typing import Any

# Context variables for structured logging, set per analysis request.
_request_id: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "request_id", default=None
)
_content_type: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "content_type", default=None
)
_fingerprint: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "fingerprint", default=None
)
_stage: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "stage", default=None
)


@dataclass
class LogContext:
    """Immutable snapshot of current logging context."""

    request_id: str | None = None
    content_type: str | None = None
    fingerprint: str | None = None
    stage: str | None = None

    def as_dict(self) -> dict[str, Any]:
        """Return non-None fields as dict for JSON log injection."""
        return {k: v for k, v in self.__dict__.items() if v is not None}


def get_context() -> LogContext:
    """Snapshot current context variables."""
    return LogContext(
        request_id=_request_id.get(),
        content_type=_content_type.get(),
        fingerprint=_fingerprint.get(),
        stage=_stage.get(),
    )


def new_request_id() -> str:
    """Short random request identifier."""
    return uuid.uuid4().hex[:12]


def set_request_context(request_id: str, content_type: str | None = None) -> None:
    """Set request-level context (called once per analysis request)."""
    _request_id.set(request_id)
    _content_type.set(content_type)
    _fingerprint.set(None)
    _stage.set(None)


def set_fingerprint(fingerprint: str) -> None:
    """Attach the computed content fingerprint (first 12 hex chars)."""
    _fingerprint.set(fingerprint[:12])


def set_stage(stage: str | None) -> None:
    """Set the current pipeline stage."""
    _stage.set(stage)


def clear_context() -> None:
    """Reset all context variables."""
    _request_id.set(None)
    _content_type.set(None)
    _fingerprint.set(None)
    _stage.set(None)

# src/logging/logger.py — v3
"""Handler and formatter setup for the ``truthgen`` logger tree.

Every record carries the per-request context (request id, content type,
stage, fingerprint prefix) bound in logging/context.py. JSON output is
one object per line for log shippers; text output is for terminals.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from truthgen.logging.context import get_context
from truthgen.logging.handlers import create_rotating_handler

ROOT_LOGGER = "truthgen"

# SDK loggers that are chatty at DEBUG
_QUIET_LOGGERS = ("httpx", "httpcore", "openai")

_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


class _ContextFormatter(logging.Formatter):
    """Shared helpers for the formatters below."""

    @staticmethod
    def _now() -> datetime:
        return datetime.now(timezone.utc)

    def _exception_text(self, record: logging.LogRecord) -> str | None:
        if record.exc_info and record.exc_info[1] is not None:
            return self.formatException(record.exc_info)
        return None


class JsonFormatter(_ContextFormatter):
    """One JSON object per record."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": self._now().isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        context = get_context().as_dict()
        if context:
            entry["context"] = context
        data = getattr(record, "data", None)
        if data:
            entry["data"] = data
        exception = self._exception_text(record)
        if exception is not None:
            entry["exception"] = exception
        return json.dumps(entry, default=str)


class TextFormatter(_ContextFormatter):
    """``time [LEVEL] logger [request] (stage): message``"""

    def format(self, record: logging.LogRecord) -> str:
        ctx = get_context()
        head = f"{self._now():%Y-%m-%d %H:%M:%S} [{record.levelname:<8}] {record.name}"
        if ctx.request_id:
            head += f" [{ctx.request_id}]"
        if ctx.stage:
            head += f" ({ctx.stage})"
        line = f"{head}: {record.getMessage()}"
        exception = self._exception_text(record)
        return line if exception is None else f"{line}\n{exception}"


def setup_logging(
    level: str = "INFO",
    log_format: str = "json",
    log_file: str | Path | None = None,
    rotation: str = "10MB",
    retention: int = 30,
) -> None:
    """(Re)configure the ``truthgen`` logger.

    Existing handlers are replaced, so calling this twice is safe. Output
    goes to stderr and, when ``log_file`` is set, to a rotating file.
    """
    formatter = JsonFormatter() if log_format == "json" else TextFormatter()
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file:
        handlers.append(create_rotating_handler(log_file, rotation, retention))

    root = logging.getLogger(ROOT_LOGGER)
    root.setLevel(_LEVELS.get(level.upper(), logging.INFO))
    for old in list(root.handlers):
        root.removeHandler(old)
    for handler in handlers:
        handler.setFormatter(formatter)
        root.addHandler(handler)

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def setup_logging_from_settings(settings: Any, verbose: bool = False) -> None:
    """Apply LOG_* settings; ``verbose`` forces DEBUG."""
    setup_logging(
        level="DEBUG" if verbose else settings.log_level,
        log_format=settings.log_format,
        log_file=settings.log_file,
        rotation=settings.log_rotation,
        retention=settings.log_retention,
    )

# src/logging/handlers.py — v3
"""Log file handlers.

LOG_ROTATION is a size such as "10MB"; LOG_RETENTION is the number of
rotated files kept next to the active one.
"""

from __future__ import annotations

import re
from logging.handlers import RotatingFileHandler
from pathlib import Path

_UNIT_BYTES = {"KB": 1 << 10, "MB": 1 << 20, "GB": 1 << 30}
_SIZE_RE = re.compile(r"(\d+)\s*([KMG]B)", re.IGNORECASE)


def parse_size(size_str: str) -> int:
    """Bytes for a size string; units are KB, MB or GB in any case."""
    match = _SIZE_RE.fullmatch(size_str.strip())
    if match is None:
        raise ValueError(f"Invalid size {size_str!r}, expected something like '10MB'")
    count, unit = match.groups()
    return int(count) * _UNIT_BYTES[unit.upper()]


def create_rotating_handler(
    log_file: str | Path,
    rotation: str = "10MB",
    retention: int = 30,
) -> RotatingFileHandler:
    """UTF-8 RotatingFileHandler writing to ``log_file``, creating its directory."""
    target = Path(log_file).expanduser()
    target.parent.mkdir(parents=True, exist_ok=True)
    return RotatingFileHandler(
        target,
        maxBytes=parse_size(rotation),
        backupCount=retention,
        encoding="utf-8",
    )

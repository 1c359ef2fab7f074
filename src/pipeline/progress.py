# src/pipeline/progress.py — v1
"""Progress events emitted by the orchestrator at lifecycle points.

Percentages are fixed per stage and only move forward within a run; a
``failed`` event resets the indicator to zero. Rendering is left to the
caller.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Literal

logger = logging.getLogger(__name__)

ProgressStage = Literal[
    "started",
    "cache_checked",
    "dispatch_started",
    "dispatch_completed",
    "completed",
    "failed",
]
ResultSource = Literal["local_cache", "shared_cache", "analysis"]

STAGE_PERCENT: dict[str, int] = {
    "started": 0,
    "cache_checked": 25,
    "dispatch_started": 40,
    "dispatch_completed": 90,
    "completed": 100,
    "failed": 0,
}

SOURCE_LABELS: dict[str, str] = {
    "local_cache": "from local cache",
    "shared_cache": "from shared cache",
    "analysis": "fresh analysis",
}


@dataclass(frozen=True)
class ProgressEvent:
    """One progress notification."""

    stage: ProgressStage
    percent: int
    message: str = ""
    source: ResultSource | None = None


ProgressCallback = Callable[[ProgressEvent], None]


class ProgressReporter:
    """Per-request emitter that forwards events to an optional callback.

    Callback exceptions are logged and never interrupt the pipeline.
    """

    def __init__(self, callback: ProgressCallback | None = None) -> None:
        self._callback = callback
        self._percent = 0

    @property
    def percent(self) -> int:
        return self._percent

    def emit(
        self,
        stage: ProgressStage,
        message: str = "",
        source: ResultSource | None = None,
    ) -> ProgressEvent:
        percent = STAGE_PERCENT[stage]
        if stage != "failed":
            percent = max(percent, self._percent)
        self._percent = percent
        event = ProgressEvent(stage=stage, percent=percent, message=message, source=source)
        if self._callback is not None:
            try:
                self._callback(event)
            except Exception:
                logger.exception("Progress callback failed on %s", stage)
        return event

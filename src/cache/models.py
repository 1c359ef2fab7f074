# src/cache/models.py — v2
"""Cache domain models: CacheEntry and the persisted local record layout."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict

from truthgen.core.models import AnalysisResult


class CacheEntry(BaseModel):
    """Single cache entry linking a content fingerprint to its result."""

    model_config = ConfigDict(frozen=True)

    fingerprint: str
    result: AnalysisResult
    stored_at_ms: int

    def is_expired(self, now_ms: int, ttl_ms: int) -> bool:
        """Strictly older than ``ttl_ms`` at ``now_ms``."""
        return now_ms - self.stored_at_ms > ttl_ms

    def to_record(self) -> dict[str, Any]:
        """Flat persisted layout: ``{hash, ...result fields, timestamp}``."""
        return {
            "hash": self.fingerprint,
            **self.result.to_wire(),
            "timestamp": self.stored_at_ms,
        }

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> CacheEntry:
        """Inverse of :meth:`to_record`."""
        data = dict(record)
        fingerprint = data.pop("hash")
        stored_at_ms = int(data.pop("timestamp"))
        return cls(
            fingerprint=fingerprint,
            result=AnalysisResult.model_validate(data),
            stored_at_ms=stored_at_ms,
        )

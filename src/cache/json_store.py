# src/cache/json_store.py — v3
"""JSON file-based local result store (LOCAL_CACHE_BACKEND=json).

Stores one JSON record per fingerprint under LOCAL_CACHE_ROOT, laid out as
``{hash, status, confidence, issues, counterContent, timestamp}``.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Callable

from truthgen.cache.base_cache_store import DEFAULT_TTL_MS, BaseLocalStore, now_ms
from truthgen.cache.models import CacheEntry
from truthgen.core.errors import PersistenceFailure
from truthgen.core.models import AnalysisResult

logger = logging.getLogger(__name__)


class JsonLocalStore(BaseLocalStore):
    """File-based local store using one JSON file per fingerprint."""

    def __init__(
        self,
        cache_root: Path | str,
        ttl_ms: int = DEFAULT_TTL_MS,
        clock: Callable[[], int] = now_ms,
    ) -> None:
        self._root = Path(cache_root).expanduser()
        self._root.mkdir(parents=True, exist_ok=True)
        self._ttl_ms = ttl_ms
        self._clock = clock

    async def get(self, fingerprint: str) -> AnalysisResult | None:
        """Retrieve a result by fingerprint. Any failure is a miss."""
        path = self._entry_path(fingerprint)
        try:
            if not path.exists():
                return None
            entry = CacheEntry.from_record(json.loads(path.read_text(encoding="utf-8")))
        except Exception as e:
            logger.warning("Failed to read local cache entry %s: %s", fingerprint[:12], e)
            return None
        return entry.result

    async def put(self, fingerprint: str, result: AnalysisResult) -> None:
        """Store a result stamped with the current time."""
        entry = CacheEntry(
            fingerprint=fingerprint, result=result, stored_at_ms=self._clock(),
        )
        path = self._entry_path(fingerprint)
        tmp_path = path.with_suffix(".json.tmp")
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(json.dumps(entry.to_record(), indent=2), encoding="utf-8")
            tmp_path.replace(path)
        except OSError as e:
            raise PersistenceFailure(self.tier, fingerprint, str(e)) from e

    async def delete(self, fingerprint: str) -> None:
        """Remove an entry."""
        self._entry_path(fingerprint).unlink(missing_ok=True)

    async def list_entries(self) -> list[CacheEntry]:
        """List all readable entries. Corrupt files are skipped."""
        entries: list[CacheEntry] = []
        if not self._root.is_dir():
            return entries

        for path in self._root.glob("*.json"):
            entry = self._read_entry(path)
            if entry is not None:
                entries.append(entry)
        return entries

    async def evict_expired(self) -> int:
        """Delete entries strictly older than the TTL."""
        now = self._clock()
        removed = 0
        if not self._root.is_dir():
            return removed

        for path in self._root.glob("*.json"):
            entry = self._read_entry(path)
            if entry is not None and entry.is_expired(now, self._ttl_ms):
                path.unlink(missing_ok=True)
                removed += 1

        if removed:
            logger.info("Evicted %d expired local cache entries", removed)
        return removed

    def _read_entry(self, path: Path) -> CacheEntry | None:
        try:
            return CacheEntry.from_record(json.loads(path.read_text(encoding="utf-8")))
        except FileNotFoundError:
            # Removed by a concurrent sweep
            return None
        except Exception as e:
            logger.warning("Skipping unreadable cache file %s: %s", path.name, e)
            return None

    def _entry_path(self, fingerprint: str) -> Path:
        """Return file path for a fingerprint."""
        safe_key = fingerprint.replace("/", "_").replace("\\", "_")
        return self._root / f"{safe_key}.json"

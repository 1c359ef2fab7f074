# src/cache/sqlite_store.py — v2
"""SQLite-based result stores.

Uses stdlib sqlite3 — no external dependency.
``SqliteLocalStore`` backs the device tier (LOCAL_CACHE_BACKEND=sqlite).
``SqliteSharedStore`` backs the shared tier (SHARED_CACHE_BACKEND=sqlite)
with one row per fingerprint: ``hash`` (unique) and ``result`` (JSON).
"""

from __future__ import annotations

import json
import logging
import sqlite3
from pathlib import Path
from typing import Callable

from truthgen.cache.base_cache_store import (
    DEFAULT_TTL_MS,
    BaseLocalStore,
    BaseSharedStore,
    now_ms,
)
from truthgen.cache.models import CacheEntry
from truthgen.core.errors import CacheUnavailable, PersistenceFailure
from truthgen.core.models import AnalysisResult

logger = logging.getLogger(__name__)

_LOCAL_SCHEMA = """
CREATE TABLE IF NOT EXISTS analysis_results (
    hash TEXT PRIMARY KEY,
    record TEXT NOT NULL,
    timestamp INTEGER NOT NULL
);
CREATE INDEX IF NOT EXISTS idx_results_timestamp ON analysis_results(timestamp);
"""

_SHARED_SCHEMA = """
CREATE TABLE IF NOT EXISTS analysis_cache (
    hash TEXT NOT NULL UNIQUE,
    result TEXT NOT NULL,
    created_at TEXT DEFAULT CURRENT_TIMESTAMP
);
"""


def _connect(db_path: Path | str, schema: str) -> sqlite3.Connection:
    path = Path(db_path).expanduser()
    path.parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(str(path), check_same_thread=False)
    conn.execute("PRAGMA journal_mode=WAL")
    conn.executescript(schema)
    return conn


class SqliteLocalStore(BaseLocalStore):
    """SQLite-backed local store with timestamp-indexed eviction."""

    def __init__(
        self,
        db_path: Path | str,
        ttl_ms: int = DEFAULT_TTL_MS,
        clock: Callable[[], int] = now_ms,
    ) -> None:
        self._conn = _connect(db_path, _LOCAL_SCHEMA)
        self._ttl_ms = ttl_ms
        self._clock = clock

    async def get(self, fingerprint: str) -> AnalysisResult | None:
        """Retrieve a result by fingerprint. Any failure is a miss."""
        try:
            row = self._conn.execute(
                "SELECT record FROM analysis_results WHERE hash = ?", (fingerprint,)
            ).fetchone()
            if row is None:
                return None
            return CacheEntry.from_record(json.loads(row[0])).result
        except Exception as e:
            logger.warning("Failed to read local cache entry %s: %s", fingerprint[:12], e)
            return None

    async def put(self, fingerprint: str, result: AnalysisResult) -> None:
        """Store a result (upsert) stamped with the current time."""
        entry = CacheEntry(
            fingerprint=fingerprint, result=result, stored_at_ms=self._clock(),
        )
        try:
            self._conn.execute(
                """INSERT OR REPLACE INTO analysis_results (hash, record, timestamp)
                   VALUES (?, ?, ?)""",
                (fingerprint, json.dumps(entry.to_record()), entry.stored_at_ms),
            )
            self._conn.commit()
        except sqlite3.Error as e:
            raise PersistenceFailure(self.tier, fingerprint, str(e)) from e

    async def delete(self, fingerprint: str) -> None:
        """Remove an entry."""
        self._conn.execute("DELETE FROM analysis_results WHERE hash = ?", (fingerprint,))
        self._conn.commit()

    async def list_entries(self) -> list[CacheEntry]:
        """List all readable entries."""
        entries: list[CacheEntry] = []
        for (record,) in self._conn.execute("SELECT record FROM analysis_results"):
            try:
                entries.append(CacheEntry.from_record(json.loads(record)))
            except Exception as e:
                logger.warning("Skipping unreadable local cache row: %s", e)
        return entries

    async def evict_expired(self) -> int:
        """Delete entries strictly older than the TTL."""
        cutoff = self._clock() - self._ttl_ms
        cursor = self._conn.execute(
            "DELETE FROM analysis_results WHERE timestamp < ?", (cutoff,)
        )
        self._conn.commit()
        removed = cursor.rowcount
        if removed:
            logger.info("Evicted %d expired local cache entries", removed)
        return removed

    def close(self) -> None:
        """Close the SQLite connection."""
        self._conn.close()


class SqliteSharedStore(BaseSharedStore):
    """SQLite-backed shared store: ``analysis_cache(hash UNIQUE, result JSON)``."""

    def __init__(self, db_path: Path | str) -> None:
        try:
            self._conn = _connect(db_path, _SHARED_SCHEMA)
        except sqlite3.Error as e:
            raise CacheUnavailable(self.tier, str(e)) from e

    async def get(self, fingerprint: str) -> AnalysisResult | None:
        """Retrieve a result by fingerprint."""
        try:
            row = self._conn.execute(
                "SELECT result FROM analysis_cache WHERE hash = ?", (fingerprint,)
            ).fetchone()
        except sqlite3.Error as e:
            raise CacheUnavailable(self.tier, str(e)) from e
        if row is None:
            return None
        try:
            return AnalysisResult.model_validate_json(row[0])
        except ValueError as e:
            logger.warning("Discarding malformed shared cache row %s: %s", fingerprint[:12], e)
            return None

    async def put(self, fingerprint: str, result: AnalysisResult) -> None:
        """Store a result (upsert on hash)."""
        try:
            self._conn.execute(
                """INSERT INTO analysis_cache (hash, result) VALUES (?, ?)
                   ON CONFLICT(hash) DO UPDATE SET result = excluded.result""",
                (fingerprint, json.dumps(result.to_wire())),
            )
            self._conn.commit()
        except sqlite3.Error as e:
            raise PersistenceFailure(self.tier, fingerprint, str(e)) from e

    def close(self) -> None:
        """Close the SQLite connection."""
        self._conn.close()

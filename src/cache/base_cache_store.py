# src/cache/base_cache_store.py — v2
"""Abstract result store interfaces for the two cache tiers."""

from __future__ import annotations

import time
from abc import ABC, abstractmethod

from truthgen.cache.models import CacheEntry
from truthgen.core.models import AnalysisResult

DEFAULT_TTL_MS = 24 * 60 * 60 * 1000


def now_ms() -> int:
    """Current wall-clock time in epoch milliseconds."""
    return int(time.time() * 1000)


class BaseResultStore(ABC):
    """Fingerprint → AnalysisResult mapping shared by both tiers."""

    tier: str = "unknown"

    @abstractmethod
    async def get(self, fingerprint: str) -> AnalysisResult | None:
        """Retrieve the cached result for a fingerprint."""

    @abstractmethod
    async def put(self, fingerprint: str, result: AnalysisResult) -> None:
        """Store a result, overwriting any previous value."""

    def close(self) -> None:
        """Release backend resources. No-op by default."""


class BaseLocalStore(BaseResultStore):
    """Device-local tier with time-based eviction.

    ``get`` never raises: storage failures are logged and reported as a miss.
    ``put`` raises PersistenceFailure when the write cannot be completed.
    """

    tier = "local"

    @abstractmethod
    async def delete(self, fingerprint: str) -> None:
        """Remove an entry. Missing entries are ignored."""

    @abstractmethod
    async def list_entries(self) -> list[CacheEntry]:
        """List all readable entries."""

    @abstractmethod
    async def evict_expired(self) -> int:
        """Delete every entry older than the TTL.

        Returns:
            Number of entries removed by this call.
        """


class BaseSharedStore(BaseResultStore):
    """Centrally shared tier. Entries never expire.

    ``get`` raises CacheUnavailable on store-level errors and
    ``put`` raises PersistenceFailure; callers decide how to degrade.
    """

    tier = "shared"

# src/cache/redis_store.py — v2
"""Redis-based shared result store (SHARED_CACHE_BACKEND=redis).

Requires 'redis' package: pip install redis.
Suitable for distributed/multi-instance deployments. Entries are stored as
``truthgen:analysis:<hash>`` → result JSON, with no expiry.
"""

from __future__ import annotations

import json
import logging

from truthgen.cache.base_cache_store import BaseSharedStore
from truthgen.core.errors import CacheUnavailable, PersistenceFailure
from truthgen.core.models import AnalysisResult

logger = logging.getLogger(__name__)

_KEY_PREFIX = "truthgen:analysis:"


class RedisSharedStore(BaseSharedStore):
    """Redis-backed shared store for multi-client deployments."""

    def __init__(self, redis_url: str) -> None:
        try:
            import redis
        except ImportError as e:
            raise ImportError(
                "redis package required: pip install redis"
            ) from e

        self._redis_error: type[Exception] = redis.RedisError
        self._client = redis.Redis.from_url(redis_url, decode_responses=True)

    async def get(self, fingerprint: str) -> AnalysisResult | None:
        """Retrieve a result by fingerprint."""
        try:
            data = self._client.get(f"{_KEY_PREFIX}{fingerprint}")
        except self._redis_error as e:
            raise CacheUnavailable(self.tier, str(e)) from e
        if data is None:
            return None
        try:
            return AnalysisResult.model_validate_json(data)
        except ValueError as e:
            logger.warning("Discarding malformed shared cache value %s: %s", fingerprint[:12], e)
            return None

    async def put(self, fingerprint: str, result: AnalysisResult) -> None:
        """Store a result."""
        try:
            self._client.set(f"{_KEY_PREFIX}{fingerprint}", json.dumps(result.to_wire()))
        except self._redis_error as e:
            raise PersistenceFailure(self.tier, fingerprint, str(e)) from e

    def close(self) -> None:
        """Close the Redis connection."""
        self._client.close()

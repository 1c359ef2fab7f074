# src/cache/cache_factory.py — v3
"""Factory for result store instantiation.

Stores are built once by the process entry point and injected into the
orchestrator.
"""

from __future__ import annotations

from typing import Callable

from truthgen.cache.base_cache_store import BaseLocalStore, BaseSharedStore, now_ms
from truthgen.config.settings import Settings


def create_local_store(
    settings: Settings | None = None,
    clock: Callable[[], int] = now_ms,
) -> BaseLocalStore | None:
    """Instantiate the configured local (device) tier.

    Args:
        settings: Application settings. Defaults to the JSON backend.
        clock: Epoch-millis clock used to stamp and expire entries.

    Returns:
        Configured BaseLocalStore, or None when the local tier is disabled.
    """
    settings = settings or Settings()
    if not settings.local_cache_enabled:
        return None

    backend = settings.local_cache_backend
    cache_root = settings.local_cache_root.expanduser()
    ttl_ms = settings.local_cache_ttl_ms

    if backend == "json":
        from truthgen.cache.json_store import JsonLocalStore
        return JsonLocalStore(cache_root=cache_root, ttl_ms=ttl_ms, clock=clock)

    if backend == "sqlite":
        from truthgen.cache.sqlite_store import SqliteLocalStore
        return SqliteLocalStore(
            db_path=cache_root / "truthgen_cache.db", ttl_ms=ttl_ms, clock=clock,
        )

    raise ValueError(f"Unsupported local cache backend: {backend!r}")


def create_shared_store(settings: Settings | None = None) -> BaseSharedStore | None:
    """Instantiate the configured shared tier.

    Settings validation guarantees the DB path or Redis URL the backend needs.

    Returns:
        Configured BaseSharedStore, or None for SHARED_CACHE_BACKEND=none.
    """
    settings = settings or Settings()
    backend = settings.shared_cache_backend

    if backend == "none":
        return None

    if backend == "sqlite":
        from truthgen.cache.sqlite_store import SqliteSharedStore
        return SqliteSharedStore(db_path=settings.shared_cache_db_path)  # type: ignore[arg-type]

    if backend == "redis":
        from truthgen.cache.redis_store import RedisSharedStore
        return RedisSharedStore(redis_url=settings.shared_cache_redis_url)

    raise ValueError(f"Unsupported shared cache backend: {backend!r}")

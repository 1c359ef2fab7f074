# tests/unit/cache/test_base_cache_store.py — v2
"""Tests for cache/base_cache_store.py — ABC contracts."""

from __future__ import annotations

import time

import pytest

from truthgen.cache.base_cache_store import (
    DEFAULT_TTL_MS,
    BaseLocalStore,
    BaseResultStore,
    BaseSharedStore,
    now_ms,
)


class TestBaseStores:
    def test_cannot_instantiate(self):
        with pytest.raises(TypeError):
            BaseResultStore()  # type: ignore[abstract]
        with pytest.raises(TypeError):
            BaseLocalStore()  # type: ignore[abstract]

    def test_tiers(self):
        assert BaseLocalStore.tier == "local"
        assert BaseSharedStore.tier == "shared"

    def test_local_requires_eviction(self):
        class Incomplete(BaseLocalStore):
            async def get(self, fingerprint):
                return None

            async def put(self, fingerprint, result):
                pass

        with pytest.raises(TypeError):
            Incomplete()  # type: ignore[abstract]

    def test_shared_close_is_noop(self):
        class Minimal(BaseSharedStore):
            async def get(self, fingerprint):
                return None

            async def put(self, fingerprint, result):
                pass

        Minimal().close()


def test_default_ttl_is_one_day():
    assert DEFAULT_TTL_MS == 86_400_000


def test_now_ms_is_epoch_millis():
    before = int(time.time() * 1000)
    value = now_ms()
    after = int(time.time() * 1000)
    assert before <= value <= after

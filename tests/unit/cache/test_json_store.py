# tests/unit/cache/test_json_store.py — v1
"""Tests for cache/json_store.py — local tier on the filesystem."""

from __future__ import annotations

import json

import pytest

from truthgen.cache.json_store import JsonLocalStore
from truthgen.core.errors import PersistenceFailure

HOUR_MS = 60 * 60 * 1000
MINUTE_MS = 60 * 1000
FP = "a" * 64


@pytest.fixture
def store(tmp_cache_dir, fake_clock):
    return JsonLocalStore(cache_root=tmp_cache_dir, clock=fake_clock)


class TestJsonLocalStore:
    @pytest.mark.asyncio
    async def test_put_and_get(self, store, sample_result):
        await store.put(FP, sample_result)
        result = await store.get(FP)
        assert result == sample_result

    @pytest.mark.asyncio
    async def test_get_missing(self, store):
        assert await store.get("nonexistent") is None

    @pytest.mark.asyncio
    async def test_record_layout(self, store, sample_result, tmp_cache_dir, fake_clock):
        await store.put(FP, sample_result)
        record = json.loads((tmp_cache_dir / f"{FP}.json").read_text(encoding="utf-8"))
        assert record["hash"] == FP
        assert record["timestamp"] == fake_clock.now_ms
        assert record["status"] == "false"
        assert record["confidence"] == 5
        assert record["issues"] == ["Contradicted by satellite imagery"]
        assert set(record["counterContent"]) == {"factCheck", "visualContent", "shortForm"}

    @pytest.mark.asyncio
    async def test_overwrite_restamps(self, store, sample_result, fake_clock):
        await store.put(FP, sample_result)
        fake_clock.advance(HOUR_MS)
        updated = sample_result.model_copy(update={"confidence": 42})
        await store.put(FP, updated)
        entries = await store.list_entries()
        assert len(entries) == 1
        assert entries[0].result.confidence == 42
        assert entries[0].stored_at_ms == fake_clock.now_ms

    @pytest.mark.asyncio
    async def test_corrupt_record_is_miss(self, store, tmp_cache_dir):
        (tmp_cache_dir / f"{FP}.json").write_text("{not json", encoding="utf-8")
        assert await store.get(FP) is None

    @pytest.mark.asyncio
    async def test_invalid_record_is_miss(self, store, tmp_cache_dir):
        (tmp_cache_dir / f"{FP}.json").write_text(
            json.dumps({"hash": FP, "status": "bogus", "timestamp": 1}), encoding="utf-8",
        )
        assert await store.get(FP) is None

    @pytest.mark.asyncio
    async def test_delete(self, store, sample_result):
        await store.put(FP, sample_result)
        await store.delete(FP)
        assert await store.get(FP) is None
        await store.delete(FP)  # idempotent

    @pytest.mark.asyncio
    async def test_put_failure_raises_persistence_failure(
        self, store, sample_result, tmp_cache_dir,
    ):
        # A directory where the file should go makes the rename fail
        (tmp_cache_dir / f"{FP}.json").mkdir()
        with pytest.raises(PersistenceFailure):
            await store.put(FP, sample_result)


class TestJsonEviction:
    @pytest.mark.asyncio
    async def test_present_just_before_ttl(self, store, sample_result, fake_clock):
        await store.put(FP, sample_result)
        fake_clock.advance(23 * HOUR_MS + 59 * MINUTE_MS)
        assert await store.evict_expired() == 0
        assert await store.get(FP) == sample_result

    @pytest.mark.asyncio
    async def test_absent_just_after_ttl(self, store, sample_result, fake_clock):
        await store.put(FP, sample_result)
        fake_clock.advance(24 * HOUR_MS + MINUTE_MS)
        assert await store.evict_expired() == 1
        assert await store.get(FP) is None

    @pytest.mark.asyncio
    async def test_exactly_at_ttl_is_kept(self, store, sample_result, fake_clock):
        await store.put(FP, sample_result)
        fake_clock.advance(24 * HOUR_MS)
        assert await store.evict_expired() == 0

    @pytest.mark.asyncio
    async def test_only_old_entries_removed(self, store, sample_result, fake_clock):
        await store.put("old" + "0" * 61, sample_result)
        fake_clock.advance(20 * HOUR_MS)
        await store.put("new" + "0" * 61, sample_result)
        fake_clock.advance(5 * HOUR_MS)
        assert await store.evict_expired() == 1
        remaining = await store.list_entries()
        assert [e.fingerprint for e in remaining] == ["new" + "0" * 61]

    @pytest.mark.asyncio
    async def test_idempotent(self, store, sample_result, fake_clock):
        await store.put(FP, sample_result)
        fake_clock.advance(25 * HOUR_MS)
        assert await store.evict_expired() == 1
        assert await store.evict_expired() == 0

    @pytest.mark.asyncio
    async def test_custom_ttl(self, tmp_cache_dir, fake_clock, sample_result):
        store = JsonLocalStore(tmp_cache_dir, ttl_ms=HOUR_MS, clock=fake_clock)
        await store.put(FP, sample_result)
        fake_clock.advance(HOUR_MS + 1)
        assert await store.evict_expired() == 1

    @pytest.mark.asyncio
    async def test_unreadable_files_skipped(self, store, tmp_cache_dir, fake_clock):
        (tmp_cache_dir / "broken.json").write_text("garbage", encoding="utf-8")
        fake_clock.advance(48 * HOUR_MS)
        assert await store.evict_expired() == 0
        assert (tmp_cache_dir / "broken.json").exists()

    @pytest.mark.asyncio
    async def test_persists_across_instances(self, tmp_cache_dir, fake_clock, sample_result):
        first = JsonLocalStore(tmp_cache_dir, clock=fake_clock)
        await first.put(FP, sample_result)
        second = JsonLocalStore(tmp_cache_dir, clock=fake_clock)
        assert await second.get(FP) == sample_result

# tests/integration/pipeline/test_int_pipeline_subsystem.py — v5
"""Integration tests for the analysis pipeline.

Covers: cache/fingerprint.py, cache/json_store.py, cache/sqlite_store.py,
        analysis/dispatcher.py, analysis/normalizer.py, analysis/result_mapper.py,
        pipeline/orchestrator.py, pipeline/progress.py

Real local and shared stores on disk; the oracle is a mock client.
"""

from __future__ import annotations

import pytest

from truthgen.analysis.dispatcher import AnalysisDispatcher
from truthgen.cache.fingerprint import compute_fingerprint
from truthgen.cache.json_store import JsonLocalStore
from truthgen.cache.sqlite_store import SqliteSharedStore
from truthgen.core.errors import AnalysisFailed, OracleError
from truthgen.core.models import Submission
from truthgen.pipeline.orchestrator import AnalysisOrchestrator

pytestmark = pytest.mark.integration

HOUR_MS = 60 * 60 * 1000


@pytest.fixture
def shared_db(tmp_path):
    return tmp_path / "shared" / "analysis_cache.db"


def _device(root, shared_db, llm, clock):
    """One client device: its own local tier, the common shared tier."""
    local = JsonLocalStore(cache_root=root, clock=clock)
    shared = SqliteSharedStore(db_path=shared_db)
    orchestrator = AnalysisOrchestrator(
        AnalysisDispatcher(llm), local_store=local, shared_store=shared,
    )
    return orchestrator, local, shared


class TestPipelineEndToEnd:
    @pytest.mark.asyncio
    async def test_fresh_then_local(self, tmp_path, shared_db, mock_llm_client, fake_clock):
        orchestrator, local, shared = _device(
            tmp_path / "device1", shared_db, mock_llm_client, fake_clock,
        )
        sub = Submission.from_text("The Earth is flat")
        try:
            first = await orchestrator.run(sub)
            second = await orchestrator.run(sub)
        finally:
            shared.close()

        assert first == second
        assert first.issues == ["Contradicted by satellite imagery"]
        assert mock_llm_client.complete.await_count == 1
        assert (tmp_path / "device1" / f"{compute_fingerprint(sub)}.json").exists()

    @pytest.mark.asyncio
    async def test_second_device_served_from_shared(
        self, tmp_path, shared_db, mock_llm_client, fake_clock,
    ):
        sub = Submission.from_url("https://news.example/miracle-cure")
        device1, _, shared1 = _device(tmp_path / "d1", shared_db, mock_llm_client, fake_clock)
        device2, local2, shared2 = _device(tmp_path / "d2", shared_db, mock_llm_client, fake_clock)
        events = []
        try:
            first = await device1.run(sub)
            second = await device2.run(sub, on_progress=events.append)
        finally:
            shared1.close()
            shared2.close()

        assert first == second
        assert mock_llm_client.complete.await_count == 1
        assert events[-1].source == "shared_cache"
        assert await local2.get(compute_fingerprint(sub)) == first

    @pytest.mark.asyncio
    async def test_expired_local_falls_back_to_shared(
        self, tmp_path, shared_db, mock_llm_client, fake_clock,
    ):
        orchestrator, local, shared = _device(
            tmp_path / "device", shared_db, mock_llm_client, fake_clock,
        )
        sub = Submission.from_text("Drinking bleach cures colds")
        events = []
        try:
            await orchestrator.run(sub)
            fake_clock.advance(25 * HOUR_MS)
            assert await local.evict_expired() == 1
            await orchestrator.run(sub, on_progress=events.append)
        finally:
            shared.close()

        assert mock_llm_client.complete.await_count == 1
        assert events[-1].source == "shared_cache"

    @pytest.mark.asyncio
    async def test_same_name_and_size_files_share_a_result(
        self, tmp_path, shared_db, mock_llm_client, fake_clock,
    ):
        orchestrator, _, shared = _device(tmp_path / "d", shared_db, mock_llm_client, fake_clock)
        first = Submission.from_file("image", name="photo.jpg", size=3, data=b"abc")
        second = Submission.from_file("image", name="photo.jpg", size=3, data=b"xyz")
        try:
            await orchestrator.run(first)
            await orchestrator.run(second)
        finally:
            shared.close()
        assert mock_llm_client.complete_with_vision.await_count == 1

    @pytest.mark.asyncio
    async def test_failure_writes_nothing(self, tmp_path, shared_db, mock_llm_client, fake_clock):
        mock_llm_client.complete.side_effect = OracleError("AI API error: 500", status_code=500)
        orchestrator, local, shared = _device(
            tmp_path / "device", shared_db, mock_llm_client, fake_clock,
        )
        sub = Submission.from_text("The Earth is flat")
        events = []
        try:
            with pytest.raises(AnalysisFailed):
                await orchestrator.run(sub, on_progress=events.append)
            assert await shared.get(compute_fingerprint(sub)) is None
        finally:
            shared.close()

        assert await local.list_entries() == []
        assert events[-1].percent == 0

    @pytest.mark.asyncio
    async def test_unreachable_shared_tier_degrades(
        self, tmp_path, shared_db, mock_llm_client, fake_clock,
    ):
        orchestrator, _, shared = _device(tmp_path / "d", shared_db, mock_llm_client, fake_clock)
        shared.close()  # every shared read/write now fails

        result = await orchestrator.run(Submission.from_text("Vaccines contain microchips"))

        assert result.status == "false"
        assert "clinical trials" in result.counter_content.fact_check

# src/pipeline/orchestrator.py — v3
"""AnalysisOrchestrator — cache-first analysis of a single submission.

Drives one request through:
  1. Validation (no I/O)
  2. Fingerprinting
  3. Local tier lookup → return on hit
  4. Shared tier lookup → warm local tier, return on hit
  5. Dispatch to the oracle + normalize + map to AnalysisResult
  6. Best-effort persistence to shared then local tier
  7. Return

Cache tiers degrade to misses on error; persistence failures are logged
and swallowed. Everything else ends the request with AnalysisFailed and
no partial result.
"""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING

from truthgen.analysis.result_mapper import to_result
from truthgen.cache.fingerprint import compute_fingerprint
from truthgen.core.errors import AnalysisFailed, CacheUnavailable, ValidationError
from truthgen.core.models import AnalysisResult, Submission
from truthgen.logging.context import (
    clear_context,
    new_request_id,
    set_fingerprint,
    set_request_context,
    set_stage,
)
from truthgen.pipeline.progress import (
    SOURCE_LABELS,
    ProgressCallback,
    ProgressReporter,
    ResultSource,
)

if TYPE_CHECKING:
    from truthgen.analysis.dispatcher import AnalysisDispatcher
    from truthgen.cache.base_cache_store import BaseLocalStore, BaseSharedStore

logger = logging.getLogger(__name__)

EMPTY_SUBMISSION_MESSAGE = "Please enter some text, URL, or upload a file to analyze."


class AnalysisOrchestrator:
    """Top-level coordinator for one analysis request.

    Stores are constructed by the process entry point and injected here;
    either tier may be None to disable it.

    Args:
        dispatcher: Routes cache misses to the analysis oracle.
        local_store: Device-local tier, consulted first.
        shared_store: Shared tier, consulted on a local miss.
    """

    def __init__(
        self,
        dispatcher: AnalysisDispatcher,
        local_store: BaseLocalStore | None = None,
        shared_store: BaseSharedStore | None = None,
    ) -> None:
        self._dispatcher = dispatcher
        self._local = local_store
        self._shared = shared_store

    async def run(
        self,
        submission: Submission,
        on_progress: ProgressCallback | None = None,
    ) -> AnalysisResult:
        """Produce the AnalysisResult for a submission.

        Args:
            submission: User input.
            on_progress: Optional callback receiving ProgressEvents.

        Returns:
            Cached or freshly computed AnalysisResult.

        Raises:
            ValidationError: If the submission has no usable payload.
            AnalysisFailed: On any other failure; carries the user-facing message.
        """
        if not submission.has_payload():
            raise ValidationError(EMPTY_SUBMISSION_MESSAGE)

        set_request_context(new_request_id(), submission.type)
        try:
            return await self._run_in_context(submission, on_progress)
        finally:
            clear_context()

    async def _run_in_context(
        self,
        submission: Submission,
        on_progress: ProgressCallback | None,
    ) -> AnalysisResult:
        progress = ProgressReporter(on_progress)
        progress.emit("started")
        start_time = time.monotonic()

        try:
            result, source = await self._resolve(submission, progress)
        except Exception as e:
            set_stage("failed")
            logger.exception("Analysis error for %s submission", submission.type)
            progress.emit("failed", message=AnalysisFailed.USER_MESSAGE)
            raise AnalysisFailed(e) from e

        set_stage("completed")
        elapsed = time.monotonic() - start_time
        logger.info(
            "Analysis complete (%s): status=%s confidence=%d in %.2fs",
            SOURCE_LABELS[source], result.status, result.confidence, elapsed,
        )
        progress.emit(
            "completed",
            message=f"Analysis complete ({SOURCE_LABELS[source]})",
            source=source,
        )
        return result

    async def _resolve(
        self, submission: Submission, progress: ProgressReporter,
    ) -> tuple[AnalysisResult, ResultSource]:
        set_stage("fingerprint")
        fingerprint = compute_fingerprint(submission)
        set_fingerprint(fingerprint)

        # Tier 1: local
        set_stage("local_lookup")
        cached = await self._local_get(fingerprint)
        if cached is not None:
            progress.emit("cache_checked", message="Local cache hit")
            return cached, "local_cache"

        # Tier 2: shared
        set_stage("shared_lookup")
        cached = await self._shared_get(fingerprint)
        progress.emit("cache_checked", message="Shared cache hit" if cached else "Cache miss")
        if cached is not None:
            await self._local_put(fingerprint, cached)
            return cached, "shared_cache"

        # Miss: fresh analysis
        set_stage("dispatch")
        progress.emit("dispatch_started", message=f"Analyzing {submission.type}")
        analysis = await self._dispatcher.analyze(submission)
        progress.emit("dispatch_completed", message=f"Truth score {analysis.truth_score}%")
        result = to_result(analysis, submission.describe())

        set_stage("persist")
        await self._shared_put(fingerprint, result)
        await self._local_put(fingerprint, result)
        return result, "analysis"

    # ------------------------------------------------------------------
    # Tier access: reads degrade to misses, writes are best-effort
    # ------------------------------------------------------------------

    async def _local_get(self, fingerprint: str) -> AnalysisResult | None:
        if self._local is None:
            return None
        try:
            return await self._local.get(fingerprint)
        except CacheUnavailable as e:
            logger.warning("Local cache read failed, treating as miss: %s", e)
            return None

    async def _shared_get(self, fingerprint: str) -> AnalysisResult | None:
        if self._shared is None:
            return None
        try:
            return await self._shared.get(fingerprint)
        except CacheUnavailable as e:
            logger.warning("Shared cache read failed, treating as miss: %s", e)
            return None

    async def _local_put(self, fingerprint: str, result: AnalysisResult) -> None:
        if self._local is None:
            return
        try:
            await self._local.put(fingerprint, result)
        except Exception as e:
            logger.warning("Local cache write failed (result still returned): %s", e)

    async def _shared_put(self, fingerprint: str, result: AnalysisResult) -> None:
        if self._shared is None:
            return
        try:
            await self._shared.put(fingerprint, result)
        except Exception as e:
            logger.warning("Shared cache write failed (result still returned): %s", e)

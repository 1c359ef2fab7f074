# src/api/facade.py — v3
"""Public API facade — component wiring and one-shot analysis.

Usage:
    from truthgen.api.facade import analyze
    result = await analyze(Submission.from_text("The Earth is flat"))

Entry points (CLI, HTTP server) build AnalysisComponents once, run
``startup()`` to sweep expired local entries, and ``close()`` on exit.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from truthgen.analysis.dispatcher import AnalysisDispatcher
from truthgen.cache.cache_factory import create_local_store, create_shared_store
from truthgen.config.settings import Settings
from truthgen.llm.client_factory import create_oracle_client
from truthgen.pipeline.orchestrator import AnalysisOrchestrator

if TYPE_CHECKING:
    from truthgen.cache.base_cache_store import BaseLocalStore, BaseSharedStore
    from truthgen.core.models import AnalysisResult, Submission
    from truthgen.llm.base_client import BaseLLMClient
    from truthgen.pipeline.progress import ProgressCallback

logger = logging.getLogger(__name__)


@dataclass
class AnalysisComponents:
    """Process-lifetime handles owned by an entry point."""

    orchestrator: AnalysisOrchestrator
    local_store: BaseLocalStore | None
    shared_store: BaseSharedStore | None

    async def startup(self) -> int:
        """Evict expired local entries. Returns the number removed."""
        if self.local_store is None:
            return 0
        try:
            return await self.local_store.evict_expired()
        except Exception:
            logger.exception("Local cache eviction failed (non-fatal)")
            return 0

    def close(self) -> None:
        """Release store connections. A failing close does not skip the others."""
        for store in (self.local_store, self.shared_store):
            if store is None:
                continue
            try:
                store.close()
            except Exception:
                logger.exception("Failed to close %s cache store", store.tier)


def build_components(
    settings: Settings | None = None,
    llm_client: BaseLLMClient | None = None,
) -> AnalysisComponents:
    """Construct stores, oracle client and orchestrator from settings."""
    settings = settings or Settings()
    llm_client = llm_client or create_oracle_client(settings)
    local_store = create_local_store(settings)
    shared_store = create_shared_store(settings)
    dispatcher = AnalysisDispatcher(llm_client, settings=settings)

    logger.info(
        "Components ready: oracle=%s:%s local=%s shared=%s",
        settings.oracle_provider,
        settings.oracle_model,
        settings.local_cache_backend if local_store is not None else "disabled",
        settings.shared_cache_backend,
    )
    return AnalysisComponents(
        orchestrator=AnalysisOrchestrator(
            dispatcher, local_store=local_store, shared_store=shared_store,
        ),
        local_store=local_store,
        shared_store=shared_store,
    )


async def analyze(
    submission: Submission,
    settings: Settings | None = None,
    llm_client: BaseLLMClient | None = None,
    on_progress: ProgressCallback | None = None,
) -> AnalysisResult:
    """Analyze one submission with freshly built components.

    Raises:
        ValidationError: If the submission has no usable payload.
        AnalysisFailed: On any terminal failure.
    """
    components = build_components(settings, llm_client=llm_client)
    try:
        await components.startup()
        return await components.orchestrator.run(submission, on_progress=on_progress)
    finally:
        components.close()

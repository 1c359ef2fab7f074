# src/analysis/dispatcher.py — v1
"""AnalysisDispatcher — routes a submission to its modality analyzer.

One oracle call per dispatch. Failures propagate as OracleError with no
retry; the orchestrator turns them into a terminal failure.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from truthgen.analysis.base_analyzer import BaseAnalyzer
from truthgen.analysis.media_analyzer import AudioAnalyzer, ImageAnalyzer, VideoAnalyzer
from truthgen.analysis.text_analyzer import TextAnalyzer, UrlAnalyzer
from truthgen.core.errors import ValidationError
from truthgen.core.models import OracleAnalysis, Submission

if TYPE_CHECKING:
    from truthgen.config.settings import Settings
    from truthgen.llm.base_client import BaseLLMClient

logger = logging.getLogger(__name__)


def default_analyzers(settings: Settings | None = None) -> list[BaseAnalyzer]:
    """Built-in analyzers, tuned from ORACLE_* settings when given."""
    text_temp = 0.3 if settings is None else settings.oracle_text_temperature
    media_temp = 0.2 if settings is None else settings.oracle_media_temperature
    max_tokens = 4096 if settings is None else settings.oracle_max_tokens
    return [
        TextAnalyzer(temperature=text_temp, max_tokens=max_tokens),
        UrlAnalyzer(temperature=text_temp, max_tokens=max_tokens),
        ImageAnalyzer(temperature=media_temp, max_tokens=max_tokens),
        VideoAnalyzer(temperature=media_temp, max_tokens=max_tokens),
        AudioAnalyzer(temperature=media_temp, max_tokens=max_tokens),
    ]


class AnalysisDispatcher:
    """Selects the analyzer for a submission's type and runs it.

    Args:
        llm_client: Oracle client shared by all analyzers.
        settings: Optional settings for temperatures and token limits.
        analyzers: Override the analyzer set (mainly for tests).
    """

    def __init__(
        self,
        llm_client: BaseLLMClient,
        settings: Settings | None = None,
        analyzers: list[BaseAnalyzer] | None = None,
    ) -> None:
        self._llm = llm_client
        self._registry: dict[str, BaseAnalyzer] = {}
        for analyzer in analyzers if analyzers is not None else default_analyzers(settings):
            self.register(analyzer)

    def register(self, analyzer: BaseAnalyzer) -> None:
        """Register (or replace) the analyzer for its content type."""
        self._registry[analyzer.content_type] = analyzer

    @property
    def supported_types(self) -> list[str]:
        return sorted(self._registry)

    async def analyze(self, submission: Submission) -> OracleAnalysis:
        """Analyze a submission with its modality routine.

        Raises:
            ValidationError: If no analyzer handles the submission type.
            OracleError: If the oracle call fails or returns malformed JSON.
        """
        analyzer = self._registry.get(submission.type)
        if analyzer is None:
            raise ValidationError(
                f"Invalid analysis type: {submission.type!r}. "
                f"Supported: {', '.join(self.supported_types)}"
            )
        logger.info("Dispatching %s analysis to oracle", submission.type)
        return await analyzer.analyze(submission, self._llm)

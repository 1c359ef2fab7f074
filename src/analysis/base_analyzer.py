# src/analysis/base_analyzer.py — v1
"""Abstract analyzer interface for submission modalities.

Each analyzer owns one system prompt (``prompts/<name>.txt``), builds the
user turn for its modality, calls the oracle in JSON mode and normalizes
the parsed reply.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import TYPE_CHECKING

from truthgen.analysis.normalizer import normalize, parse_oracle_json
from truthgen.core.models import ContentType, OracleAnalysis, Submission
from truthgen.llm.models import ImageInput, Message

if TYPE_CHECKING:
    from truthgen.llm.base_client import BaseLLMClient

logger = logging.getLogger(__name__)

_PROMPT_DIR = Path(__file__).parent / "prompts"


class BaseAnalyzer(ABC):
    """Unified interface for modality-specific analysis routines."""

    def __init__(self, temperature: float = 0.2, max_tokens: int = 4096) -> None:
        self._temperature = temperature
        self._max_tokens = max_tokens
        self._prompt_template: str | None = None

    @property
    @abstractmethod
    def content_type(self) -> ContentType:
        """Submission type this analyzer handles."""

    @property
    def prompt_file(self) -> Path:
        return _PROMPT_DIR / f"{self.content_type}.txt"

    def system_prompt(self) -> str:
        """Load and cache the system prompt."""
        if self._prompt_template is None:
            self._prompt_template = self.prompt_file.read_text(encoding="utf-8").strip()
        return self._prompt_template

    @abstractmethod
    def build_messages(self, submission: Submission) -> list[Message]:
        """User turn(s) describing the submission."""

    def build_images(self, submission: Submission) -> list[ImageInput]:
        """Images sent alongside the user turn. None by default."""
        return []

    async def analyze(self, submission: Submission, llm: BaseLLMClient) -> OracleAnalysis:
        """Run one oracle call and normalize the response.

        Raises:
            OracleError: On any oracle failure or malformed response.
        """
        messages = self.build_messages(submission)
        images = self.build_images(submission) if llm.supports_vision else []

        if images:
            response = await llm.complete_with_vision(
                messages=messages,
                images=images,
                system=self.system_prompt(),
                max_tokens=self._max_tokens,
                temperature=self._temperature,
                json_mode=True,
            )
        else:
            response = await llm.complete(
                messages=messages,
                system=self.system_prompt(),
                max_tokens=self._max_tokens,
                temperature=self._temperature,
                json_mode=True,
            )

        analysis = normalize(parse_oracle_json(response.content))
        logger.debug(
            "%s analysis: truthScore=%d status=%s claims=%d",
            self.content_type, analysis.truth_score, analysis.status, len(analysis.claims),
        )
        return analysis

# src/analysis/text_analyzer.py — v1
"""Claim-extraction analyzers for text and URL submissions."""

from __future__ import annotations

from truthgen.analysis.base_analyzer import BaseAnalyzer
from truthgen.core.models import ContentType, Submission
from truthgen.llm.models import Message


class TextAnalyzer(BaseAnalyzer):
    """Fact-checks free text by extracting and scoring its claims."""

    def __init__(self, temperature: float = 0.3, max_tokens: int = 4096) -> None:
        super().__init__(temperature=temperature, max_tokens=max_tokens)

    @property
    def content_type(self) -> ContentType:
        return "text"

    def build_messages(self, submission: Submission) -> list[Message]:
        return [
            Message(
                role="user",
                content=f"Analyze this text for truthfulness:\n\n{submission.content}",
            )
        ]


class UrlAnalyzer(BaseAnalyzer):
    """Assesses a URL's source credibility and the claims it carries."""

    def __init__(self, temperature: float = 0.3, max_tokens: int = 4096) -> None:
        super().__init__(temperature=temperature, max_tokens=max_tokens)

    @property
    def content_type(self) -> ContentType:
        return "url"

    def build_messages(self, submission: Submission) -> list[Message]:
        return [
            Message(
                role="user",
                content=f"Analyze this URL for credibility and truth:\n\n{submission.content}",
            )
        ]

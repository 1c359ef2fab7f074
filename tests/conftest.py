# tests/conftest.py — v2
"""Shared test fixtures for all unit and integration tests.

Provides sample results, a controllable clock, a mock oracle client and
temp cache directories. No external dependencies — all I/O is local or mocked.
"""

from __future__ import annotations

import json
from pathlib import Path
from unittest.mock import AsyncMock

import pytest

from truthgen.core.models import AnalysisResult, CounterContent, Submission
from truthgen.llm.models import LLMResponse

HOUR_MS = 60 * 60 * 1000
MINUTE_MS = 60 * 1000

FLAT_EARTH_ORACLE_REPLY = {
    "status": "false",
    "truthScore": 5,
    "claims": [{"explanation": "Contradicted by satellite imagery"}],
}


class FakeClock:
    """Epoch-millis clock that only moves when told to."""

    def __init__(self, start_ms: int = 1_760_000_000_000) -> None:
        self.now_ms = start_ms

    def __call__(self) -> int:
        return self.now_ms

    def advance(self, ms: int) -> None:
        self.now_ms += ms


def make_llm_response(payload: dict | str) -> LLMResponse:
    content = payload if isinstance(payload, str) else json.dumps(payload)
    return LLMResponse(
        content=content,
        input_tokens=100,
        output_tokens=50,
        model="google/gemini-2.5-pro",
        provider="openai",
        latency_ms=500,
    )


# === FIXTURES: Sample data ===


@pytest.fixture
def sample_counter_content() -> CounterContent:
    return CounterContent(
        fact_check="Check reputable sources.",
        visual_content="Source checklist",
        short_form="Verify before you share! #FactCheck",
    )


@pytest.fixture
def sample_result(sample_counter_content: CounterContent) -> AnalysisResult:
    """Minimal valid AnalysisResult."""
    return AnalysisResult(
        status="false",
        confidence=5,
        issues=["Contradicted by satellite imagery"],
        counter_content=sample_counter_content,
    )


@pytest.fixture
def text_submission() -> Submission:
    return Submission.from_text("The Earth is flat")


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


# === FIXTURES: Mock oracle ===


@pytest.fixture
def mock_llm_response() -> LLMResponse:
    """Oracle reply for the flat-earth scenario."""
    return make_llm_response(FLAT_EARTH_ORACLE_REPLY)


@pytest.fixture
def mock_llm_client(mock_llm_response: LLMResponse) -> AsyncMock:
    """Mock BaseLLMClient with default response."""
    client = AsyncMock()
    client.complete = AsyncMock(return_value=mock_llm_response)
    client.complete_with_vision = AsyncMock(return_value=mock_llm_response)
    client.supports_vision = True
    client.provider_name = "mock"
    return client


# === FIXTURES: Temp dirs ===


@pytest.fixture
def tmp_cache_dir(tmp_path: Path) -> Path:
    """Temporary local cache directory."""
    cache = tmp_path / "cache"
    cache.mkdir()
    return cache


@pytest.fixture
def make_reply():
    """Factory building an LLMResponse from a dict or raw string."""
    return make_llm_response

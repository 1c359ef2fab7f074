# tests/unit/llm/test_llm_models.py — v3
"""Tests for llm/models.py."""

from __future__ import annotations

import pytest

from truthgen.llm.models import ImageInput, LLMResponse, Message, OracleRequest


class TestMessage:
    def test_roles(self):
        assert Message(role="system", content="x").role == "system"

    def test_invalid_role(self):
        with pytest.raises(ValueError):
            Message(role="tool", content="x")


class TestImageInput:
    def test_data_url(self):
        img = ImageInput(data=b"\x00\x01", media_type="image/webp")
        assert img.to_data_url() == "data:image/webp;base64,AAE="

    def test_default_media_type(self):
        assert ImageInput(data=b"x").to_data_url().startswith("data:image/jpeg;base64,")


def test_oracle_request_defaults():
    request = OracleRequest(messages=[Message(role="user", content="x")])
    assert request.json_mode is True
    assert request.images == []
    assert not request.has_images


def test_llm_response_defaults():
    resp = LLMResponse(content="{}", model="m", provider="openai", input_tokens=7, output_tokens=3)
    assert resp.output_tokens == 3
    assert resp.latency_ms == 0
    assert resp.raw_response is None

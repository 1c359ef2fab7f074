# src/llm/adapters/openai_adapter.py — v3
"""OpenAI-compatible chat-completions adapter.

Works against any gateway that speaks the chat-completions protocol
(``base_url``). JSON mode sets ``response_format={"type": "json_object"}``.
The SDK's own retries are disabled; a failed call surfaces as OracleError.
"""

from __future__ import annotations

import logging
import time
from typing import Any

from truthgen.core.errors import OracleError
from truthgen.llm.base_client import BaseLLMClient
from truthgen.llm.models import LLMResponse, OracleRequest

logger = logging.getLogger(__name__)


class OpenAIAdapter(BaseLLMClient):
    """Oracle client for OpenAI-compatible endpoints."""

    def __init__(
        self,
        model: str = "google/gemini-2.5-pro",
        api_key: str = "",
        base_url: str | None = None,
        timeout: float | None = None,
    ) -> None:
        self._model = model
        self._api_key = api_key
        self._base_url = base_url or None
        self._timeout = timeout
        self._client: Any = None

    @property
    def supports_vision(self) -> bool:
        return True

    @property
    def provider_name(self) -> str:
        return "openai"

    async def send(self, request: OracleRequest) -> LLMResponse:
        import openai

        params: dict[str, Any] = {
            "model": self._model,
            "messages": self._to_chat_messages(request),
            "max_tokens": request.max_tokens,
            "temperature": request.temperature,
        }
        if request.json_mode:
            params["response_format"] = {"type": "json_object"}

        started = time.monotonic()
        try:
            completion = await self._get_client().chat.completions.create(**params)
        except openai.APIStatusError as e:
            raise OracleError(f"AI API error: {e.status_code}", status_code=e.status_code) from e
        except openai.OpenAIError as e:
            raise OracleError(f"AI API unreachable: {e}") from e
        latency_ms = int((time.monotonic() - started) * 1000)

        if not completion.choices:
            raise OracleError("AI API returned no choices")
        content = completion.choices[0].message.content or ""
        if not content.strip():
            raise OracleError("AI API returned empty content")

        usage = completion.usage
        logger.debug(
            "Oracle reply from %s in %dms (%d images)",
            self._model, latency_ms, len(request.images),
        )
        return LLMResponse(
            content=content,
            model=self._model,
            provider=self.provider_name,
            input_tokens=usage.prompt_tokens if usage else 0,
            output_tokens=usage.completion_tokens if usage else 0,
            latency_ms=latency_ms,
            raw_response=completion,
        )

    @staticmethod
    def _to_chat_messages(request: OracleRequest) -> list[dict[str, Any]]:
        """System turn first; images ride along as parts of one user turn."""
        chat: list[dict[str, Any]] = []
        if request.system:
            chat.append({"role": "system", "content": request.system})

        if not request.has_images:
            chat.extend({"role": m.role, "content": m.content} for m in request.messages)
            return chat

        parts: list[dict[str, Any]] = [
            {"type": "text", "text": m.content} for m in request.messages
        ]
        parts.extend(
            {"type": "image_url", "image_url": {"url": img.to_data_url()}}
            for img in request.images
        )
        chat.append({"role": "user", "content": parts})
        return chat

    def _get_client(self) -> Any:
        if self._client is None:
            import openai

            self._client = openai.AsyncOpenAI(
                api_key=self._api_key or None,
                base_url=self._base_url,
                timeout=self._timeout,
                max_retries=0,
            )
        return self._client

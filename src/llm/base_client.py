# src/llm/base_client.py — v3
"""Oracle client interface.

Adapters implement a single ``send`` over an OracleRequest. The
``complete`` and ``complete_with_vision`` helpers build that request from
keyword arguments; analyzers only ever call the helpers.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from truthgen.llm.models import ImageInput, LLMResponse, Message, OracleRequest


class BaseLLMClient(ABC):
    """One oracle endpoint. A failed call raises OracleError and is never retried."""

    @abstractmethod
    async def send(self, request: OracleRequest) -> LLMResponse:
        """Issue exactly one oracle call."""

    @property
    @abstractmethod
    def supports_vision(self) -> bool:
        """Whether image inputs are forwarded to the model."""

    @property
    @abstractmethod
    def provider_name(self) -> str: ...

    async def complete(
        self,
        messages: list[Message],
        system: str | None = None,
        max_tokens: int = 4096,
        temperature: float = 0.2,
        json_mode: bool = True,
    ) -> LLMResponse:
        return await self.send(OracleRequest(
            messages=messages,
            system=system,
            max_tokens=max_tokens,
            temperature=temperature,
            json_mode=json_mode,
        ))

    async def complete_with_vision(
        self,
        messages: list[Message],
        images: list[ImageInput],
        system: str | None = None,
        max_tokens: int = 4096,
        temperature: float = 0.2,
        json_mode: bool = True,
    ) -> LLMResponse:
        if not self.supports_vision:
            raise NotImplementedError(f"{self.provider_name} does not accept images")
        return await self.send(OracleRequest(
            messages=messages,
            images=images,
            system=system,
            max_tokens=max_tokens,
            temperature=temperature,
            json_mode=json_mode,
        ))

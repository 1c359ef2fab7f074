# src/llm/models.py — v3
"""Oracle transport types: Message, ImageInput, OracleRequest, LLMResponse."""

from __future__ import annotations

import base64
from typing import Any, Literal

from pydantic import BaseModel, Field

Role = Literal["user", "assistant", "system"]


class Message(BaseModel):
    """Single conversation turn."""

    role: Role
    content: str


class ImageInput(BaseModel):
    """Still image forwarded to a vision-capable oracle."""

    data: bytes
    media_type: str = "image/jpeg"
    source_id: str | None = None

    def to_data_url(self) -> str:
        """Encode as a ``data:<media_type>;base64,...`` URL."""
        b64 = base64.b64encode(self.data).decode()
        return f"data:{self.media_type};base64,{b64}"


class OracleRequest(BaseModel):
    """Everything an adapter needs to issue one oracle call."""

    messages: list[Message]
    images: list[ImageInput] = Field(default_factory=list)
    system: str | None = None
    max_tokens: int = 4096
    temperature: float = 0.2
    json_mode: bool = True

    @property
    def has_images(self) -> bool:
        return bool(self.images)


class LLMResponse(BaseModel):
    """Oracle reply plus call accounting."""

    content: str
    model: str
    provider: str
    input_tokens: int = 0
    output_tokens: int = 0
    latency_ms: int = 0
    raw_response: Any = None

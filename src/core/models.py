# src/core/models.py — v2
"""Shared Pydantic domain models used across modules.

No module redefines these types — all imports come from core.models.
Wire-facing models serialize with camelCase aliases; use
``model_dump(by_alias=True)`` when emitting JSON.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

ContentType = Literal["text", "url", "image", "video", "audio"]
ResultStatus = Literal["verified", "suspicious", "false"]

CONTENT_TYPES: tuple[str, ...] = ("text", "url", "image", "video", "audio")
MEDIA_TYPES: frozenset[str] = frozenset({"image", "video", "audio"})


# === SUBMISSION ===


class FileReference(BaseModel):
    """Uploaded file as seen by the pipeline.

    Only ``name`` and ``size`` take part in identity. ``data`` is forwarded
    to the oracle for images and ignored otherwise.
    """

    name: str
    size: int = Field(default=0, ge=0)
    media_type: str = ""
    data: bytes | None = None


class Submission(BaseModel):
    """One unit of user input: text, a URL, or a media file.

    Exactly one payload is active. ``content`` carries text/URL payloads,
    ``file`` carries media payloads. Emptiness is not rejected here so that
    the orchestrator can raise a domain ValidationError before any I/O.
    """

    type: ContentType
    content: str = ""
    file: FileReference | None = None

    @model_validator(mode="after")
    def _check_payload_variant(self) -> Submission:
        if self.type in MEDIA_TYPES:
            if self.content and self.file is None:
                raise ValueError(f"{self.type} submission requires a file, not content")
        elif self.file is not None:
            raise ValueError(f"{self.type} submission cannot carry a file")
        return self

    @property
    def is_media(self) -> bool:
        return self.type in MEDIA_TYPES

    def has_payload(self) -> bool:
        """True when the active payload is usable (non-blank text/URL or a named file)."""
        if self.is_media:
            return self.file is not None and bool(self.file.name.strip())
        return bool(self.content.strip())

    def describe(self) -> str:
        """Human-readable content used for topic matching and log lines."""
        if self.is_media and self.file is not None:
            return f"Analyzing {self.type} file: {self.file.name}"
        return self.content

    @classmethod
    def from_text(cls, text: str) -> Submission:
        return cls(type="text", content=text)

    @classmethod
    def from_url(cls, url: str) -> Submission:
        return cls(type="url", content=url)

    @classmethod
    def from_file(
        cls,
        content_type: ContentType,
        name: str,
        size: int,
        media_type: str = "",
        data: bytes | None = None,
    ) -> Submission:
        return cls(
            type=content_type,
            file=FileReference(name=name, size=size, media_type=media_type, data=data),
        )

    @classmethod
    def from_media_type(
        cls, media_type: str, name: str, size: int, data: bytes | None = None,
    ) -> Submission:
        """Build a file submission from a MIME type such as ``image/png``.

        Unknown MIME families are routed as text with the filename as content.
        """
        family = media_type.split("/", 1)[0].lower()
        if family in MEDIA_TYPES:
            return cls.from_file(family, name, size, media_type=media_type, data=data)  # type: ignore[arg-type]
        return cls.from_text(name)


# === CANONICAL RESULT ===


class CounterContent(BaseModel):
    """Generated material countering a misleading claim."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    fact_check: str = Field(alias="factCheck")
    visual_content: str = Field(alias="visualContent")
    short_form: str = Field(alias="shortForm")


class AnalysisResult(BaseModel):
    """Canonical verdict returned to callers and persisted in both cache tiers."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    status: ResultStatus
    confidence: int = Field(ge=0, le=100)
    issues: list[str] = Field(default_factory=list, max_length=3)
    counter_content: CounterContent = Field(alias="counterContent")

    def to_wire(self) -> dict[str, Any]:
        """JSON-ready dict with camelCase keys."""
        return self.model_dump(mode="json", by_alias=True)


# === ORACLE INTERMEDIATE ===


class OracleClaim(BaseModel):
    """Single factual claim assessed by the oracle."""

    model_config = ConfigDict(populate_by_name=True)

    text: str = ""
    score: int | None = None
    status: str = ""
    explanation: str = ""
    sources: list[str] = Field(default_factory=list)


class OracleAnalysis(BaseModel):
    """Normalized oracle response. Every field has a defined default."""

    model_config = ConfigDict(populate_by_name=True)

    truth_score: int = Field(default=50, ge=0, le=100, alias="truthScore")
    status: str = "unverified"
    claims: list[OracleClaim] = Field(default_factory=list)
    overall_explanation: str = Field(default="Analysis completed", alias="overallExplanation")
    detailed_analysis: str = Field(default="", alias="detailedAnalysis")
    warnings: list[str] = Field(default_factory=list)
    metadata: dict[str, Any] = Field(default_factory=dict)

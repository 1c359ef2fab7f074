# src/api/models.py — v2
"""API-level models: AnalyzeRequest and ErrorResponse."""

from __future__ import annotations

import base64
import binascii

from pydantic import BaseModel, ConfigDict, Field

from truthgen.core.errors import ValidationError
from truthgen.core.models import CONTENT_TYPES, MEDIA_TYPES, Submission


class AnalyzeRequest(BaseModel):
    """Body of ``POST /analyze-content``.

    ``fileData`` is a base64 string or ``data:`` URL. ``fileSize`` supplies
    the byte size used for fingerprinting when no bytes are uploaded.
    """

    model_config = ConfigDict(populate_by_name=True)

    type: str | None = None
    content: str | None = None
    file_data: str | None = Field(default=None, alias="fileData")
    file_size: int | None = Field(default=None, ge=0, alias="fileSize")

    @property
    def has_known_type(self) -> bool:
        return self.type in CONTENT_TYPES

    def to_submission(self) -> Submission:
        """Build the domain Submission.

        Raises:
            ValidationError: On an unknown type or undecodable file data.
        """
        if not self.has_known_type:
            raise ValidationError(f"Invalid analysis type: {self.type!r}")

        content = self.content or ""
        if self.type not in MEDIA_TYPES:
            return Submission(type=self.type, content=content)  # type: ignore[arg-type]

        if not content.strip():
            # No filename → no file reference; rejected by the orchestrator
            return Submission(type=self.type)  # type: ignore[arg-type]

        data, media_type = decode_file_data(self.file_data) if self.file_data else (None, "")
        size = self.file_size if self.file_size is not None else len(data or b"")
        return Submission.from_file(
            self.type,  # type: ignore[arg-type]
            name=content,
            size=size,
            media_type=media_type,
            data=data if self.type == "image" else None,
        )


class ErrorResponse(BaseModel):
    """Body returned with a non-success status code."""

    model_config = ConfigDict(populate_by_name=True)

    error: str
    truth_score: int = Field(default=0, alias="truthScore")
    status: str = "error"


def decode_file_data(file_data: str) -> tuple[bytes, str]:
    """Decode a base64 payload or data URL into ``(bytes, media_type)``.

    Raises:
        ValidationError: If the payload is not valid base64.
    """
    media_type = ""
    payload = file_data.strip()
    if payload.startswith("data:"):
        header, _, payload = payload.partition(",")
        media_type = header[len("data:"):].split(";", 1)[0]
    try:
        return base64.b64decode(payload, validate=True), media_type
    except (binascii.Error, ValueError) as e:
        raise ValidationError(f"fileData is not valid base64: {e}") from e

# src/analysis/media_analyzer.py — v1
"""Forensic analyzers for image, video and audio submissions.

Only images forward file bytes (as a vision input). Video and audio are
described to the oracle by filename.
"""

from __future__ import annotations

from truthgen.analysis.base_analyzer import BaseAnalyzer
from truthgen.core.models import ContentType, Submission
from truthgen.llm.models import ImageInput, Message


def _filename(submission: Submission) -> str:
    return submission.file.name if submission.file is not None else ""


class ImageAnalyzer(BaseAnalyzer):
    """Detects AI generation and manipulation in still images."""

    @property
    def content_type(self) -> ContentType:
        return "image"

    def build_messages(self, submission: Submission) -> list[Message]:
        name = _filename(submission)
        if self._has_bytes(submission):
            text = f"Analyze this image for authenticity and manipulation. Filename: {name}"
        else:
            text = f"Analyze image metadata and context for: {name}"
        return [Message(role="user", content=text)]

    def build_images(self, submission: Submission) -> list[ImageInput]:
        if not self._has_bytes(submission):
            return []
        file = submission.file
        assert file is not None and file.data is not None
        return [
            ImageInput(
                data=file.data,
                media_type=file.media_type or "image/jpeg",
                source_id=file.name,
            )
        ]

    @staticmethod
    def _has_bytes(submission: Submission) -> bool:
        return submission.file is not None and bool(submission.file.data)


class VideoAnalyzer(BaseAnalyzer):
    """Deepfake and edit detection for video files."""

    @property
    def content_type(self) -> ContentType:
        return "video"

    def build_messages(self, submission: Submission) -> list[Message]:
        return [
            Message(
                role="user",
                content=(
                    "Analyze this video file for deepfakes and manipulation: "
                    f"{_filename(submission)}"
                ),
            )
        ]


class AudioAnalyzer(BaseAnalyzer):
    """Voice cloning and splice detection for audio files."""

    @property
    def content_type(self) -> ContentType:
        return "audio"

    def build_messages(self, submission: Submission) -> list[Message]:
        return [
            Message(
                role="user",
                content=(
                    "Analyze this audio file for voice cloning and manipulation: "
                    f"{_filename(submission)}"
                ),
            )
        ]

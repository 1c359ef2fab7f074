# src/cache/fingerprint.py — v4
"""Content fingerprinting for cache lookup.

The fingerprint is a SHA-256 hex digest of the canonical content string:
the raw text or URL, or ``name + size`` for files. File bytes are never
hashed, so two files with the same name and byte size share a fingerprint.
"""

from __future__ import annotations

import hashlib

from truthgen.core.models import Submission

def compute_fingerprint(submission: Submission) -> str:
    """Compute the cache key for a submission.

    Args:
        submission: A submission that already passed payload validation.

    Returns:
        64-character lowercase hexadecimal SHA-256 digest.
    """
    return sha256_hex(canonical_content(submission))


def canonical_content(submission: Submission) -> str:
    """Return the string that identifies a submission."""
    if submission.is_media:
        if submission.file is None:
            raise ValueError(f"{submission.type} submission has no file")
        return f"{submission.file.name}{submission.file.size}"
    return submission.content


def sha256_hex(text: str) -> str:
    """SHA-256 on UTF-8 encoded text."""
    return hashlib.sha256(text.encode("utf-8")).hexdigest()

# src/core/errors.py — v1
"""Error taxonomy for the analysis pipeline.

Only cache-related errors are recovered locally. Validation and oracle
errors always reach the caller as a terminal failure.
"""

from __future__ import annotations


class TruthGenError(Exception):
    """Base class for all truthgen errors."""


class ValidationError(TruthGenError):
    """Submission is empty, malformed or of an unknown type.

    Raised synchronously before any cache or network activity.
    """


class CacheUnavailable(TruthGenError):
    """A cache tier could not be reached. Downgraded to a cache miss."""

    def __init__(self, tier: str, reason: str) -> None:
        self.tier = tier
        self.reason = reason
        super().__init__(f"{tier} cache unavailable: {reason}")


class PersistenceFailure(TruthGenError):
    """Writing a result to a cache tier failed after a successful analysis."""

    def __init__(self, tier: str, fingerprint: str, reason: str) -> None:
        self.tier = tier
        self.fingerprint = fingerprint
        self.reason = reason
        super().__init__(f"Failed to persist {fingerprint[:12]} to {tier} cache: {reason}")


class OracleError(TruthGenError):
    """The external analysis oracle failed (HTTP error, transport, bad JSON)."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message)


class AnalysisFailed(TruthGenError):
    """Terminal pipeline failure, carrying the message shown to the user."""

    USER_MESSAGE = "Could not analyze content. Please try again."

    def __init__(self, cause: Exception, user_message: str = USER_MESSAGE) -> None:
        self.cause = cause
        self.user_message = user_message
        super().__init__(f"Analysis failed: {cause}")

# src/analysis/result_mapper.py — v1
"""Map a normalized oracle analysis onto the canonical AnalysisResult."""

from __future__ import annotations

from truthgen.analysis.counter_content import select_counter_content
from truthgen.core.models import AnalysisResult, OracleAnalysis, ResultStatus

MAX_ISSUES = 3

_FALSE_STATUSES = frozenset({"false", "manipulated"})


def map_status(oracle_status: str) -> ResultStatus:
    """Collapse the oracle's status vocabulary into verified/suspicious/false."""
    status = oracle_status.strip().lower()
    if status == "verified":
        return "verified"
    if status in _FALSE_STATUSES:
        return "false"
    return "suspicious"


def extract_issues(analysis: OracleAnalysis) -> list[str]:
    """Warnings when present, otherwise claim explanations (or claim text)."""
    if analysis.warnings:
        issues = list(analysis.warnings)
    else:
        issues = [claim.explanation or claim.text for claim in analysis.claims]
    return [issue for issue in issues if issue][:MAX_ISSUES]


def to_result(analysis: OracleAnalysis, submitted_text: str) -> AnalysisResult:
    """Build the canonical result for a fresh analysis.

    Args:
        analysis: Normalized oracle output.
        submitted_text: Text used for counter-content topic matching.
    """
    return AnalysisResult(
        status=map_status(analysis.status),
        confidence=analysis.truth_score,
        issues=extract_issues(analysis),
        counter_content=select_counter_content(submitted_text),
    )

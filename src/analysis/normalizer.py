# src/analysis/normalizer.py — v1
"""Oracle response parsing and normalization.

The oracle is asked for strict JSON but its field names and types drift
between modalities. ``normalize`` maps whatever comes back onto
OracleAnalysis, filling absent fields with their defaults:

    truthScore          → 50 (also read from ``score``)
    status              → "unverified"
    claims              → []
    overallExplanation  → "Analysis completed" (also read from ``explanation``)
    detailedAnalysis    → "" (also read from ``details``)
    warnings            → []
    metadata            → {}

Downstream code only ever sees OracleAnalysis, never the raw dict.
"""

from __future__ import annotations

import json
import logging
import math
from typing import Any

from truthgen.core.errors import OracleError
from truthgen.core.models import OracleAnalysis, OracleClaim

logger = logging.getLogger(__name__)

DEFAULT_TRUTH_SCORE = 50
DEFAULT_STATUS = "unverified"
DEFAULT_EXPLANATION = "Analysis completed"


def parse_oracle_json(content: str) -> dict[str, Any]:
    """Parse the oracle's JSON string, handling markdown fences.

    Raises:
        OracleError: If the content is not a JSON object.
    """
    text = content.strip()
    if text.startswith("```"):
        lines = text.split("\n")
        lines = [l for l in lines if not l.strip().startswith("```")]
        text = "\n".join(lines)
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise OracleError(f"Malformed oracle response: {e}") from e
    if not isinstance(data, dict):
        raise OracleError(
            f"Malformed oracle response: expected JSON object, got {type(data).__name__}"
        )
    return data


def normalize(raw: dict[str, Any]) -> OracleAnalysis:
    """Map a loosely-shaped oracle object onto OracleAnalysis."""
    return OracleAnalysis(
        truth_score=_coerce_score(_first_present(raw, "truthScore", "score"), DEFAULT_TRUTH_SCORE),
        status=_as_text(raw.get("status")) or DEFAULT_STATUS,
        claims=_coerce_claims(raw.get("claims")),
        overall_explanation=(
            _as_text(_first_present(raw, "overallExplanation", "explanation"))
            or DEFAULT_EXPLANATION
        ),
        detailed_analysis=_as_text(_first_present(raw, "detailedAnalysis", "details")),
        warnings=_coerce_strings(raw.get("warnings")),
        metadata=raw.get("metadata") if isinstance(raw.get("metadata"), dict) else {},
    )


def _first_present(raw: dict[str, Any], *keys: str) -> Any:
    """Value of the first key that is present and not null."""
    for key in keys:
        value = raw.get(key)
        if value is not None and value != "":
            return value
    return None


def _coerce_score(value: Any, default: int | None) -> int | None:
    """Coerce a score to an int in [0, 100]; unusable values give ``default``."""
    if value is None or isinstance(value, bool):
        return default
    try:
        number = float(value)
    except (TypeError, ValueError):
        logger.warning("Non-numeric oracle score %r, using %s", value, default)
        return default
    if math.isnan(number):
        return default
    if math.isinf(number):
        return 100 if number > 0 else 0
    return max(0, min(100, int(round(number))))


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value.strip()
    if isinstance(value, (dict, list)):
        return json.dumps(value, ensure_ascii=False)
    return str(value)


def _coerce_strings(value: Any) -> list[str]:
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, list):
        return []
    return [text for text in (_as_text(v) for v in value) if text]


def _coerce_claims(value: Any) -> list[OracleClaim]:
    if not isinstance(value, list):
        return []
    claims: list[OracleClaim] = []
    for item in value:
        if isinstance(item, str):
            if item.strip():
                claims.append(OracleClaim(text=item.strip()))
            continue
        if not isinstance(item, dict):
            continue
        claims.append(
            OracleClaim(
                text=_as_text(item.get("text") or item.get("claim")),
                score=_coerce_score(item.get("score"), None),
                status=_as_text(item.get("status")),
                explanation=_as_text(item.get("explanation")),
                sources=_coerce_strings(item.get("sources")),
            )
        )
    return claims

"""
Scalar coercion helpers for untyped upstream JSON.

Every function here is total: it accepts any value and returns a usable
primitive (or ``None`` for the optional variants) instead of raising.
"""

from __future__ import annotations

import math
import re
from typing import Any, List, Optional

from underwriting_desk.integrations.contracts.underwriting import UnderwritingDecision

_DECISIONS = {
    "approve": UnderwritingDecision.APPROVE,
    "refer": UnderwritingDecision.REFER,
    "decline": UnderwritingDecision.DECLINE,
}

# Plain ASCII decimal notation only: no digit separators, no non-ASCII digits.
_DECIMAL_RE = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?", re.ASCII)


def _is_finite_number(value: Any) -> bool:
    # bool is an int subclass but never a JSON number
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    try:
        return math.isfinite(value)
    except OverflowError:
        # int beyond float range
        return False


def _parse_float(value: Any) -> Optional[float]:
    if _is_finite_number(value):
        return float(value)
    if isinstance(value, str) and _DECIMAL_RE.fullmatch(value.strip()):
        parsed = float(value.strip())
        if math.isfinite(parsed):
            return parsed
    return None


def coerce_number(value: Any, fallback: float) -> float:
    parsed = _parse_float(value)
    return fallback if parsed is None else parsed


def coerce_optional_number(value: Any) -> Optional[float]:
    """Like :func:`coerce_number` but returns ``None`` for unknown values."""
    return _parse_float(value)


def coerce_integer(value: Any, fallback: int) -> int:
    """Coerce to an integer, truncating toward zero."""
    parsed = _parse_float(value)
    if parsed is None:
        return fallback
    return int(parsed)


def normalize_text(value: Any) -> str:
    if isinstance(value, str):
        return value.strip()
    if _is_finite_number(value):
        if isinstance(value, float) and value.is_integer():
            return str(int(value))
        return str(value)
    return ""


def normalize_decision(value: Any) -> UnderwritingDecision:
    """
    Map a raw decision value onto the known decisions.

    Anything unrecognized (including missing values) becomes ``Refer`` so a
    malformed response is never treated as an approval.
    """
    return _DECISIONS.get(normalize_text(value).lower(), UnderwritingDecision.REFER)


def normalize_reasons(value: Any) -> Optional[List[str]]:
    if not value:
        return None

    if isinstance(value, (list, tuple)):
        cleaned = [text for text in (normalize_text(item) for item in value) if text]
        return cleaned or None

    single = normalize_text(value)
    return [single] if single else None

"""
Normalization of underwriting payloads into canonical records.

The upstream service is not consistent about its wire format: the same field
can arrive as ``UserID``, ``user_id`` or ``userId``; an evaluation may be a
flat object or a ``Request``/``Response`` envelope; a history can be a bare
list, an ``evaluations``/``items`` wrapper or a single object.

Nothing in this module raises on bad input. Unusable payloads come back as
``None`` (single records) or ``[]`` (history), and DTI/LTV are left as
``None`` when upstream omits them.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Mapping, Optional, Sequence, Tuple, TypeVar

from underwriting_desk.integrations.contracts.underwriting import (
    UnderwritingDecision,
    UnderwritingHistory,
    UnderwritingRecord,
    UnderwritingRequest,
)
from underwriting_desk.utils.coercion import (
    coerce_integer,
    coerce_number,
    coerce_optional_number,
    normalize_decision,
    normalize_reasons,
    normalize_text,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Candidate wire keys per canonical field, in priority order.
USER_ID_KEYS: Tuple[str, ...] = ("UserID", "user_id", "userId")
REQUEST_FIELD_KEYS: Dict[str, Tuple[str, ...]] = {
    "monthly_income": ("MonthlyIncome", "monthly_income"),
    "monthly_debts": ("MonthlyDebts", "monthly_debts"),
    "loan_amount": ("LoanAmount", "loan_amount"),
    "property_value": ("PropertyValue", "property_value"),
    "credit_score": ("CreditScore", "credit_score"),
    "occupancy_type": ("OccupancyType", "occupancy_type"),
}
DECISION_KEYS = ("Decision", "decision")
DTI_KEYS = ("DTI", "dti")
LTV_KEYS = ("LTV", "ltv")
REASONS_KEYS = ("Reasons", "reasons")
HISTORY_COLLECTION_KEYS = ("evaluations", "items")


def normalize_request_like(
    raw: Any,
    fallback: Optional[UnderwritingRequest] = None,
    user_id_override: Any = None,
) -> Optional[UnderwritingRequest]:
    """
    Reconcile a request-shaped payload against an optional baseline.

    Args:
        raw: Request-shaped mapping using any of the known key spellings.
        fallback: Previously known request used to fill gaps.
        user_id_override: Identifier found outside ``raw`` (e.g. on an envelope).

    Returns:
        The canonical request, the unchanged baseline when no identifier can be
        resolved, or ``None`` when there is neither.
    """
    source: Mapping[str, Any] = raw if isinstance(raw, Mapping) else {}

    user_id_candidates = [user_id_override, *(source.get(key) for key in USER_ID_KEYS)]
    if fallback is not None:
        user_id_candidates.append(fallback.user_id)
    user_id = _first_text(user_id_candidates)

    if not user_id:
        return fallback

    def resolve(field: str, coerce: Callable[[Any], Optional[T]], default: T) -> T:
        for key in REQUEST_FIELD_KEYS[field]:
            value = coerce(source.get(key))
            if value is not None:
                return value
        if fallback is not None:
            return getattr(fallback, field)
        return default

    return UnderwritingRequest(
        user_id=user_id,
        monthly_income=resolve("monthly_income", coerce_optional_number, 0.0),
        monthly_debts=resolve("monthly_debts", coerce_optional_number, 0.0),
        loan_amount=resolve("loan_amount", coerce_optional_number, 0.0),
        property_value=resolve("property_value", coerce_optional_number, 0.0),
        credit_score=resolve("credit_score", _optional_integer, 0),
        occupancy_type=resolve("occupancy_type", lambda value: normalize_text(value) or None, ""),
    )


def normalize_underwriting_record(
    raw: Any,
    fallback_request: Optional[UnderwritingRequest] = None,
) -> Optional[UnderwritingRecord]:
    """Normalize one evaluation (flat or ``Request``/``Response`` envelope)."""
    if not isinstance(raw, Mapping):
        if fallback_request is None:
            return None
        logger.debug("Unparseable underwriting payload of type %s; referring fallback request", type(raw).__name__)
        return UnderwritingRecord.from_request(fallback_request, decision=UnderwritingDecision.REFER)

    request_source = raw.get("Request") if isinstance(raw.get("Request"), Mapping) else raw
    response_source = raw.get("Response") if isinstance(raw.get("Response"), Mapping) else raw

    request = normalize_request_like(
        request_source,
        fallback_request,
        user_id_override=raw.get("UserID"),
    )
    if request is None:
        return None

    decision = normalize_decision(_first_present(response_source, DECISION_KEYS))
    dti = _first_coerced(response_source, DTI_KEYS, coerce_optional_number)
    ltv = _first_coerced(response_source, LTV_KEYS, coerce_optional_number)
    reasons = normalize_reasons(_first_present(response_source, REASONS_KEYS))
    evaluated_at = _first_date_candidate(
        response_source.get("EvaluatedAt"),
        response_source.get("evaluated_at"),
        raw.get("EvaluatedAt"),
        raw.get("CreatedAt"),
        response_source.get("CreatedAt"),
        response_source.get("created_at"),
    )

    return UnderwritingRecord.from_request(
        request,
        decision=decision,
        dti=dti,
        ltv=ltv,
        evaluated_at=evaluated_at,
        reasons=reasons,
    )


def normalize_history_payload(payload: Any) -> UnderwritingHistory:
    """Normalize a history payload of unknown shape into an ordered list."""
    if isinstance(payload, list):
        return _normalize_sequence(payload)

    if isinstance(payload, Mapping):
        for key in HISTORY_COLLECTION_KEYS:
            if isinstance(payload.get(key), list):
                return _normalize_sequence(payload[key])

        single = normalize_underwriting_record(payload)
        return [single] if single is not None else []

    return []


def _normalize_sequence(items: Sequence[Any]) -> UnderwritingHistory:
    records: UnderwritingHistory = []
    for index, item in enumerate(items):
        record = normalize_underwriting_record(item)
        if record is None:
            logger.debug("Dropping unidentifiable history entry at index %d", index)
            continue
        records.append(record)
    return records


def _optional_integer(value: Any) -> Optional[int]:
    if coerce_optional_number(value) is None:
        return None
    return coerce_integer(value, 0)


def _first_text(values) -> str:
    for value in values:
        text = normalize_text(value)
        if text:
            return text
    return ""


def _first_present(data: Mapping[str, Any], keys: Sequence[str]) -> Any:
    for key in keys:
        value = data.get(key)
        if value is not None:
            return value
    return None


def _first_coerced(data: Mapping[str, Any], keys: Sequence[str], coerce: Callable[[Any], Optional[T]]) -> Optional[T]:
    for key in keys:
        value = coerce(data.get(key))
        if value is not None:
            return value
    return None


def _first_date_candidate(*values: Any) -> Optional[str]:
    for value in values:
        if isinstance(value, str) and value.strip():
            return value.strip()
    return None

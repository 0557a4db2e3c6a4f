"""
Build the decision card and history rows shown to the borrower.

DTI/LTV are derived here, not during normalization: a record keeps whatever
the service sent, and missing ratios are computed from the borrower's figures
only for display.
"""
from datetime import datetime
from typing import Dict, List, Optional

from underwriting_desk.integrations.contracts.underwriting import UnderwritingHistory, UnderwritingRecord

MISSING = "—"

DECISION_TONES = {
    "Approve": "success",
    "Refer": "warning",
    "Decline": "danger",
}

DECISION_DESCRIPTORS = {
    "Approve": "Eligible for approval based on the provided data.",
    "Refer": "Requires manual review before approval.",
    "Decline": "Does not meet the underwriting criteria.",
}


def compute_ratio(numerator: Optional[float], denominator: Optional[float]) -> Optional[float]:
    if numerator is None or not denominator:
        return None
    return numerator / denominator


def effective_dti(record: UnderwritingRecord) -> Optional[float]:
    if record.dti is not None:
        return record.dti
    return compute_ratio(record.monthly_debts, record.monthly_income)


def effective_ltv(record: UnderwritingRecord) -> Optional[float]:
    if record.ltv is not None:
        return record.ltv
    return compute_ratio(record.loan_amount, record.property_value)


def format_currency(value: Optional[float]) -> str:
    if value is None:
        return MISSING
    sign = "-" if value < 0 else ""
    return f"{sign}${abs(value):,.2f}"


def format_percentage(value: Optional[float]) -> str:
    if value is None:
        return MISSING
    return f"{value * 100:.2f}%"


def format_timestamp(value: Optional[str]) -> str:
    """Render an ISO-ish timestamp in local time; unparseable text is shown as-is."""
    if not value:
        return MISSING
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return value
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone()
    return parsed.strftime("%Y-%m-%d %H:%M:%S")


def build_result_card(record: UnderwritingRecord) -> Dict:
    decision = record.decision.value
    card = {
        "decision": decision,
        "tone": DECISION_TONES.get(decision, "info"),
        "descriptor": DECISION_DESCRIPTORS.get(decision, "Review the evaluation details below."),
        "fields": [
            {"label": "Debt-to-Income", "value": format_percentage(effective_dti(record))},
            {"label": "Loan-to-Value", "value": format_percentage(effective_ltv(record))},
            {"label": "Credit Score", "value": str(record.credit_score)},
            {"label": "Occupancy", "value": record.occupancy_type},
            {"label": "Loan Amount", "value": format_currency(record.loan_amount)},
            {"label": "Property Value", "value": format_currency(record.property_value)},
        ],
        "reasons": list(record.reasons or []),
    }
    if record.evaluated_at:
        card["fields"].append({"label": "Evaluated At", "value": format_timestamp(record.evaluated_at)})
    return card


def build_history_rows(history: UnderwritingHistory) -> List[Dict[str, str]]:
    return [
        {
            "date": format_timestamp(record.evaluated_at),
            "decision": record.decision.value,
            "dti": format_percentage(effective_dti(record)),
            "ltv": format_percentage(effective_ltv(record)),
            "fico": str(record.credit_score),
            "loan": format_currency(record.loan_amount),
            "property": format_currency(record.property_value),
            "occupancy": record.occupancy_type,
        }
        for record in history
    ]

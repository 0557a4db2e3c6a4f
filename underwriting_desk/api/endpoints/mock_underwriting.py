"""
Mock underwriting decision service for local development and tests.

Speaks the same inconsistent wire format as the real service: PascalCase
``Request``/``Response`` envelopes, ratios that are sometimes omitted,
decisions in mixed casing and an ``evaluations`` history wrapper.
Decisions are scripted per borrower, not computed. Do not deploy.
"""

from datetime import datetime, timezone
from itertools import cycle
from typing import Any, Dict, Iterator, List

from fastapi import APIRouter, FastAPI

router = APIRouter(prefix="/api/v1", tags=["Mock Underwriting"])

SCRIPTED_DECISIONS = ("approve", "REFER", "Decline")
SCRIPTED_REASONS = {
    "approve": [],
    "REFER": ["Manual review required", ""],
    "Decline": "Debt-to-income above policy limit",
}

_history: Dict[str, List[Dict[str, Any]]] = {}
_decisions: Dict[str, Iterator[str]] = {}


def reset_mock_state() -> None:
    _history.clear()
    _decisions.clear()


def _pick(payload: Dict[str, Any], *keys: str, default: Any = None) -> Any:
    for key in keys:
        if payload.get(key) is not None:
            return payload[key]
    return default


@router.get("/ping")
async def ping():
    return {"status": "ok"}


@router.post("/underwriting")
async def evaluate(payload: Dict[str, Any]):
    """
    Example payload:
    {
        "user_id": "user-123",
        "monthly_income": 8000,
        "monthly_debts": 2000,
        "loan_amount": 300000,
        "property_value": 400000,
        "credit_score": 720,
        "occupancy_type": "primary_residence"
    }
    """
    user_id = str(_pick(payload, "user_id", "UserID", "userId", default=""))
    decisions = _decisions.setdefault(user_id, cycle(SCRIPTED_DECISIONS))
    decision = next(decisions)

    income = float(_pick(payload, "monthly_income", default=0) or 0)
    debts = float(_pick(payload, "monthly_debts", default=0) or 0)
    loan = float(_pick(payload, "loan_amount", default=0) or 0)
    value = float(_pick(payload, "property_value", default=0) or 0)

    response: Dict[str, Any] = {
        "Decision": decision,
        "Reasons": SCRIPTED_REASONS[decision],
        "EvaluatedAt": datetime.now(timezone.utc).isoformat(),
    }
    # every second evaluation omits the ratios, like the real service
    if len(_history.get(user_id, [])) % 2 == 0:
        response["DTI"] = round(debts / income, 4) if income else None
        response["LTV"] = str(round(loan / value, 4)) if value else None

    evaluation = {
        "UserID": user_id,
        "Request": {
            "MonthlyIncome": income,
            "MonthlyDebts": debts,
            "LoanAmount": loan,
            "PropertyValue": value,
            "CreditScore": _pick(payload, "credit_score", "CreditScore", default=0),
            "OccupancyType": _pick(payload, "occupancy_type", "OccupancyType", default=""),
        },
        "Response": response,
        "CreatedAt": response["EvaluatedAt"],
    }
    _history.setdefault(user_id, []).insert(0, evaluation)
    return evaluation


@router.get("/underwriting/history/{user_id}")
async def history(user_id: str):
    return {"evaluations": _history.get(user_id, [])}


def create_mock_app() -> FastAPI:
    app = FastAPI(title="Mock Underwriting API", version="1.0.0")
    app.include_router(router)
    return app

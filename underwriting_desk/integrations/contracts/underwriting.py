"""
Underwriting contracts.

Defines the canonical request/record structures used everywhere past the
transport boundary:
- the borrower/loan request submitted for evaluation
- the evaluated record returned by the service (and listed in history)
- the raw form values a borrower types in

Upstream payloads never reach the rest of the application as dicts; they are
normalized into these models by ``integrations/policy/response_wrappers.py``.
"""

from __future__ import annotations

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class UnderwritingDecision(str, Enum):
    APPROVE = "Approve"
    REFER = "Refer"
    DECLINE = "Decline"


class OccupancyType(str, Enum):
    PRIMARY_RESIDENCE = "primary_residence"
    SECOND_HOME = "second_home"
    INVESTMENT_PROPERTY = "investment_property"


class UnderwritingRequest(BaseModel):
    """Canonical borrower/loan data. ``user_id`` is always non-empty."""

    model_config = ConfigDict(frozen=True)

    user_id: str = Field(min_length=1)
    monthly_income: float = 0.0
    monthly_debts: float = 0.0
    loan_amount: float = 0.0
    property_value: float = 0.0
    credit_score: int = 0
    occupancy_type: str = ""


class UnderwritingRecord(UnderwritingRequest):
    """An evaluated request: the decision plus whatever ratios upstream supplied."""

    decision: UnderwritingDecision = UnderwritingDecision.REFER
    dti: Optional[float] = None
    ltv: Optional[float] = None
    evaluated_at: Optional[str] = None
    reasons: Optional[List[str]] = None

    @property
    def request(self) -> UnderwritingRequest:
        return UnderwritingRequest(**_request_fields(self))

    @classmethod
    def from_request(cls, request: UnderwritingRequest, **updates) -> "UnderwritingRecord":
        data = _request_fields(request)
        data.update(updates)
        return cls(**data)


def _request_fields(model: UnderwritingRequest) -> dict:
    return {name: getattr(model, name) for name in UnderwritingRequest.model_fields}


UnderwritingHistory = List[UnderwritingRecord]


class UnderwritingFormValues(BaseModel):
    """Raw text exactly as entered in the evaluation form."""

    user_id: str = ""
    monthly_income: str = ""
    monthly_debts: str = ""
    loan_amount: str = ""
    property_value: str = ""
    credit_score: str = ""
    occupancy_type: str = ""

"""
Contracts (data models).

This folder defines the canonical shapes for the underwriting integration:
- the borrower/loan request submitted for evaluation
- the evaluated record (single response or history entry)
- raw form values entered by the borrower

Why this exists:
- The upstream service does not keep a stable wire schema
- Callers rely on these models, never on ad-hoc dicts
"""

from .underwriting import (
    OccupancyType,
    UnderwritingDecision,
    UnderwritingFormValues,
    UnderwritingHistory,
    UnderwritingRecord,
    UnderwritingRequest,
)

__all__ = [
    "OccupancyType",
    "UnderwritingDecision",
    "UnderwritingFormValues",
    "UnderwritingHistory",
    "UnderwritingRecord",
    "UnderwritingRequest",
]

"""
Integrations layer.
This package contains all code used to communicate with the underwriting
decision service:
- contracts: canonical request/record models
- clients/real_http: the httpx transport for the service endpoints
- policy: payload normalization and the application-facing service

Key rule:
- Raw response bodies MUST go through policy/response_wrappers.py before they
  reach any other part of the application.
"""

from .contracts.underwriting import (
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

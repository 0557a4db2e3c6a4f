"""Validation for the underwriting evaluation form.

The form submits every field as text. ``to_underwriting_request`` turns those
values into a canonical ``UnderwritingRequest``.

On validation failure, raise `FormValidationError` so the caller can show the
top-level message inline and highlight `field_errors`.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Union

from underwriting_desk.integrations.contracts.underwriting import (
    OccupancyType,
    UnderwritingFormValues,
    UnderwritingRequest,
)

OCCUPANCY_OPTIONS = [
    {"value": OccupancyType.PRIMARY_RESIDENCE.value, "label": "Primary Residence"},
    {"value": OccupancyType.SECOND_HOME.value, "label": "Second Home"},
    {"value": OccupancyType.INVESTMENT_PROPERTY.value, "label": "Investment Property"},
]

NUMERIC_FIELDS_MESSAGE = "Please fill in all numeric fields with valid values."
USER_ID_MESSAGE = "User ID is required."
OCCUPANCY_MESSAGE = "Please select an occupancy type."

# Leading numeric prefix, the way a browser number input parses "12.5abc".
_DECIMAL_PREFIX_RE = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)", re.ASCII)
_INTEGER_PREFIX_RE = re.compile(r"^\s*([+-]?\d+)", re.ASCII)


@dataclass
class FormValidationError(Exception):
    """Exception raised for form validation failures.

    Attributes:
        field_errors: mapping of field name -> human-readable error message.
        message: top-level message shown next to the form.
    """

    field_errors: Dict[str, str]
    message: str = "Validation failed"

    def __str__(self) -> str:  # pragma: no cover
        return self.message


def _as_str(v: Any) -> str:
    return "" if v is None else str(v)


def parse_decimal(value: Any) -> Optional[float]:
    match = _DECIMAL_PREFIX_RE.match(_as_str(value))
    if not match:
        return None
    parsed = float(match.group(1))
    # "1e999" overflows to inf
    return parsed if math.isfinite(parsed) else None


def parse_integer(value: Any) -> Optional[int]:
    match = _INTEGER_PREFIX_RE.match(_as_str(value))
    return int(match.group(1)) if match else None


def to_underwriting_request(values: Union[UnderwritingFormValues, Mapping[str, Any]]) -> UnderwritingRequest:
    if not isinstance(values, UnderwritingFormValues):
        values = UnderwritingFormValues(**{k: _as_str(v) for k, v in values.items() if k in UnderwritingFormValues.model_fields})

    numbers: Dict[str, Optional[float]] = {
        field: parse_decimal(getattr(values, field))
        for field in ("monthly_income", "monthly_debts", "loan_amount", "property_value")
    }
    credit_score = parse_integer(values.credit_score)

    invalid = [field for field, number in numbers.items() if number is None]
    if credit_score is None:
        invalid.append("credit_score")
    if invalid:
        raise FormValidationError({field: f"{field} must be a number" for field in invalid}, NUMERIC_FIELDS_MESSAGE)

    user_id = values.user_id.strip()
    if not user_id:
        raise FormValidationError({"user_id": "user_id is required"}, USER_ID_MESSAGE)

    occupancy_type = values.occupancy_type.strip()
    if not occupancy_type:
        raise FormValidationError({"occupancy_type": "occupancy_type is required"}, OCCUPANCY_MESSAGE)

    return UnderwritingRequest(
        user_id=user_id,
        credit_score=credit_score,
        occupancy_type=occupancy_type,
        **numbers,
    )

"""Tests for evaluation form validation."""

import pytest

from underwriting_desk.integrations.contracts.underwriting import UnderwritingFormValues, UnderwritingRequest
from underwriting_desk.validation import (
    NUMERIC_FIELDS_MESSAGE,
    OCCUPANCY_MESSAGE,
    OCCUPANCY_OPTIONS,
    USER_ID_MESSAGE,
    FormValidationError,
    parse_decimal,
    parse_integer,
    to_underwriting_request,
)


def test_valid_form_becomes_canonical_request(valid_form):
    request = to_underwriting_request({**valid_form, "user_id": "  user-123  "})

    assert request == UnderwritingRequest(
        user_id="user-123",
        monthly_income=8000.0,
        monthly_debts=2000.0,
        loan_amount=300000.0,
        property_value=400000.0,
        credit_score=720,
        occupancy_type="primary_residence",
    )


def test_form_values_model_is_accepted(valid_form):
    request = to_underwriting_request(UnderwritingFormValues(**valid_form))
    assert request.user_id == "user-123"


def test_numeric_fields_are_parsed_leniently(valid_form):
    request = to_underwriting_request({**valid_form, "monthly_debts": "2100.50 USD", "credit_score": "720.9"})
    assert request.monthly_debts == 2100.5
    assert request.credit_score == 720


@pytest.mark.parametrize("field", ["monthly_income", "monthly_debts", "loan_amount", "property_value", "credit_score"])
@pytest.mark.parametrize("bad_value", ["", "abc", "  "])
def test_invalid_numeric_field(valid_form, field, bad_value):
    with pytest.raises(FormValidationError) as excinfo:
        to_underwriting_request({**valid_form, field: bad_value})
    assert excinfo.value.message == NUMERIC_FIELDS_MESSAGE
    assert field in excinfo.value.field_errors


def test_numeric_errors_are_reported_before_missing_user_id():
    with pytest.raises(FormValidationError) as excinfo:
        to_underwriting_request({"user_id": "", "monthly_income": "x"})
    assert excinfo.value.message == NUMERIC_FIELDS_MESSAGE
    assert set(excinfo.value.field_errors) == {"monthly_income", "monthly_debts", "loan_amount", "property_value", "credit_score"}


def test_missing_user_id(valid_form):
    with pytest.raises(FormValidationError) as excinfo:
        to_underwriting_request({**valid_form, "user_id": "   "})
    assert excinfo.value.message == USER_ID_MESSAGE
    assert excinfo.value.field_errors == {"user_id": "user_id is required"}


def test_missing_occupancy(valid_form):
    with pytest.raises(FormValidationError) as excinfo:
        to_underwriting_request({**valid_form, "occupancy_type": ""})
    assert excinfo.value.message == OCCUPANCY_MESSAGE


def test_parse_helpers():
    assert parse_decimal(".5") == 0.5
    assert parse_decimal("-12e2") == -1200.0
    assert parse_decimal("abc12") is None
    assert parse_decimal(None) is None
    assert parse_integer("  650xyz") == 650
    assert parse_integer("x650") is None
    assert parse_decimal("1e999") is None
    assert parse_decimal("12_5") == 12.0


def test_occupancy_options_cover_the_known_types():
    assert [option["value"] for option in OCCUPANCY_OPTIONS] == ["primary_residence", "second_home", "investment_property"]


def test_overflowing_amount_is_a_numeric_error(valid_form):
    with pytest.raises(FormValidationError) as excinfo:
        to_underwriting_request({**valid_form, "monthly_income": "1e999"})
    assert excinfo.value.message == NUMERIC_FIELDS_MESSAGE
    assert excinfo.value.field_errors == {"monthly_income": "monthly_income must be a number"}

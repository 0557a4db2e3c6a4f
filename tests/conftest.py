"""Pytest fixtures for the underwriting client tests."""

import httpx
import pytest

from underwriting_desk.api.endpoints.mock_underwriting import create_mock_app, reset_mock_state
from underwriting_desk.integrations.clients.real_http.underwriting import UnderwritingHttpClient
from underwriting_desk.integrations.contracts.underwriting import UnderwritingRequest

BASE_URL = "http://underwriting.test"


@pytest.fixture
def canonical_request():
    return UnderwritingRequest(
        user_id="user-123",
        monthly_income=8000.0,
        monthly_debts=2000.0,
        loan_amount=300000.0,
        property_value=400000.0,
        credit_score=720,
        occupancy_type="primary_residence",
    )


@pytest.fixture
def valid_form():
    return {
        "user_id": "user-123",
        "monthly_income": "8000",
        "monthly_debts": "2000",
        "loan_amount": "300000",
        "property_value": "400000",
        "credit_score": "720",
        "occupancy_type": "primary_residence",
    }


@pytest.fixture
def mock_app():
    """Fresh in-memory mock underwriting service."""
    reset_mock_state()
    yield create_mock_app()
    reset_mock_state()


@pytest.fixture
def make_client():
    """Build a client whose requests are answered by ``handler``."""

    def _make(handler) -> UnderwritingHttpClient:
        return UnderwritingHttpClient(BASE_URL + "/", transport=httpx.MockTransport(handler))

    return _make


@pytest.fixture
def mock_app_client(mock_app):
    return UnderwritingHttpClient(BASE_URL, transport=httpx.ASGITransport(app=mock_app))

"""Tests for the real HTTP underwriting client (httpx MockTransport)."""

import json

import httpx
import pytest

from underwriting_desk.integrations.clients.real_http.underwriting import UnderwritingTransportError
from underwriting_desk.integrations.contracts.underwriting import UnderwritingDecision, UnderwritingRecord


@pytest.mark.asyncio
async def test_submit_posts_snake_case_request_and_normalizes_envelope(make_client, canonical_request):
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["method"] = request.method
        seen["url"] = str(request.url)
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={
            "UserID": "user-123",
            "Request": {"MonthlyIncome": 8000, "LoanAmount": "300000"},
            "Response": {"Decision": "APPROVE", "DTI": 0.25, "Reasons": ["Strong credit"], "EvaluatedAt": "2024-05-01T10:00:00Z"},
        })

    async with make_client(handler) as client:
        record = await client.submit_underwriting(canonical_request)

    assert seen["method"] == "POST"
    assert seen["url"] == "http://underwriting.test/api/v1/underwriting"
    assert seen["body"] == canonical_request.model_dump(mode="json")
    assert isinstance(record, UnderwritingRecord)
    assert record.decision is UnderwritingDecision.APPROVE
    assert record.dti == 0.25
    assert record.ltv is None
    assert record.reasons == ["Strong credit"]
    # fields absent from the response come from the submitted request
    assert record.property_value == canonical_request.property_value
    assert record.credit_score == canonical_request.credit_score


@pytest.mark.asyncio
async def test_submit_with_no_content_refers_submitted_request(make_client, canonical_request):
    async with make_client(lambda request: httpx.Response(204)) as client:
        record = await client.submit_underwriting(canonical_request)

    assert record.decision is UnderwritingDecision.REFER
    assert record.request == canonical_request


@pytest.mark.asyncio
async def test_submit_with_non_json_success_body_refers(make_client, canonical_request):
    async with make_client(lambda request: httpx.Response(200, text="<html>ok</html>")) as client:
        record = await client.submit_underwriting(canonical_request)

    assert record.decision is UnderwritingDecision.REFER
    assert record.user_id == canonical_request.user_id


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "status, body, expected",
    [
        (422, {"message": "Credit score is required"}, "Credit score is required"),
        (500, {"error": "boom"}, "boom"),
        (400, "plain message", "plain message"),
        (502, {"message": 5, "detail": "nope"}, "Request failed with status 502"),
        (503, None, "Request failed with status 503"),
    ],
)
async def test_error_status_raises_transport_error_with_message(make_client, canonical_request, status, body, expected):
    def handler(request):
        if body is None:
            return httpx.Response(status)
        return httpx.Response(status, json=body)

    async with make_client(handler) as client:
        with pytest.raises(UnderwritingTransportError) as excinfo:
            await client.submit_underwriting(canonical_request)

    assert excinfo.value.message == expected
    assert excinfo.value.status_code == status


@pytest.mark.asyncio
async def test_network_failure_raises_transport_error(make_client):
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    async with make_client(handler) as client:
        with pytest.raises(UnderwritingTransportError) as excinfo:
            await client.fetch_history("user-123")

    assert excinfo.value.status_code is None
    assert isinstance(excinfo.value.__cause__, httpx.ConnectError)


@pytest.mark.asyncio
async def test_fetch_history_encodes_user_id_and_normalizes_payload(make_client):
    seen = {}

    def handler(request):
        seen["path"] = request.url.raw_path
        return httpx.Response(200, json={"items": [
            {"user_id": "a b/c", "decision": "decline"},
            {"decision": "approve"},
            {"UserID": "a b/c", "Response": {"Decision": "approve"}},
        ]})

    async with make_client(handler) as client:
        history = await client.fetch_history("a b/c")

    assert seen["path"] == b"/api/v1/underwriting/history/a%20b%2Fc"
    assert [r.decision for r in history] == [UnderwritingDecision.DECLINE, UnderwritingDecision.APPROVE]


@pytest.mark.asyncio
async def test_fetch_history_with_unexpected_body_is_empty(make_client):
    async with make_client(lambda request: httpx.Response(200, json="nothing here")) as client:
        assert await client.fetch_history("u1") == []


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "response, healthy",
    [
        (httpx.Response(200, json={}), True),
        (httpx.Response(200, json={"status": "ok"}), True),
        (httpx.Response(200, text="not json"), False),
        (httpx.Response(503, json={"status": "down"}), False),
    ],
)
async def test_ping(make_client, response, healthy):
    seen = {}

    def handler(request):
        seen["path"] = request.url.path
        return response

    async with make_client(handler) as client:
        assert await client.ping() is healthy
    assert seen["path"] == "/api/v1/ping"


@pytest.mark.asyncio
async def test_ping_network_failure_is_unhealthy(make_client):
    def handler(request):
        raise httpx.ConnectTimeout("timed out", request=request)

    async with make_client(handler) as client:
        assert await client.ping() is False

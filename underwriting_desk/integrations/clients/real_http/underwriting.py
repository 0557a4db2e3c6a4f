"""
Real Underwriting HTTP Client.

Purpose:
- Sends a canonical underwriting request to the decision service
- Fetches a borrower's evaluation history and the service liveness signal

Implementation notes:
- Uses httpx for async requests against a fixed base URL
- Every response body is passed through policy/response_wrappers.py, so
  callers only ever see canonical records
- Non-2xx responses and network failures raise UnderwritingTransportError
  with a human-readable message; nothing is retried

Important:
- Keep this client as the ONLY place where underwriting HTTP calls are made.
"""

from __future__ import annotations

import logging
from typing import Any, Optional
from urllib.parse import quote

import httpx

from underwriting_desk.integrations.contracts.underwriting import (
    UnderwritingDecision,
    UnderwritingHistory,
    UnderwritingRecord,
    UnderwritingRequest,
)
from underwriting_desk.integrations.policy.response_wrappers import (
    normalize_history_payload,
    normalize_underwriting_record,
)

logger = logging.getLogger(__name__)

SUBMIT_PATH = "/api/v1/underwriting"
HISTORY_PATH = "/api/v1/underwriting/history/{user_id}"
PING_PATH = "/api/v1/ping"


class UnderwritingTransportError(Exception):
    def __init__(self, message: str, *, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class UnderwritingHttpClient:
    def __init__(
        self,
        base_url: str = "",
        timeout_seconds: float = 15.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.base_url = (base_url or "").rstrip("/")
        self.timeout_seconds = timeout_seconds
        self._client = httpx.AsyncClient(timeout=timeout_seconds, transport=transport)

    async def __aenter__(self) -> "UnderwritingHttpClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def submit_underwriting(self, request: UnderwritingRequest) -> UnderwritingRecord:
        """
        Submit a request for evaluation.

        An unparseable success body degrades to the submitted request with a
        ``Refer`` decision, never to an approval.
        """
        payload = await self._request_json("POST", SUBMIT_PATH, json=request.model_dump(mode="json"))
        record = normalize_underwriting_record(payload, request)
        if record is not None:
            return record
        return UnderwritingRecord.from_request(request, decision=UnderwritingDecision.REFER)

    async def fetch_history(self, user_id: str) -> UnderwritingHistory:
        path = HISTORY_PATH.format(user_id=quote(user_id, safe=""))
        payload = await self._request_json("GET", path)
        history = normalize_history_payload(payload)
        logger.info("Loaded %d underwriting evaluations for user %s", len(history), user_id)
        return history

    async def ping(self) -> bool:
        url = self._url(PING_PATH)
        try:
            response = await self._client.get(url)
            if not response.is_success:
                logger.warning("Underwriting ping returned status %s", response.status_code)
                return False
            response.json()
            return True
        except (httpx.HTTPError, ValueError) as e:
            logger.warning("Underwriting ping failed: %s", e)
            return False

    async def _request_json(self, method: str, path: str, **kwargs: Any) -> Any:
        url = self._url(path)
        logger.info("%s %s", method, url)
        if "json" in kwargs:
            logger.debug("Request payload: %s", kwargs["json"])
        try:
            response = await self._client.request(method, url, **kwargs)
        except httpx.RequestError as e:
            logger.error("Request error connecting to underwriting API: %s", e)
            raise UnderwritingTransportError(f"Unable to reach the underwriting service: {e}") from e

        if not response.is_success:
            message = extract_error_message(response)
            logger.error("HTTP error from underwriting API: %s %s", response.status_code, message)
            raise UnderwritingTransportError(message, status_code=response.status_code)

        logger.info("Received underwriting response: status=%s", response.status_code)
        if response.status_code == 204 or not response.content:
            return {}
        try:
            return response.json()
        except ValueError:
            logger.warning("Underwriting API returned a non-JSON body for %s %s", method, url)
            return None

    def _url(self, path: str) -> str:
        return f"{self.base_url}{path}"


def extract_error_message(response: httpx.Response) -> str:
    try:
        data = response.json()
    except ValueError:
        data = None

    if isinstance(data, str):
        return data
    if isinstance(data, dict):
        for key in ("message", "error"):
            if isinstance(data.get(key), str):
                return data[key]
    return f"Request failed with status {response.status_code}"

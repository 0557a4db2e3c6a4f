"""
Underwriting Service

Coordinates the borrower-facing actions against the decision service:
- health check (liveness badge)
- submitting the evaluation form
- refreshing a borrower's evaluation history

Includes:
- Config management (ClientConfig / env vars)
- Inline error messages instead of raised exceptions
- One in-flight call per action; aclose() cancels whatever is still running
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, Mapping, Optional, TypeVar, Union

from underwriting_desk.error_handler import ErrorHandler
from underwriting_desk.integrations.clients.real_http.underwriting import UnderwritingHttpClient
from underwriting_desk.integrations.contracts.underwriting import (
    UnderwritingFormValues,
    UnderwritingHistory,
    UnderwritingRecord,
)
from underwriting_desk.utils.config_loader import ClientConfig, load_client_config
from underwriting_desk.validation import FormValidationError, to_underwriting_request

logger = logging.getLogger(__name__)

T = TypeVar("T")

ACTIONS = ("health", "submit", "history")


@dataclass
class HistoryResult:
    records: UnderwritingHistory = field(default_factory=list)
    error: Optional[str] = None


@dataclass
class SubmissionResult:
    record: Optional[UnderwritingRecord] = None
    history: UnderwritingHistory = field(default_factory=list)
    error: Optional[str] = None
    field_errors: Dict[str, str] = field(default_factory=dict)
    history_error: Optional[str] = None


class UnderwritingService:
    def __init__(
        self,
        client: Optional[UnderwritingHttpClient] = None,
        config: Optional[ClientConfig] = None,
        error_handler: Optional[ErrorHandler] = None,
    ):
        if client is None:
            config = config or load_client_config()
            if not config.api_base_url:
                logger.warning("Underwriting API base URL is not set.")
            client = UnderwritingHttpClient(config.normalized_base_url, timeout_seconds=config.timeout_seconds)
        self.client = client
        self.error_handler = error_handler or ErrorHandler()
        self._locks = {action: asyncio.Lock() for action in ACTIONS}
        self._inflight: Dict[str, asyncio.Future] = {}

    async def __aenter__(self) -> "UnderwritingService":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def check_health(self) -> bool:
        try:
            return await self._run_exclusive("health", self.client.ping)
        except asyncio.CancelledError:
            raise
        except Exception as e:
            self.error_handler.handle_exception(e, action="health")
            return False

    async def submit_form(self, values: Union[UnderwritingFormValues, Mapping[str, Any]]) -> SubmissionResult:
        """
        Validate the form, submit it and reload the borrower's history.
        """
        try:
            request = to_underwriting_request(values)
        except FormValidationError as e:
            logger.info("Underwriting form rejected: %s", e.message)
            return SubmissionResult(error=e.message, field_errors=dict(e.field_errors))

        try:
            record = await self._run_exclusive("submit", lambda: self.client.submit_underwriting(request))
        except asyncio.CancelledError:
            raise
        except Exception as e:
            handled = self.error_handler.handle_exception(e, action="submit", context={"user_id": request.user_id})
            return SubmissionResult(error=handled["message"])

        logger.info("Underwriting decision for %s: %s", request.user_id, record.decision.value)
        history = await self.refresh_history(request.user_id)
        return SubmissionResult(record=record, history=history.records, history_error=history.error)

    async def refresh_history(self, user_id: Optional[str]) -> HistoryResult:
        target_user_id = (user_id or "").strip()
        if not target_user_id:
            return HistoryResult()

        try:
            records = await self._run_exclusive("history", lambda: self.client.fetch_history(target_user_id))
        except asyncio.CancelledError:
            raise
        except Exception as e:
            handled = self.error_handler.handle_exception(e, action="history", context={"user_id": target_user_id})
            return HistoryResult(error=handled["message"])
        return HistoryResult(records=records)

    async def aclose(self) -> None:
        for action, task in list(self._inflight.items()):
            if not task.done():
                logger.info("Cancelling in-flight underwriting %s call", action)
                task.cancel()
        await self.client.aclose()

    async def _run_exclusive(self, action: str, call: Callable[[], Awaitable[T]]) -> T:
        async with self._locks[action]:
            task = asyncio.ensure_future(call())
            self._inflight[action] = task
            try:
                return await task
            finally:
                self._inflight.pop(action, None)

"""Error handling helpers turning failures into inline user messages."""
from typing import Any, Dict, Optional
import logging

from underwriting_desk.integrations.clients.real_http.underwriting import UnderwritingTransportError

logger = logging.getLogger(__name__)

DEFAULT_MESSAGES = {
    "submit": "Submission failed. Please try again.",
    "history": "Unable to load history",
    "health": "Underwriting service is unreachable",
}


class ErrorHandler:
    def handle_exception(self, exc: Exception, action: str = "submit", context: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        if isinstance(exc, UnderwritingTransportError):
            logger.warning("Underwriting %s failed: %s (status=%s)", action, exc.message, exc.status_code)
            message = exc.message
        else:
            logger.error("Unhandled exception during underwriting %s: %s", action, exc, exc_info=True)
            message = DEFAULT_MESSAGES.get(action, DEFAULT_MESSAGES["submit"])
        return {
            "message": message,
            "action": action,
            "metadata": {"error": str(exc), "status_code": getattr(exc, "status_code", None), "context": context or {}},
        }

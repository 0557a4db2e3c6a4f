"""
Real HTTP integration clients.

These clients communicate with the underwriting decision service over HTTP:
- POST /api/v1/underwriting (submit an evaluation)
- GET /api/v1/underwriting/history/{user_id}
- GET /api/v1/ping

Important:
- Must return data shaped according to integrations/contracts/*
"""

from .underwriting import UnderwritingHttpClient, UnderwritingTransportError, extract_error_message

__all__ = ["UnderwritingHttpClient", "UnderwritingTransportError", "extract_error_message"]

"""
Underwriting Desk - borrower-facing client for the loan underwriting service.

Package layout:
- integrations/contracts     canonical request/record models
- integrations/policy        payload normalization and the application service
- integrations/clients       httpx transport for the decision service
- utils                      scalar coercion and configuration
- result_cards.py            decision card / history rows for display
- cli.py                     command line entry point
"""

__version__ = "0.1.0"

"""
Utility modules for the underwriting client
"""
from .config_loader import ClientConfig, load_client_config
from .coercion import (
    coerce_integer,
    coerce_number,
    coerce_optional_number,
    normalize_decision,
    normalize_reasons,
    normalize_text,
)

__all__ = [
    'ClientConfig',
    'load_client_config',
    'coerce_integer',
    'coerce_number',
    'coerce_optional_number',
    'normalize_decision',
    'normalize_reasons',
    'normalize_text',
]

"""
Configuration loader for the underwriting client
"""

import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path(__file__).parent.parent.parent / "config" / "client_config.yml"

# environment variable -> ClientConfig field
ENV_OVERRIDES = {
    "UNDERWRITING_API_BASE_URL": "api_base_url",
    "UNDERWRITING_API_TIMEOUT_SECONDS": "timeout_seconds",
    "UNDERWRITING_LOG_LEVEL": "log_level",
}


class ClientConfig(BaseModel):
    """Underwriting service connection settings"""

    api_base_url: str = ""
    timeout_seconds: float = Field(default=15.0, gt=0, le=300)
    log_level: str = "INFO"

    @property
    def normalized_base_url(self) -> str:
        return self.api_base_url.rstrip("/")


def load_client_config(config_path: Optional[Path] = None) -> ClientConfig:
    """
    Load and validate client configuration

    Values come from an optional YAML file, then environment variables
    (including a ``.env`` file) override them.

    Args:
        config_path: Path to config file. Defaults to config/client_config.yml

    Returns:
        Validated ClientConfig object

    Raises:
        FileNotFoundError: If an explicit config file doesn't exist
        ValidationError: If config doesn't match schema
    """
    load_dotenv()

    data: Dict[str, Any] = {}
    if config_path is not None and not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    path = config_path or DEFAULT_CONFIG_PATH
    if path.exists():
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}

    for env_name, field_name in ENV_OVERRIDES.items():
        value = os.getenv(env_name)
        if value:
            data[field_name] = value

    try:
        config = ClientConfig(**data)
        logger.info("Loaded client config (base_url=%r)", config.normalized_base_url)
        return config
    except ValidationError as e:
        logger.error(f"Config validation failed: {e}")
        raise

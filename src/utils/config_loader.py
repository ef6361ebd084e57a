"""
Configuration loader for CRM lead delivery
"""

import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, ValidationError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path(__file__).parent.parent.parent / "config" / "crm_config.yml"

# environment variable -> settings field
_ENV_OVERRIDES = {
    "CRM_ENDPOINT": "endpoint",
    "CRM_API_KEY": "api_key",
    "CRM_TIMEOUT_SECONDS": "timeout_seconds",
    "CRM_RETRY_ATTEMPTS": "retry_attempts",
    "CRM_RETRY_DELAY_SECONDS": "retry_delay_seconds",
    "CRM_USER_AGENT": "user_agent",
}


class CRMSettings(BaseModel):
    """CRM delivery configuration, read-only once built"""

    model_config = ConfigDict(frozen=True)

    endpoint: str = "http://localhost:8000/api/leads"
    api_key: Optional[str] = None
    timeout_seconds: float = Field(default=10.0, gt=0)
    retry_attempts: int = Field(default=3, ge=1, le=10)
    retry_delay_seconds: float = Field(default=1.0, ge=0.0)
    user_agent: str = "HealthcareAmericanQuoteTool/1.0"


def _env_overrides() -> Dict[str, Any]:
    overrides: Dict[str, Any] = {}
    for env_name, field_name in _ENV_OVERRIDES.items():
        value = os.getenv(env_name)
        if value is not None and value.strip() != "":
            overrides[field_name] = value.strip()
    return overrides


def load_crm_config(config_path: Optional[Path] = None) -> CRMSettings:
    """
    Load and validate CRM configuration

    Values are layered: defaults, then the YAML file (if present), then
    environment variables (including those from a .env file).

    Args:
        config_path: Path to config file. Defaults to config/crm_config.yml

    Returns:
        Validated CRMSettings object

    Raises:
        ValidationError: If the merged config doesn't match schema
    """
    load_dotenv()

    if config_path is None:
        config_path = DEFAULT_CONFIG_PATH

    config_data: Dict[str, Any] = {}
    if config_path.exists():
        with open(config_path, "r", encoding="utf-8") as f:
            loaded = yaml.safe_load(f) or {}
        config_data.update(loaded.get("crm", loaded))
    else:
        logger.debug(f"CRM config file not found, using defaults: {config_path}")

    config_data.update(_env_overrides())

    try:
        config = CRMSettings(**config_data)
        logger.info(
            "Loaded CRM config: endpoint=%s timeout=%ss attempts=%s api_key_set=%s",
            config.endpoint,
            config.timeout_seconds,
            config.retry_attempts,
            bool(config.api_key),
        )
        return config
    except ValidationError as e:
        logger.error(f"CRM config validation failed: {e}")
        raise


def use_real_integrations() -> bool:
    """True when leads should go to the real CRM rather than the in-memory mock."""
    mode = os.getenv("INTEGRATIONS_MODE", "").strip().lower()
    if mode in {"real", "live"}:
        return True
    if mode in {"mock", "test"}:
        return False
    return bool(os.getenv("CRM_ENDPOINT"))

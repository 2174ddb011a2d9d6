"""
Configuration loader for the Direct Plus gateway
"""

import os
import yaml
from pathlib import Path
from typing import Optional
from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError
import logging

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path(__file__).parent.parent.parent / "config" / "gateway_config.yml"


class EndpointConfig(BaseModel):
    """Primary and backup endpoints for both platforms"""

    test_url: str = "https://preprod-ppps.paybox.com/PPPS.php"
    test_backup_url: str = "https://preprod-ppps.paybox.com/PPPS.php"
    live_url: str = "https://ppps.paybox.com/PPPS.php"
    live_backup_url: str = "https://ppps1.paybox.com/PPPS.php"

    def primary(self, test: bool) -> str:
        return self.test_url if test else self.live_url

    def backup(self, test: bool) -> str:
        return self.test_backup_url if test else self.live_backup_url


class GatewayConfig(BaseModel):
    """Complete gateway configuration"""

    login: str = ""
    password: str = ""
    test: bool = True
    default_currency: str = Field(default="EUR", min_length=3, max_length=3)
    timeout_seconds: float = Field(default=20.0, gt=0.0, le=300.0)
    endpoints: EndpointConfig = Field(default_factory=lambda: EndpointConfig())


def load_gateway_config(config_path: Optional[Path] = None) -> GatewayConfig:
    """
    Load and validate gateway configuration from YAML file

    Args:
        config_path: Path to config file. Defaults to config/gateway_config.yml

    Returns:
        Validated GatewayConfig object

    Raises:
        FileNotFoundError: If config file doesn't exist
        ValidationError: If config doesn't match schema
    """
    if config_path is None:
        config_path = DEFAULT_CONFIG_PATH

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, "r", encoding="utf-8") as f:
        config_data = yaml.safe_load(f) or {}

    try:
        config = GatewayConfig(**config_data.get("gateway", config_data))
        logger.info(f"Successfully loaded config from {config_path}")
        return config
    except ValidationError as e:
        logger.error(f"Config validation failed: {e}")
        raise


def load_gateway_config_from_env(base: Optional[GatewayConfig] = None) -> GatewayConfig:
    """
    Overlay DIRECTPLUS_* environment variables (and a .env file) on a base config.

    DIRECTPLUS_LOGIN, DIRECTPLUS_PASSWORD, DIRECTPLUS_TEST, DIRECTPLUS_CURRENCY,
    DIRECTPLUS_TIMEOUT_SECONDS
    """
    load_dotenv()
    base = base or GatewayConfig()
    data = base.model_dump()

    if os.getenv("DIRECTPLUS_LOGIN"):
        data["login"] = os.getenv("DIRECTPLUS_LOGIN")
    if os.getenv("DIRECTPLUS_PASSWORD"):
        data["password"] = os.getenv("DIRECTPLUS_PASSWORD")
    if os.getenv("DIRECTPLUS_TEST"):
        data["test"] = os.getenv("DIRECTPLUS_TEST", "").lower() in ("1", "true", "yes")
    if os.getenv("DIRECTPLUS_CURRENCY"):
        data["default_currency"] = os.getenv("DIRECTPLUS_CURRENCY", "").upper()
    if os.getenv("DIRECTPLUS_TIMEOUT_SECONDS"):
        data["timeout_seconds"] = os.getenv("DIRECTPLUS_TIMEOUT_SECONDS")

    try:
        return GatewayConfig(**data)
    except ValidationError as e:
        logger.error(f"Config validation failed: {e}")
        raise

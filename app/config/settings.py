"""
Application settings.

Loads configuration from environment variables using pydantic-settings.
Invalid configuration is fatal: see load_settings().
"""

import sys
from typing import Literal
from urllib.parse import urlparse

from loguru import logger
from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from web3 import Web3

from app.config.constants import (
    DEFAULT_API_PORT,
    DEFAULT_BALANCE_API_URL,
    DEFAULT_GAS_LIMIT,
    DEFAULT_POLLING_INTERVAL_MS,
    MIN_POLLING_INTERVAL_MS,
)
from app.utils.validation import validate_eth_address


LogLevel = Literal["error", "warn", "info", "debug"]


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Sweep destination
    master_address: str

    # Chain RPC
    rpc_url: str

    # HTTP API
    host: str = "0.0.0.0"
    port: int = Field(
        default=DEFAULT_API_PORT, gt=0, le=65535, description="HTTP API port"
    )

    # Polling
    polling_interval: int = Field(
        default=DEFAULT_POLLING_INTERVAL_MS,
        ge=MIN_POLLING_INTERVAL_MS,
        description="Balance polling interval in milliseconds",
    )

    # Sweep transaction
    gas_limit: int = Field(
        default=DEFAULT_GAS_LIMIT,
        gt=0,
        description="Fixed gas budget for sweep transactions",
    )
    confirmation_timeout: float = Field(
        default=120.0,
        gt=0,
        description="Seconds to wait for a sweep receipt",
    )

    # Balance lookup provider (Etherscan compatible)
    etherscan_api_url: str = DEFAULT_BALANCE_API_URL
    etherscan_api_key: str = Field(..., min_length=1)
    balance_request_timeout: float = Field(
        default=10.0,
        gt=0,
        description="Seconds before a balance lookup is abandoned",
    )

    # Logging
    log_level: LogLevel = "info"
    log_file: str | None = None

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("master_address")
    @classmethod
    def validate_master_address(cls, v: str) -> str:
        """Validate Ethereum address format."""
        is_valid, error = validate_eth_address(v)
        if not is_valid:
            raise ValueError(f"Must be a valid Ethereum address: {error}")
        return Web3.to_checksum_address(v.strip())

    @field_validator("rpc_url", "etherscan_api_url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        """Validate endpoint URL."""
        parsed = urlparse(v.strip())
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ValueError("Must be a valid URL")
        return v.strip()

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v: object) -> object:
        if isinstance(v, str):
            return v.strip().lower()
        return v

    @property
    def polling_interval_seconds(self) -> float:
        return self.polling_interval / 1000


def load_settings(**overrides: object) -> Settings:
    """
    Load settings or terminate the process.

    Every validation issue is logged on its own line before exiting
    with status 1.
    """
    try:
        return Settings(**overrides)
    except ValidationError as e:
        logger.error("Invalid environment variables:")
        for issue in e.errors():
            location = ".".join(str(part) for part in issue["loc"]).upper()
            logger.error(f"  {location or 'SETTINGS'}: {issue['msg']}")
        sys.exit(1)

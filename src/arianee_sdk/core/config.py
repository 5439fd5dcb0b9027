"""
Configuration management for the Arianee SDK.

Handles loading configuration from environment variables and validation.
Network bindings (RPC endpoints, contract addresses) are not configured
here: they are resolved per protocol slug.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, fields
from typing import Any

from arianee_sdk.core.exceptions import ConfigurationError
from arianee_sdk.core.types import TransactionStrategy

DEFAULT_PROTOCOL_DETAILS_URL = "https://cert.arianee.org/contractAddresses"
DEFAULT_PERMIT721_ADDRESS = "0x9d6ac3167db03d0b0aee75f5ed90c8b780f93585"


def _get_env_var(name: str, default: str | None = None, required: bool = False) -> str | None:
    """Get environment variable with optional default."""
    value = os.environ.get(name, default)
    if required and not value:
        raise ConfigurationError(f"Required environment variable {name} is not set")
    return value


def _to_float(name: str, value: Any) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        raise ConfigurationError(f"{name} must be a number", {"value": value}) from None


def _to_int(name: str, value: Any) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ConfigurationError(f"{name} must be an integer", {"value": value}) from None


@dataclass(frozen=True)
class Config:
    """SDK configuration."""

    protocol_details_url: str = DEFAULT_PROTOCOL_DETAILS_URL
    # HTTP fetch layer
    http_timeout: float = 30.0  # seconds
    fetch_retries: int = 3
    fetch_cache_ttl: float = 300.0  # seconds
    # Chain writes
    transaction_strategy: TransactionStrategy = TransactionStrategy.WAIT_TRANSACTION_RECEIPT
    receipt_poll_interval: float = 2.0
    permit721_address: str = DEFAULT_PERMIT721_ADDRESS
    # Access tokens
    access_token_validity_ms: int = 5 * 60 * 1000
    # Storage & logging
    storage_backend: str = "memory"
    redis_url: str | None = None
    # None leaves the arianee_sdk logger untouched
    log_level: str | None = None

    def __post_init__(self) -> None:
        if self.http_timeout <= 0:
            raise ConfigurationError("http_timeout must be positive")
        if self.fetch_retries < 0:
            raise ConfigurationError("fetch_retries must not be negative")
        if self.fetch_cache_ttl < 0:
            raise ConfigurationError("fetch_cache_ttl must not be negative")
        if self.receipt_poll_interval <= 0:
            raise ConfigurationError("receipt_poll_interval must be positive")
        if not isinstance(self.transaction_strategy, TransactionStrategy):
            raise ConfigurationError(
                "transaction_strategy must be a TransactionStrategy",
                {"value": self.transaction_strategy},
            )
        if self.access_token_validity_ms <= 0:
            raise ConfigurationError("access_token_validity_ms must be positive")
        if self.log_level is not None and not isinstance(logging.getLevelName(self.log_level.upper()), int):
            raise ConfigurationError("log_level must be a logging level name", {"value": self.log_level})

    @classmethod
    def from_env(cls, **overrides: Any) -> Config:
        """Load configuration from environment variables."""
        strategy = overrides.get("transaction_strategy") or _get_env_var(
            "ARIANEE_TRANSACTION_STRATEGY", default=TransactionStrategy.WAIT_TRANSACTION_RECEIPT.value
        )
        if isinstance(strategy, str):
            try:
                strategy = TransactionStrategy.from_string(strategy)
            except ValueError as e:
                raise ConfigurationError(str(e)) from None

        return cls(
            protocol_details_url=overrides.get("protocol_details_url")
            or _get_env_var("ARIANEE_PROTOCOL_DETAILS_URL", default=DEFAULT_PROTOCOL_DETAILS_URL),
            http_timeout=_to_float(
                "http_timeout",
                overrides.get("http_timeout") or _get_env_var("ARIANEE_HTTP_TIMEOUT", default="30"),
            ),
            fetch_retries=_to_int(
                "fetch_retries",
                overrides.get("fetch_retries", _get_env_var("ARIANEE_FETCH_RETRIES", default="3")),
            ),
            fetch_cache_ttl=_to_float(
                "fetch_cache_ttl",
                overrides.get("fetch_cache_ttl", _get_env_var("ARIANEE_FETCH_CACHE_TTL", default="300")),
            ),
            transaction_strategy=strategy,  # type: ignore
            receipt_poll_interval=_to_float(
                "receipt_poll_interval",
                overrides.get("receipt_poll_interval")
                or _get_env_var("ARIANEE_RECEIPT_POLL_INTERVAL", default="2"),
            ),
            permit721_address=overrides.get("permit721_address")
            or _get_env_var("ARIANEE_PERMIT721_ADDRESS", default=DEFAULT_PERMIT721_ADDRESS),
            access_token_validity_ms=_to_int(
                "access_token_validity_ms",
                overrides.get(
                    "access_token_validity_ms",
                    _get_env_var("ARIANEE_ACCESS_TOKEN_VALIDITY_MS", default=str(cls.access_token_validity_ms)),
                ),
            ),
            storage_backend=overrides.get("storage_backend")
            or _get_env_var("ARIANEE_STORAGE_BACKEND", default="memory"),
            redis_url=overrides.get("redis_url") or _get_env_var("ARIANEE_REDIS_URL"),
            log_level=overrides.get("log_level") or _get_env_var("ARIANEE_LOG_LEVEL"),
        )  # type: ignore

    def with_updates(self, **updates: Any) -> Config:
        """Create a new Config with updated values."""
        current = {f.name: getattr(self, f.name) for f in fields(self)}
        current.update(updates)
        return Config(**current)

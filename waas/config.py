"""Configuration loader: reads an optional YAML file, interpolates env vars, validates."""
from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

from .errors import AuthenticationError

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.tangany.com/v1"

# ---------------------------------------------------------------------------
# Frozen config dataclasses
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class EthereumConfig:
    network: str = ""
    tx_speed: str = ""
    tx_confirmations: str = ""
    gas_price: str = ""
    gas: int | None = None
    nonce: int | None = None
    use_gas_tank: bool = False


@dataclass(frozen=True)
class BitcoinConfig:
    network: str = ""
    tx_confirmations: str = ""
    tx_speed: str = ""
    max_fee_rate: float | None = None


@dataclass(frozen=True)
class LimiterConfig:
    enabled: bool = True
    max_concurrent: int = 5


@dataclass(frozen=True)
class PollingConfig:
    timeout: float = 20.0
    interval: float = 0.4
    btc_interval: float = 0.8


@dataclass(frozen=True)
class ClientConfig:
    client_id: str = ""
    client_secret: str = ""
    subscription: str = ""
    vault_url: str = ""
    base_url: str = DEFAULT_BASE_URL
    request_timeout: int = 30
    ethereum: EthereumConfig = field(default_factory=EthereumConfig)
    bitcoin: BitcoinConfig = field(default_factory=BitcoinConfig)
    limiter: LimiterConfig = field(default_factory=LimiterConfig)
    polling: PollingConfig = field(default_factory=PollingConfig)


# ---------------------------------------------------------------------------
# Env interpolation
# ---------------------------------------------------------------------------

_ENV_VAR_RE = re.compile(r"\$\{([^}]+)}")


def _interpolate_env(value: Any) -> Any:
    """Recursively replace ${VAR} references with environment variable values."""
    if isinstance(value, str):
        return _ENV_VAR_RE.sub(lambda m: os.environ.get(m.group(1), ""), value)
    if isinstance(value, dict):
        return {k: _interpolate_env(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_interpolate_env(item) for item in value]
    return value


def _optional_int(value: Any) -> int | None:
    if value is None or value == "":
        return None
    return int(value)


def _optional_float(value: Any) -> float | None:
    if value is None or value == "":
        return None
    return float(value)


# ---------------------------------------------------------------------------
# YAML → dataclass builders
# ---------------------------------------------------------------------------


def _build_ethereum(raw: dict[str, Any]) -> EthereumConfig:
    return EthereumConfig(
        network=str(raw.get("network", "")),
        tx_speed=str(raw.get("tx_speed", "")),
        tx_confirmations=str(raw.get("tx_confirmations", "")),
        gas_price=str(raw.get("gas_price", "")),
        gas=_optional_int(raw.get("gas")),
        nonce=_optional_int(raw.get("nonce")),
        use_gas_tank=bool(raw.get("use_gas_tank", False)),
    )


def _build_bitcoin(raw: dict[str, Any]) -> BitcoinConfig:
    return BitcoinConfig(
        network=str(raw.get("network", "")),
        tx_confirmations=str(raw.get("tx_confirmations", "")),
        tx_speed=str(raw.get("tx_speed", "")),
        max_fee_rate=_optional_float(raw.get("max_fee_rate")),
    )


def _build_limiter(raw: dict[str, Any]) -> LimiterConfig:
    return LimiterConfig(
        enabled=bool(raw.get("enabled", True)),
        max_concurrent=int(raw.get("max_concurrent", 5)),
    )


def _build_polling(raw: dict[str, Any]) -> PollingConfig:
    return PollingConfig(
        timeout=float(raw.get("timeout", 20.0)),
        interval=float(raw.get("interval", 0.4)),
        btc_interval=float(raw.get("btc_interval", 0.8)),
    )


def _build_client(raw: dict[str, Any]) -> ClientConfig:
    return ClientConfig(
        client_id=raw.get("client_id") or os.environ.get("TANGANY_CLIENT_ID", ""),
        client_secret=raw.get("client_secret")
        or os.environ.get("TANGANY_CLIENT_SECRET", ""),
        subscription=raw.get("subscription")
        or os.environ.get("TANGANY_SUBSCRIPTION", ""),
        vault_url=raw.get("vault_url") or os.environ.get("TANGANY_VAULT_URL", ""),
        base_url=raw.get("base_url") or DEFAULT_BASE_URL,
        request_timeout=int(raw.get("request_timeout", 30)),
        ethereum=_build_ethereum(raw.get("ethereum") or {}),
        bitcoin=_build_bitcoin(raw.get("bitcoin") or {}),
        limiter=_build_limiter(raw.get("limiter") or {}),
        polling=_build_polling(raw.get("polling") or {}),
    )


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def load_config(config_path: str | Path | None = None) -> ClientConfig:
    """Load and validate client configuration from YAML + .env.

    Args:
        config_path: Optional path to a YAML file. Without it the credentials
            are read from the ``TANGANY_*`` environment variables only.
    """
    load_dotenv()

    raw: dict[str, Any] = {}
    if config_path is not None:
        config_path = Path(config_path)
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")
        with open(config_path) as f:
            raw = yaml.safe_load(f) or {}
        raw = _interpolate_env(raw)

    cfg = _build_client(raw)
    validate_config(cfg)
    if config_path is not None:
        logger.info("Configuration loaded from %s", config_path)
    else:
        logger.info("Configuration loaded from environment")
    return cfg


def validate_config(cfg: ClientConfig) -> None:
    """Raise on invalid configuration."""
    if not cfg.client_id:
        raise AuthenticationError("Missing variable 'clientId'")
    if not cfg.client_secret:
        raise AuthenticationError("Missing variable 'clientSecret'")
    if not cfg.subscription:
        raise AuthenticationError("Missing variable 'subscription'")

    if cfg.request_timeout <= 0:
        raise ValueError("request_timeout must be positive")
    if cfg.limiter.max_concurrent <= 0:
        raise ValueError("limiter.max_concurrent must be positive")
    if cfg.polling.timeout <= 0:
        raise ValueError("polling.timeout must be positive")
    if cfg.polling.interval <= 0 or cfg.polling.btc_interval <= 0:
        raise ValueError("polling intervals must be positive")

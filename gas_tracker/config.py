"""Configuration loader: reads config.yaml, interpolates env vars, validates."""
from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

from .models import NetworkId

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Frozen config dataclasses
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class EndpointConfig:
    url: str = ""
    timeout: float = 8.0
    retry_count: int = 1
    retry_delay: float = 0.5


@dataclass(frozen=True)
class NetworkConfig:
    label: str = ""
    chain_id: int = 0
    currency: str = "ETH"
    explorer: str = ""
    endpoints: tuple[EndpointConfig, ...] = ()


@dataclass(frozen=True)
class PollerConfig:
    interval_seconds: float = 8.0
    auto_refresh: bool = True
    attempt_deadline: float = 10.0
    history_capacity: int = 20
    priority_fee_gwei: float = 1.5


@dataclass(frozen=True)
class PriceConfig:
    url: str = "https://api.coingecko.com/api/v3/simple/price"
    coins: dict[str, str] = field(default_factory=lambda: {"ETH": "ethereum"})
    symbol: str = "ETH"
    min_refresh_seconds: float = 60.0
    timeout: float = 10.0


@dataclass(frozen=True)
class LendingConfig:
    apy: float = 8.5
    borrow_spread: float = 2.0
    collateral_factor: float = 0.8
    swap_rate: float = 0.001
    approval_delay: float = 1.0
    settle_delay: float = 2.0
    ledger_display_limit: int = 5


@dataclass(frozen=True)
class TokenConfig:
    network: NetworkId = NetworkId.SECONDARY


@dataclass(frozen=True)
class AppConfig:
    networks: dict[NetworkId, NetworkConfig] = field(default_factory=dict)
    poller: PollerConfig = field(default_factory=PollerConfig)
    price: PriceConfig = field(default_factory=PriceConfig)
    lending: LendingConfig = field(default_factory=LendingConfig)
    token: TokenConfig = field(default_factory=TokenConfig)


# Public testnet endpoints, primary first.
DEFAULT_NETWORKS: dict[NetworkId, NetworkConfig] = {
    NetworkId.PRIMARY: NetworkConfig(
        label="Ethereum Sepolia",
        chain_id=11155111,
        currency="ETH",
        explorer="https://sepolia.etherscan.io",
        endpoints=tuple(
            EndpointConfig(url=url)
            for url in (
                "https://ethereum-sepolia-rpc.publicnode.com",
                "https://sepolia.gateway.tenderly.co",
                "https://rpc2.sepolia.org",
                "https://ethereum-sepolia.blockpi.network/v1/rpc/public",
                "https://sepolia.drpc.org",
            )
        ),
    ),
    NetworkId.SECONDARY: NetworkConfig(
        label="Lisk Sepolia",
        chain_id=4202,
        currency="ETH",
        explorer="https://sepolia-blockscout.lisk.com",
        endpoints=(EndpointConfig(url="https://rpc.sepolia-api.lisk.com"),),
    ),
}


def default_config() -> AppConfig:
    """Built-in two-network testnet setup, used when no config file exists."""
    return AppConfig(networks=dict(DEFAULT_NETWORKS))


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


# ---------------------------------------------------------------------------
# YAML → dataclass builders
# ---------------------------------------------------------------------------


def _parse_network_id(name: str) -> NetworkId:
    try:
        return NetworkId(name)
    except ValueError:
        raise ValueError(f"Unknown network '{name}'") from None


def _build_endpoint(raw: Any) -> EndpointConfig:
    # Plain strings are accepted as bare URLs with default timeouts.
    if isinstance(raw, str):
        return EndpointConfig(url=raw)
    return EndpointConfig(
        url=raw.get("url", ""),
        timeout=float(raw.get("timeout", 8.0)),
        retry_count=int(raw.get("retry_count", 1)),
        retry_delay=float(raw.get("retry_delay", 0.5)),
    )


def _build_networks(raw: dict[str, Any]) -> dict[NetworkId, NetworkConfig]:
    networks: dict[NetworkId, NetworkConfig] = {}
    for name, cfg in raw.items():
        networks[_parse_network_id(name)] = NetworkConfig(
            label=cfg.get("label", name),
            chain_id=int(cfg.get("chain_id", 0)),
            currency=cfg.get("currency", "ETH"),
            explorer=cfg.get("explorer", ""),
            endpoints=tuple(_build_endpoint(e) for e in cfg.get("endpoints", [])),
        )
    return networks


def _build_poller(raw: dict[str, Any]) -> PollerConfig:
    return PollerConfig(
        interval_seconds=float(raw.get("interval_seconds", 8.0)),
        auto_refresh=bool(raw.get("auto_refresh", True)),
        attempt_deadline=float(raw.get("attempt_deadline", 10.0)),
        history_capacity=int(raw.get("history_capacity", 20)),
        priority_fee_gwei=float(raw.get("priority_fee_gwei", 1.5)),
    )


def _build_price(raw: dict[str, Any]) -> PriceConfig:
    defaults = PriceConfig()
    return PriceConfig(
        url=raw.get("url", defaults.url),
        coins=dict(raw.get("coins", defaults.coins)),
        symbol=raw.get("symbol", defaults.symbol),
        min_refresh_seconds=float(raw.get("min_refresh_seconds", 60.0)),
        timeout=float(raw.get("timeout", defaults.timeout)),
    )


def _build_lending(raw: dict[str, Any]) -> LendingConfig:
    return LendingConfig(
        apy=float(raw.get("apy", 8.5)),
        borrow_spread=float(raw.get("borrow_spread", 2.0)),
        collateral_factor=float(raw.get("collateral_factor", 0.8)),
        swap_rate=float(raw.get("swap_rate", 0.001)),
        approval_delay=float(raw.get("approval_delay", 1.0)),
        settle_delay=float(raw.get("settle_delay", 2.0)),
        ledger_display_limit=int(raw.get("ledger_display_limit", 5)),
    )


def _build_token(raw: dict[str, Any]) -> TokenConfig:
    return TokenConfig(
        network=_parse_network_id(raw.get("network", NetworkId.SECONDARY.value)),
    )


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def load_config(config_path: str | Path | None = None) -> AppConfig:
    """Load and validate application configuration from YAML + .env.

    Args:
        config_path: Path to config.yaml. Defaults to ``config.yaml`` in the
            project root. When the default file does not exist the built-in
            testnet configuration is returned; an explicit path must exist.
    """
    load_dotenv()

    explicit = config_path is not None
    if config_path is None:
        config_path = Path(__file__).resolve().parent.parent / "config.yaml"
    config_path = Path(config_path)

    if not config_path.exists():
        if explicit:
            raise FileNotFoundError(f"Config file not found: {config_path}")
        logger.info("No config.yaml found, using built-in testnet networks")
        cfg = default_config()
        _validate(cfg)
        return cfg

    with open(config_path) as f:
        raw = yaml.safe_load(f) or {}

    raw = _interpolate_env(raw)

    networks_raw = raw.get("networks")
    cfg = AppConfig(
        networks=(
            _build_networks(networks_raw)
            if networks_raw is not None
            else dict(DEFAULT_NETWORKS)
        ),
        poller=_build_poller(raw.get("poller", {})),
        price=_build_price(raw.get("price", {})),
        lending=_build_lending(raw.get("lending", {})),
        token=_build_token(raw.get("token", {})),
    )

    _validate(cfg)
    logger.info("Configuration loaded from %s", config_path)
    return cfg


def _validate(cfg: AppConfig) -> None:
    """Raise on invalid configuration."""
    if not cfg.networks:
        raise ValueError("At least one network must be configured")

    for network_id, network in cfg.networks.items():
        if not network.endpoints:
            raise ValueError(f"Network '{network_id.value}' has no endpoints")
        for endpoint in network.endpoints:
            if not endpoint.url:
                raise ValueError(
                    f"Network '{network_id.value}' has an endpoint without url"
                )

    if cfg.token.network not in cfg.networks:
        raise ValueError(
            f"Token lookups reference unknown network '{cfg.token.network.value}'"
        )
    if cfg.poller.interval_seconds <= 0:
        raise ValueError("Poll interval must be positive")
    if cfg.poller.history_capacity < 1:
        raise ValueError("History capacity must be at least 1")

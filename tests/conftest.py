"""Shared test fixtures and fakes."""
from __future__ import annotations

import asyncio
import textwrap
from pathlib import Path
from typing import Any

import pytest

from gas_tracker.config import (
    AppConfig,
    EndpointConfig,
    LendingConfig,
    NetworkConfig,
    PollerConfig,
    PriceConfig,
)
from gas_tracker.models import FeeReading, NetworkId, TokenSnapshot

TOKEN_ADDRESS = "0x3eede3fe85f32d013e368d02db07c0662390eadd"
OWNER_ADDRESS = "0x1111111111111111111111111111111111111111"

HANG = object()


# ---------------------------------------------------------------------------
# Fakes
# ---------------------------------------------------------------------------


def make_reading(gwei: float = 12.0, block: int = 100, endpoint: str = "") -> FeeReading:
    return FeeReading(
        gas_price=int(gwei * 10**9),
        base_fee=int(gwei * 10**9) - 1,
        priority_fee=1_500_000_000,
        block_number=block,
        block_timestamp=1_700_000_000,
        endpoint=endpoint,
    )


class FakeTransport:
    """Transport whose outcome is scripted per endpoint url.

    An outcome is a FeeReading (returned), an exception (raised), ``HANG``
    (never returns) or a list of outcomes consumed one per call.
    """

    def __init__(self, outcomes: dict[str, Any]) -> None:
        self.outcomes = dict(outcomes)
        self.calls: list[str] = []

    async def attempt(self, endpoint: EndpointConfig) -> FeeReading:
        self.calls.append(endpoint.url)
        outcome = self.outcomes[endpoint.url]
        if isinstance(outcome, list):
            outcome = outcome.pop(0)
        if outcome is HANG:
            await asyncio.Event().wait()
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome


class FakeOracle:
    def __init__(self, prices: dict[str, float] | None = None) -> None:
        self.prices = prices or {}
        self.calls = 0

    async def fetch_prices(self, symbols: list[str] | None = None) -> dict[str, float]:
        self.calls += 1
        return dict(self.prices)


class FakeTokenReader:
    def __init__(
        self,
        metadata: dict[str, Any] | Exception | None = None,
        balance: int | Exception = 0,
        delay: float = 0.0,
    ) -> None:
        self.metadata = metadata or {
            "name": "Test Token",
            "symbol": "TST",
            "decimals": 18,
            "total_supply": 1_000_000 * 10**18,
        }
        self.balance = balance
        self.delay = delay
        self.metadata_calls: list[str] = []

    async def read_metadata(self, address: str) -> dict[str, Any]:
        self.metadata_calls.append(address)
        if self.delay:
            await asyncio.sleep(self.delay)
        if isinstance(self.metadata, Exception):
            raise self.metadata
        return dict(self.metadata)

    async def read_balance(self, address: str, owner: str) -> int:
        if isinstance(self.balance, Exception):
            raise self.balance
        return self.balance


# ---------------------------------------------------------------------------
# Config fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def primary_endpoints() -> tuple[EndpointConfig, ...]:
    return (
        EndpointConfig(url="https://a.example.com", timeout=1.0),
        EndpointConfig(url="https://b.example.com", timeout=1.0),
        EndpointConfig(url="https://c.example.com", timeout=1.0),
    )


@pytest.fixture()
def secondary_endpoints() -> tuple[EndpointConfig, ...]:
    return (EndpointConfig(url="https://lisk.example.com", timeout=1.0),)


@pytest.fixture()
def sample_app_config(
    primary_endpoints: tuple[EndpointConfig, ...],
    secondary_endpoints: tuple[EndpointConfig, ...],
) -> AppConfig:
    return AppConfig(
        networks={
            NetworkId.PRIMARY: NetworkConfig(
                label="Ethereum Sepolia", chain_id=11155111, endpoints=primary_endpoints
            ),
            NetworkId.SECONDARY: NetworkConfig(
                label="Lisk Sepolia", chain_id=4202, endpoints=secondary_endpoints
            ),
        },
        poller=PollerConfig(interval_seconds=0.05, attempt_deadline=0.5),
        price=PriceConfig(min_refresh_seconds=60.0),
        lending=LendingConfig(approval_delay=0.01, settle_delay=0.02),
    )


@pytest.fixture()
def sample_token() -> TokenSnapshot:
    return TokenSnapshot(
        address=TOKEN_ADDRESS,
        name="Test Token",
        symbol="TST",
        decimals=18,
        total_supply="1000000",
        balance="250",
        verified=True,
    )


# ---------------------------------------------------------------------------
# Config YAML fixture
# ---------------------------------------------------------------------------

SAMPLE_YAML = textwrap.dedent("""\
    networks:
      primary:
        label: Ethereum Sepolia
        chain_id: 11155111
        endpoints:
          - url: https://rpc1.example.com
            timeout: 5
            retry_count: 2
            retry_delay: 0.25
          - https://rpc2.example.com
      secondary:
        label: Lisk Sepolia
        chain_id: 4202
        endpoints:
          - https://lisk.example.com
    poller:
      interval_seconds: 12
      auto_refresh: false
      attempt_deadline: 9
      history_capacity: 10
      priority_fee_gwei: 2.0
    price:
      url: https://prices.example.com
      coins: {ETH: ethereum}
      symbol: ETH
      min_refresh_seconds: 30
      timeout: 4
    lending:
      apy: 7.0
      collateral_factor: 0.75
      swap_rate: 0.002
    token:
      network: primary
""")


@pytest.fixture()
def sample_yaml_path(tmp_path: Path) -> Path:
    cfg_file = tmp_path / "config.yaml"
    cfg_file.write_text(SAMPLE_YAML)
    return cfg_file

"""Data models: snapshots are mutable, everything else is frozen."""
from __future__ import annotations

import time
from dataclasses import dataclass, field
from enum import Enum

WEI_PER_GWEI = 10**9
WEI_PER_ETH = 10**18


def now_ms() -> int:
    return int(time.time() * 1000)


class NetworkId(str, Enum):
    PRIMARY = "primary"
    SECONDARY = "secondary"


@dataclass
class FeeSnapshot:
    """Latest applied fee metrics for one network (overwritten in place)."""

    gas_price: int | None = None
    base_fee: int | None = None
    priority_fee: int | None = None
    block_number: int | None = None
    block_timestamp: int | None = None
    is_loading: bool = True
    last_error: str | None = None
    captured_at: int = field(default_factory=now_ms)


@dataclass(frozen=True)
class FeeReading:
    """Result of one successful endpoint attempt."""

    gas_price: int
    base_fee: int | None
    priority_fee: int | None
    block_number: int | None
    block_timestamp: int | None
    endpoint: str = ""


@dataclass(frozen=True)
class FetchFailure:
    """Terminal failure of a whole attempt sequence."""

    network: NetworkId
    message: str
    attempts: tuple[str, ...] = ()


@dataclass(frozen=True)
class HistoryPoint:
    timestamp: int
    value: float


@dataclass(frozen=True)
class GasCost:
    eth: float
    usd: float | None


@dataclass(frozen=True)
class FeeComparison:
    cheaper: NetworkId
    difference_gwei: float
    percentage: float
    gwei: dict[NetworkId, float]
    costs: dict[NetworkId, GasCost]


@dataclass
class PriceQuote:
    """USD quote for the fee currency."""

    usd: float = 0.0
    last_update: int = 0
    is_loading: bool = True
    last_error: str | None = None


@dataclass(frozen=True)
class TokenSnapshot:
    """Result of one collateral-token lookup, replaced wholesale per lookup."""

    address: str
    name: str
    symbol: str
    decimals: int
    total_supply: str
    balance: str
    verified: bool
    error: str | None = None


@dataclass(frozen=True)
class Loan:
    id: str
    borrower: str
    principal: str
    collateral_token: str
    collateral_amount: str
    created_at: int
    repaid: bool = False
    failed: bool = False


@dataclass(frozen=True)
class SwapQuote:
    """Simulated swap of collateral into the fee currency."""

    received: float
    net: float


@dataclass(frozen=True)
class Rejection:
    """Synchronous refusal of a user action; no state was changed."""

    reason: str

"""Pure fee calculations: no I/O."""
from __future__ import annotations

from ..models import WEI_PER_ETH, WEI_PER_GWEI, FeeComparison, GasCost, NetworkId

TRANSFER_GAS = 21000


def to_gwei(wei: int) -> float:
    return wei / WEI_PER_GWEI


def gas_cost(gas_price: int | None, usd_price: float = 0.0, gas_limit: int = TRANSFER_GAS) -> GasCost:
    """Cost of ``gas_limit`` gas at ``gas_price`` in ETH and, if priced, USD."""
    if not gas_price:
        return GasCost(eth=0.0, usd=None)
    eth = gas_price * gas_limit / WEI_PER_ETH
    return GasCost(eth=eth, usd=eth * usd_price if usd_price > 0 else None)


def gas_level(gas_price: int | None) -> str:
    if not gas_price:
        return "unknown"
    gwei = to_gwei(gas_price)
    if gwei < 1:
        return "low"
    if gwei < 5:
        return "medium"
    return "high"


def compare(
    prices: dict[NetworkId, int | None], usd_price: float = 0.0
) -> FeeComparison | None:
    """Compare primary and secondary gas prices.

    Returns None unless both networks have a price. Equal prices report the
    secondary network as cheaper.
    """
    primary = prices.get(NetworkId.PRIMARY)
    secondary = prices.get(NetworkId.SECONDARY)
    if not primary or not secondary:
        return None

    gwei = {
        NetworkId.PRIMARY: to_gwei(primary),
        NetworkId.SECONDARY: to_gwei(secondary),
    }
    difference = abs(gwei[NetworkId.PRIMARY] - gwei[NetworkId.SECONDARY])
    cheaper = (
        NetworkId.PRIMARY
        if gwei[NetworkId.PRIMARY] < gwei[NetworkId.SECONDARY]
        else NetworkId.SECONDARY
    )
    return FeeComparison(
        cheaper=cheaper,
        difference_gwei=difference,
        percentage=difference / max(gwei.values()) * 100,
        gwei=gwei,
        costs={
            NetworkId.PRIMARY: gas_cost(primary, usd_price),
            NetworkId.SECONDARY: gas_cost(secondary, usd_price),
        },
    )

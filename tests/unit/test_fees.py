"""Unit tests for gas cost, gas level and network comparison."""
from __future__ import annotations

import pytest

from gas_tracker.models import NetworkId
from gas_tracker.services import fees

GWEI = 10**9


class TestGasCost:
    def test_transfer_cost_in_eth(self) -> None:
        cost = fees.gas_cost(10 * GWEI)
        assert cost.eth == pytest.approx(0.00021)
        assert cost.usd is None

    def test_usd_when_priced(self) -> None:
        cost = fees.gas_cost(10 * GWEI, usd_price=3000.0)
        assert cost.usd == pytest.approx(0.63)

    def test_no_price_is_zero(self) -> None:
        assert fees.gas_cost(None).eth == 0.0


class TestGasLevel:
    @pytest.mark.parametrize(
        ("wei", "level"),
        [
            (None, "unknown"),
            (GWEI // 2, "low"),
            (GWEI, "medium"),
            (4 * GWEI, "medium"),
            (5 * GWEI, "high"),
        ],
    )
    def test_levels(self, wei: int | None, level: str) -> None:
        assert fees.gas_level(wei) == level


class TestCompare:
    def test_requires_both_prices(self) -> None:
        assert fees.compare({NetworkId.PRIMARY: 10 * GWEI, NetworkId.SECONDARY: None}) is None
        assert fees.compare({NetworkId.PRIMARY: 10 * GWEI}) is None

    def test_cheaper_network(self) -> None:
        result = fees.compare(
            {NetworkId.PRIMARY: 10 * GWEI, NetworkId.SECONDARY: 2 * GWEI},
            usd_price=2000.0,
        )
        assert result is not None
        assert result.cheaper is NetworkId.SECONDARY
        assert result.difference_gwei == pytest.approx(8.0)
        assert result.percentage == pytest.approx(80.0)
        assert result.gwei[NetworkId.PRIMARY] == pytest.approx(10.0)
        assert result.costs[NetworkId.SECONDARY].usd == pytest.approx(0.084)

    def test_primary_cheaper(self) -> None:
        result = fees.compare({NetworkId.PRIMARY: GWEI, NetworkId.SECONDARY: 4 * GWEI})
        assert result is not None
        assert result.cheaper is NetworkId.PRIMARY

    def test_tie_reports_secondary(self) -> None:
        result = fees.compare({NetworkId.PRIMARY: GWEI, NetworkId.SECONDARY: GWEI})
        assert result is not None
        assert result.cheaper is NetworkId.SECONDARY
        assert result.percentage == 0.0

"""Unit tests for data models."""
from __future__ import annotations

from dataclasses import replace

import pytest

from gas_tracker.models import FeeSnapshot, HistoryPoint, Loan, NetworkId


class TestFeeSnapshot:
    def test_initial_state(self) -> None:
        s = FeeSnapshot()
        assert s.gas_price is None
        assert s.base_fee is None
        assert s.is_loading is True
        assert s.last_error is None
        assert s.captured_at > 0

    def test_mutable(self) -> None:
        s = FeeSnapshot()
        s.gas_price = 5
        assert s.gas_price == 5


class TestLoan:
    def test_frozen(self) -> None:
        loan = Loan(
            id="1", borrower="0xB", principal="0.01", collateral_token="0xT",
            collateral_amount="100", created_at=1,
        )
        with pytest.raises(AttributeError):
            loan.repaid = True  # type: ignore[misc]

    def test_replace_flips_repaid(self) -> None:
        loan = Loan(
            id="1", borrower="0xB", principal="0.01", collateral_token="0xT",
            collateral_amount="100", created_at=1,
        )
        repaid = replace(loan, repaid=True)
        assert repaid.repaid is True
        assert loan.repaid is False
        assert repaid.collateral_amount == "100"


class TestNetworkId:
    def test_string_values(self) -> None:
        assert NetworkId("primary") is NetworkId.PRIMARY
        assert NetworkId.SECONDARY.value == "secondary"


def test_history_point_equality() -> None:
    assert HistoryPoint(1, 2.0) == HistoryPoint(timestamp=1, value=2.0)

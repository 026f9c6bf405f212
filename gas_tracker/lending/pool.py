"""Simulated lending pool balances."""
from __future__ import annotations

import logging
from dataclasses import dataclass

from ..config import LendingConfig
from ..models import Rejection
from . import economics

logger = logging.getLogger(__name__)


@dataclass
class PoolState:
    total_lent: float = 1_250_000.0
    total_borrowed: float = 875_000.0
    user_lent: float = 0.0
    user_borrowed: float = 0.0


class LendingPool:
    """Track pool totals and one user's lent/borrowed amounts."""

    def __init__(
        self, config: LendingConfig | None = None, state: PoolState | None = None
    ) -> None:
        self._config = config or LendingConfig()
        self.state = state or PoolState()

    @property
    def apy(self) -> float:
        return self._config.apy

    @property
    def borrow_apy(self) -> float:
        return economics.borrow_apy(self._config.apy, self._config.borrow_spread)

    @property
    def health_factor(self) -> float:
        return economics.health_factor(
            self.state.user_lent,
            self.state.user_borrowed,
            self._config.collateral_factor,
        )

    @property
    def available_to_borrow(self) -> float:
        return economics.available_to_borrow(
            self.state.user_lent,
            self.state.user_borrowed,
            self._config.collateral_factor,
        )

    def yearly_earnings(self) -> float:
        return economics.annual_return(self.state.user_lent, self._config.apy)

    def yearly_interest(self) -> float:
        return economics.borrow_interest(
            self.state.user_borrowed, self._config.apy, self._config.borrow_spread
        )

    def lend(self, amount: float) -> PoolState | Rejection:
        if amount <= 0:
            return Rejection("Amount must be positive")
        self.state.user_lent += amount
        self.state.total_lent += amount
        logger.info("Lent %.4f", amount)
        return self.state

    def borrow(self, amount: float) -> PoolState | Rejection:
        if amount <= 0:
            return Rejection("Amount must be positive")
        limit = economics.max_borrowable(
            self.state.user_lent, self._config.collateral_factor
        )
        if self.state.user_borrowed + amount > limit:
            return Rejection("Insufficient collateral")
        self.state.user_borrowed += amount
        self.state.total_borrowed += amount
        logger.info("Borrowed %.4f", amount)
        return self.state

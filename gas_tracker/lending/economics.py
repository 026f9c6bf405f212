"""Pure lending calculations: no I/O, no state."""
from __future__ import annotations

import math

DEFAULT_COLLATERAL_FACTOR = 0.8
DEFAULT_BORROW_SPREAD = 2.0


def annual_return(principal: float, apy: float) -> float:
    """Yearly earnings on ``principal`` lent at ``apy`` percent."""
    return principal * apy / 100


def borrow_apy(apy: float, spread: float = DEFAULT_BORROW_SPREAD) -> float:
    return apy + spread


def borrow_interest(
    principal: float, apy: float, spread: float = DEFAULT_BORROW_SPREAD
) -> float:
    """Yearly interest on ``principal`` borrowed at ``apy + spread`` percent."""
    return principal * borrow_apy(apy, spread) / 100


def max_borrowable(
    user_lent: float, collateral_factor: float = DEFAULT_COLLATERAL_FACTOR
) -> float:
    return user_lent * collateral_factor


def available_to_borrow(
    user_lent: float,
    user_borrowed: float,
    collateral_factor: float = DEFAULT_COLLATERAL_FACTOR,
) -> float:
    return max_borrowable(user_lent, collateral_factor) - user_borrowed


def health_factor(
    user_lent: float,
    user_borrowed: float,
    collateral_factor: float = DEFAULT_COLLATERAL_FACTOR,
) -> float:
    """Collateral-adjusted capacity over debt.

    ``math.inf`` when nothing is borrowed; below 1 means under-collateralized.
    """
    if user_borrowed == 0:
        return math.inf
    return max_borrowable(user_lent, collateral_factor) / user_borrowed

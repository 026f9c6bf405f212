"""Append-only record of gas loans."""
from __future__ import annotations

import logging
from dataclasses import replace

from ..models import Loan

logger = logging.getLogger(__name__)

DISPLAY_LIMIT = 5


class LoanLedger:
    """Historical loans in insertion order.

    Entries are never removed. The only updates are ``repaid`` (false to
    true, once) and the ``failed`` marker.
    """

    def __init__(self) -> None:
        self._loans: list[Loan] = []

    def __len__(self) -> int:
        return len(self._loans)

    def _index(self, loan_id: str) -> int | None:
        for i, loan in enumerate(self._loans):
            if loan.id == loan_id:
                return i
        return None

    def append(self, loan: Loan) -> None:
        if self._index(loan.id) is not None:
            raise ValueError(f"Loan {loan.id} already recorded")
        self._loans.append(loan)
        logger.info("Ledger: recorded loan %s (%s)", loan.id, loan.principal)

    def get(self, loan_id: str) -> Loan | None:
        index = self._index(loan_id)
        return None if index is None else self._loans[index]

    def mark_repaid(self, loan_id: str) -> bool:
        """Flip ``repaid`` to True; False if unknown or already repaid."""
        index = self._index(loan_id)
        if index is None or self._loans[index].repaid:
            return False
        self._loans[index] = replace(self._loans[index], repaid=True)
        logger.info("Ledger: loan %s repaid", loan_id)
        return True

    def mark_failed(self, loan_id: str) -> bool:
        index = self._index(loan_id)
        if index is None or self._loans[index].repaid:
            return False
        self._loans[index] = replace(self._loans[index], failed=True)
        logger.warning("Ledger: loan %s failed, collateral released", loan_id)
        return True

    def entries(self) -> tuple[Loan, ...]:
        return tuple(self._loans)

    def recent(self, limit: int = DISPLAY_LIMIT) -> list[Loan]:
        """Most recent ``limit`` loans, newest first."""
        if limit <= 0:
            return []
        return list(reversed(self._loans[-limit:]))

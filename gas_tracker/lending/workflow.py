"""Gas-loan workflow: request → swap → repay → completed.

The swap and the repayment are simulated with timers. Submitting a request
moves to SWAP at once and records the loan in the ledger after
``approval_delay``. Executing the swap moves to REPAY and, after
``settle_delay``, the machine completes on its own and marks the ledger
entry repaid. ``acknowledge_completion`` returns to IDLE.

If an injected ``settle`` coroutine raises, the loan ends in FAILED with
its collateral released instead of COMPLETED.
"""
from __future__ import annotations

import asyncio
import logging
import uuid
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Awaitable, Callable

from ..config import LendingConfig
from ..models import Loan, Rejection, SwapQuote, TokenSnapshot, now_ms
from .ledger import LoanLedger

logger = logging.getLogger(__name__)

Settle = Callable[[Loan, SwapQuote], Awaitable[None]]


class LoanStage(str, Enum):
    IDLE = "idle"
    REQUEST = "request"
    SWAP = "swap"
    REPAY = "repay"
    COMPLETED = "completed"
    FAILED = "failed"


def _positive(value: str) -> Decimal | None:
    try:
        amount = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        return None
    if not amount.is_finite() or amount <= 0:
        return None
    return amount


class LoanWorkflow:
    """Single-active-loan state machine for one borrower."""

    def __init__(
        self,
        borrower: str,
        ledger: LoanLedger | None = None,
        swap_rate: float = 0.001,
        approval_delay: float = 1.0,
        settle_delay: float = 2.0,
        settle: Settle | None = None,
    ) -> None:
        self.borrower = borrower
        self.ledger = ledger if ledger is not None else LoanLedger()
        self.swap_rate = Decimal(str(swap_rate))
        self.approval_delay = approval_delay
        self.settle_delay = settle_delay
        self._settle = settle

        self.stage = LoanStage.IDLE
        self.active_loan: Loan | None = None
        self.principal_input = ""
        self.collateral_input = ""
        self.last_error: str | None = None

        self._record_task: asyncio.Task | None = None
        self._settle_task: asyncio.Task | None = None

    @classmethod
    def from_config(
        cls, borrower: str, config: LendingConfig, **kwargs
    ) -> "LoanWorkflow":
        return cls(
            borrower,
            swap_rate=config.swap_rate,
            approval_delay=config.approval_delay,
            settle_delay=config.settle_delay,
            **kwargs,
        )

    @property
    def step(self) -> LoanStage:
        """Stage as shown to users; IDLE looks like REQUEST."""
        return LoanStage.REQUEST if self.stage is LoanStage.IDLE else self.stage

    def quote_swap(self, loan: Loan) -> SwapQuote:
        received = Decimal(loan.collateral_amount) * self.swap_rate
        return SwapQuote(
            received=float(received),
            net=float(received - Decimal(loan.principal)),
        )

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def submit_loan_request(
        self,
        principal: str,
        collateral_amount: str,
        collateral_token: TokenSnapshot | None,
    ) -> Loan | Rejection:
        """Validate and stage a loan, then record it after ``approval_delay``.

        Must be called from a running event loop: the ledger write is a task
        on that loop. Raises ``RuntimeError`` before any state changes otherwise.
        """
        loop = asyncio.get_running_loop()
        if self.stage not in (LoanStage.IDLE, LoanStage.REQUEST):
            return Rejection(f"A loan is already in progress ({self.stage.value})")
        if not self.borrower:
            return Rejection("No borrower address")
        if _positive(principal) is None:
            return Rejection("Loan amount must be positive")
        if _positive(collateral_amount) is None:
            return Rejection("Collateral amount must be positive")
        if collateral_token is None or not collateral_token.verified:
            return Rejection("Collateral token not resolved")

        loan = Loan(
            id=uuid.uuid4().hex,
            borrower=self.borrower,
            principal=str(principal).strip(),
            collateral_token=collateral_token.address,
            collateral_amount=str(collateral_amount).strip(),
            created_at=now_ms(),
        )
        self.principal_input = loan.principal
        self.collateral_input = loan.collateral_amount
        self.active_loan = loan
        self.stage = LoanStage.SWAP
        self.last_error = None
        self._record_task = loop.create_task(self._record(loan))
        logger.info(
            "Gas loan %s requested: %s against %s %s",
            loan.id, loan.principal, loan.collateral_amount, collateral_token.symbol,
        )
        return loan

    def execute_swap(self) -> SwapQuote | Rejection:
        """Quote the swap and settle after ``settle_delay``.

        Like ``submit_loan_request``, requires a running event loop.
        """
        loop = asyncio.get_running_loop()
        if self.stage is not LoanStage.SWAP or self.active_loan is None:
            return Rejection("No loan awaiting swap")

        loan = self.active_loan
        quote = self.quote_swap(loan)
        self.stage = LoanStage.REPAY
        self._settle_task = loop.create_task(self._complete(loan, quote))
        logger.info("Swap for loan %s: ~%.4f received", loan.id, quote.received)
        return quote

    def acknowledge_completion(self) -> Loan | Rejection:
        if self.stage not in (LoanStage.COMPLETED, LoanStage.FAILED):
            return Rejection("Loan is not finished")
        loan = self.active_loan
        self.active_loan = None
        self.stage = LoanStage.IDLE
        self.principal_input = ""
        self.collateral_input = ""
        return loan

    # ------------------------------------------------------------------
    # Timers
    # ------------------------------------------------------------------

    async def _record(self, loan: Loan) -> None:
        await asyncio.sleep(self.approval_delay)
        self.ledger.append(loan)

    async def _complete(self, loan: Loan, quote: SwapQuote) -> None:
        await asyncio.sleep(self.settle_delay)
        # The ledger entry must exist before it can be marked.
        if self._record_task is not None:
            await self._record_task

        try:
            if self._settle is not None:
                await self._settle(loan, quote)
        except Exception as e:
            self.last_error = str(e) or type(e).__name__
            self.ledger.mark_failed(loan.id)
            self.stage = LoanStage.FAILED
            logger.error("Settlement of loan %s failed: %s", loan.id, self.last_error)
            return

        self.ledger.mark_repaid(loan.id)
        self.stage = LoanStage.COMPLETED
        logger.info("Gas loan %s completed", loan.id)

    async def wait_settled(self) -> None:
        """Wait until every pending timer has fired."""
        for task in (self._record_task, self._settle_task):
            if task is not None and not task.done():
                await task

    def close(self) -> None:
        """Cancel pending timers so no callback outlives the workflow."""
        for task in (self._record_task, self._settle_task):
            if task is not None and not task.done():
                task.cancel()

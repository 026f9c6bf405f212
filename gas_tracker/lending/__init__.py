"""Lending pool and simulated gas-loan workflow."""
from .ledger import LoanLedger
from .pool import LendingPool, PoolState
from .workflow import LoanStage, LoanWorkflow

__all__ = ["LendingPool", "LoanLedger", "LoanStage", "LoanWorkflow", "PoolState"]

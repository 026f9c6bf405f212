"""Service modules."""
from .failover import FailoverFetcher
from .history import HistoryBuffer
from .scheduler import Scheduler
from .snapshot_store import SnapshotStore
from .token_lookup import TokenLookup
from .tracker import GasTracker

__all__ = [
    "FailoverFetcher",
    "GasTracker",
    "HistoryBuffer",
    "Scheduler",
    "SnapshotStore",
    "TokenLookup",
]

"""Per-network latest fee snapshots."""
from __future__ import annotations

from dataclasses import replace
from typing import Iterable

from ..models import FeeReading, FeeSnapshot, FetchFailure, NetworkId, now_ms


class SnapshotStore:
    """Holds the latest applied snapshot for each network.

    Mutated only by the result-application step of a refresh cycle.
    """

    def __init__(self, networks: Iterable[NetworkId]) -> None:
        self._snapshots: dict[NetworkId, FeeSnapshot] = {
            network: FeeSnapshot() for network in networks
        }

    def get(self, network: NetworkId) -> FeeSnapshot:
        """Return a copy of the latest applied state."""
        return replace(self._snapshots[network])

    def begin(self, network: NetworkId) -> None:
        snapshot = self._snapshots[network]
        snapshot.is_loading = True
        snapshot.last_error = None

    def apply_success(self, network: NetworkId, reading: FeeReading) -> None:
        snapshot = self._snapshots[network]
        snapshot.gas_price = reading.gas_price
        snapshot.base_fee = reading.base_fee
        snapshot.priority_fee = reading.priority_fee
        snapshot.block_number = reading.block_number
        snapshot.block_timestamp = reading.block_timestamp
        snapshot.captured_at = now_ms()
        snapshot.is_loading = False
        snapshot.last_error = None

    def apply_failure(self, network: NetworkId, failure: FetchFailure) -> None:
        # Fee fields keep the previous successful values.
        snapshot = self._snapshots[network]
        snapshot.is_loading = False
        snapshot.last_error = failure.message

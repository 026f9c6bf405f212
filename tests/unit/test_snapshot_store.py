"""Unit tests for the snapshot store."""
from __future__ import annotations

import pytest

from conftest import make_reading
from gas_tracker.models import FetchFailure, NetworkId
from gas_tracker.services.snapshot_store import SnapshotStore


@pytest.fixture()
def store() -> SnapshotStore:
    return SnapshotStore([NetworkId.PRIMARY, NetworkId.SECONDARY])


class TestSnapshotStore:
    def test_initially_loading_without_data(self, store: SnapshotStore) -> None:
        snap = store.get(NetworkId.PRIMARY)
        assert snap.is_loading is True
        assert snap.gas_price is None

    def test_begin_clears_error(self, store: SnapshotStore) -> None:
        store.apply_failure(NetworkId.PRIMARY, FetchFailure(NetworkId.PRIMARY, "boom"))
        store.begin(NetworkId.PRIMARY)
        snap = store.get(NetworkId.PRIMARY)
        assert snap.is_loading is True
        assert snap.last_error is None

    def test_success_overwrites_fields(self, store: SnapshotStore) -> None:
        store.begin(NetworkId.PRIMARY)
        store.apply_success(NetworkId.PRIMARY, make_reading(gwei=12, block=7))
        snap = store.get(NetworkId.PRIMARY)
        assert snap.gas_price == 12 * 10**9
        assert snap.block_number == 7
        assert snap.priority_fee == 1_500_000_000
        assert snap.is_loading is False
        assert snap.last_error is None

    def test_failure_keeps_previous_fees(self, store: SnapshotStore) -> None:
        store.apply_success(NetworkId.PRIMARY, make_reading(gwei=12, block=7))
        captured = store.get(NetworkId.PRIMARY).captured_at

        store.begin(NetworkId.PRIMARY)
        store.apply_failure(NetworkId.PRIMARY, FetchFailure(NetworkId.PRIMARY, "all down"))

        snap = store.get(NetworkId.PRIMARY)
        assert snap.gas_price == 12 * 10**9
        assert snap.block_number == 7
        assert snap.captured_at == captured
        assert snap.is_loading is False
        assert snap.last_error == "all down"

    def test_get_returns_copy(self, store: SnapshotStore) -> None:
        snap = store.get(NetworkId.PRIMARY)
        snap.gas_price = 1
        assert store.get(NetworkId.PRIMARY).gas_price is None

    def test_networks_independent(self, store: SnapshotStore) -> None:
        store.apply_success(NetworkId.PRIMARY, make_reading())
        assert store.get(NetworkId.SECONDARY).gas_price is None

"""Bounded per-network gas price history."""
from __future__ import annotations

from collections import deque
from typing import Iterable, Sequence

from ..models import HistoryPoint, NetworkId

DEFAULT_CAPACITY = 20
MIN_BAR_HEIGHT = 2.0


class HistoryBuffer:
    """Fixed-capacity FIFO of (timestamp, value) points per network."""

    def __init__(
        self, networks: Iterable[NetworkId], capacity: int = DEFAULT_CAPACITY
    ) -> None:
        if capacity < 1:
            raise ValueError("History capacity must be at least 1")
        self.capacity = capacity
        self._points: dict[NetworkId, deque[HistoryPoint]] = {
            network: deque(maxlen=capacity) for network in networks
        }

    def append(self, network: NetworkId, value: float, timestamp: int) -> None:
        self._points[network].append(HistoryPoint(timestamp=timestamp, value=value))

    def snapshot(self, network: NetworkId) -> tuple[HistoryPoint, ...]:
        """Points for ``network``, oldest first."""
        return tuple(self._points[network])


def bar_heights(
    points: Sequence[HistoryPoint], min_height: float = MIN_BAR_HEIGHT
) -> list[float]:
    """Trend bar heights in percent of the largest value.

    No trend is drawn for fewer than two points.
    """
    if len(points) < 2:
        return []
    peak = max(p.value for p in points)
    if peak <= 0:
        return [min_height for _ in points]
    return [max(p.value / peak * 100, min_height) for p in points]

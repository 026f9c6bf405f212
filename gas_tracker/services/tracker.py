"""Gas tracker service: owns snapshots, history, price and the scheduler."""
from __future__ import annotations

import asyncio
import logging
from dataclasses import replace

from ..chains.evm import EvmFeeTransport
from ..config import AppConfig
from ..interfaces.price_oracle import PriceOracle
from ..interfaces.transport import FeeTransport
from ..models import (
    FeeComparison,
    FeeReading,
    FeeSnapshot,
    GasCost,
    HistoryPoint,
    NetworkId,
    PriceQuote,
    now_ms,
)
from ..oracles import CoinGeckoOracle
from . import fees
from .failover import FailoverFetcher
from .history import HistoryBuffer
from .scheduler import Scheduler
from .snapshot_store import SnapshotStore

logger = logging.getLogger(__name__)


class GasTracker:
    """Polls fee metrics for every configured network.

    Callers hold a reference to one instance and read from it; nothing is
    kept in module globals.
    """

    def __init__(
        self,
        config: AppConfig,
        transport: FeeTransport | None = None,
        oracle: PriceOracle | None = None,
    ) -> None:
        self._config = config
        self._networks = dict(config.networks)

        if transport is None:
            transport = EvmFeeTransport(config.poller.priority_fee_gwei)
        self._fetcher = FailoverFetcher(transport, config.poller.attempt_deadline)
        self._oracle: PriceOracle = oracle or CoinGeckoOracle(config.price)

        self._store = SnapshotStore(self._networks)
        self._history = HistoryBuffer(self._networks, config.poller.history_capacity)
        self._price = PriceQuote()
        self._price_attempted = 0
        self._scheduler = Scheduler(self._refresh_cycle)
        self._price_scheduler = Scheduler(self._refresh_price)
        self.auto_refresh = config.poller.auto_refresh

    # ------------------------------------------------------------------
    # Read side
    # ------------------------------------------------------------------

    @property
    def networks(self) -> list[NetworkId]:
        return list(self._networks)

    def label(self, network: NetworkId) -> str:
        return self._networks[network].label or network.value

    def get_snapshot(self, network: NetworkId) -> FeeSnapshot:
        return self._store.get(network)

    def get_history(self, network: NetworkId) -> tuple[HistoryPoint, ...]:
        return self._history.snapshot(network)

    def get_price(self) -> PriceQuote:
        return replace(self._price)

    def gas_cost(self, network: NetworkId) -> GasCost:
        return fees.gas_cost(self._store.get(network).gas_price, self._price.usd)

    def gas_level(self, network: NetworkId) -> str:
        return fees.gas_level(self._store.get(network).gas_price)

    def compare(self) -> FeeComparison | None:
        prices = {n: self._store.get(n).gas_price for n in self._networks}
        return fees.compare(prices, self._price.usd)

    # ------------------------------------------------------------------
    # Refresh
    # ------------------------------------------------------------------

    async def refresh_now(self) -> None:
        """Run one refresh cycle now and wait for the fee results.

        A stale price is fetched by a separate task that the cycle does not
        wait for; use ``drain()`` to wait for it as well.
        """
        await self._scheduler.refresh_now()

    async def _refresh_cycle(self) -> None:
        if self._price_is_stale():
            self._price_attempted = now_ms()
            self._price_scheduler.trigger()
        await asyncio.gather(
            *(self._refresh_network(network) for network in self._networks)
        )

    async def _refresh_network(self, network: NetworkId) -> None:
        self._store.begin(network)
        result = await self._fetcher.fetch(network, self._networks[network].endpoints)

        if isinstance(result, FeeReading):
            self._store.apply_success(network, result)
            self._history.append(network, fees.to_gwei(result.gas_price), now_ms())
            logger.info(
                "%s: %.3f gwei (block %s) via %s",
                self.label(network),
                fees.to_gwei(result.gas_price),
                result.block_number,
                result.endpoint,
            )
        else:
            self._store.apply_failure(network, result)
            logger.error("%s: %s", self.label(network), result.message)

    def _price_is_stale(self) -> bool:
        # Keyed on the last attempt, successful or not.
        age = now_ms() - self._price_attempted
        return age > self._config.price.min_refresh_seconds * 1000

    async def _refresh_price(self) -> None:
        symbol = self._config.price.symbol
        self._price.is_loading = True
        self._price.last_error = None

        prices = await self._oracle.fetch_prices([symbol])
        usd = prices.get(symbol)
        if usd:
            self._price.usd = usd
            self._price.last_update = now_ms()
            self._price.is_loading = False
        else:
            self._price.is_loading = False
            self._price.last_error = f"Failed to fetch {symbol} price"
            logger.warning("Failed to fetch %s price", symbol)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def set_auto_refresh(self, enabled: bool, interval: float | None = None) -> None:
        self.auto_refresh = enabled
        if enabled:
            self._scheduler.start(interval or self._config.poller.interval_seconds)
        else:
            self._scheduler.stop()

    @property
    def refreshing(self) -> bool:
        return self._scheduler.running

    async def start(self) -> None:
        """Initial refresh, then auto refresh if enabled."""
        await self.refresh_now()
        if self.auto_refresh:
            self.set_auto_refresh(True)

    async def drain(self) -> None:
        """Wait for in-flight fee cycles and price fetches."""
        await self._scheduler.drain()
        await self._price_scheduler.drain()

    async def stop(self) -> None:
        self._scheduler.stop()
        await self.drain()

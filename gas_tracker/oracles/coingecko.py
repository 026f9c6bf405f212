"""CoinGecko USD price oracle."""
import logging
import ssl

import aiohttp
import certifi

from ..config import PriceConfig

logger = logging.getLogger(__name__)


class CoinGeckoOracle:
    """Fetch USD prices from the CoinGecko simple price API."""

    def __init__(self, config: PriceConfig) -> None:
        self.url = config.url
        self.coins = dict(config.coins)
        self.timeout = config.timeout

    async def fetch_prices(self, symbols: list[str] | None = None) -> dict[str, float]:
        """Fetch current USD prices.

        Args:
            symbols: Optional list of symbols to fetch. If None, fetches all
                     configured coins.
        """
        prices: dict[str, float] = {}

        coins = self.coins
        if symbols is not None:
            coins = {k: v for k, v in self.coins.items() if k in symbols}

        coin_ids = sorted(set(coins.values()))
        if not coin_ids:
            return prices

        params = {"ids": ",".join(coin_ids), "vs_currencies": "usd"}

        ssl_context = ssl.create_default_context(cafile=certifi.where())
        connector = aiohttp.TCPConnector(ssl=ssl_context)

        try:
            async with aiohttp.ClientSession(connector=connector) as session:
                async with session.get(
                    self.url,
                    params=params,
                    timeout=aiohttp.ClientTimeout(total=self.timeout),
                ) as response:
                    if response.status != 200:
                        logger.error(
                            "Error fetching prices from CoinGecko: HTTP %s",
                            response.status,
                        )
                        return prices

                    data = await response.json()

                    for symbol, coin_id in coins.items():
                        usd = data.get(coin_id, {}).get("usd")
                        if usd:
                            prices[symbol] = float(usd)
                        else:
                            logger.warning("No USD price for %s (%s)", symbol, coin_id)

                    for symbol, price in sorted(prices.items()):
                        logger.info("  %s: $%.2f", symbol, price)

        except Exception as e:
            logger.error("Error fetching prices from CoinGecko: %s", e)

        return prices

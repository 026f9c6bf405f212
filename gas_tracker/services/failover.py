"""Ordered endpoint failover for fee metrics."""
from __future__ import annotations

import asyncio
import logging
from typing import Sequence

from ..config import EndpointConfig
from ..interfaces.transport import FeeTransport
from ..models import FeeReading, FetchFailure, NetworkId

logger = logging.getLogger(__name__)

DEFAULT_ATTEMPT_DEADLINE = 10.0


class FailoverFetcher:
    """Try each endpoint in list order until one succeeds.

    Every call starts from the first endpoint; there is no memory of the
    last endpoint that worked. The first success is returned as is, later
    endpoints are not consulted. Each attempt is bounded by
    ``attempt_deadline`` on top of whatever timeout the transport applies.
    """

    def __init__(
        self,
        transport: FeeTransport,
        attempt_deadline: float = DEFAULT_ATTEMPT_DEADLINE,
    ) -> None:
        self._transport = transport
        self._deadline = attempt_deadline

    async def fetch(
        self, network: NetworkId, endpoints: Sequence[EndpointConfig]
    ) -> FeeReading | FetchFailure:
        if not endpoints:
            raise ValueError(f"No endpoints configured for {network.value}")

        attempts: list[str] = []
        last_error = "Unknown error"

        for index, endpoint in enumerate(endpoints):
            attempts.append(endpoint.url)
            logger.debug("Trying %s RPC: %s", network.value, endpoint.url)
            try:
                reading = await asyncio.wait_for(
                    self._transport.attempt(endpoint), timeout=self._deadline
                )
            except asyncio.TimeoutError:
                last_error = "Request timeout"
                logger.warning(
                    "Failed to fetch %s data from %s: %s",
                    network.value, endpoint.url, last_error,
                )
            except Exception as e:
                last_error = str(e) or type(e).__name__
                logger.warning(
                    "Failed to fetch %s data from %s: %s",
                    network.value, endpoint.url, last_error,
                )
            else:
                if index > 0:
                    logger.info(
                        "Fetched %s data from fallback endpoint %s",
                        network.value, endpoint.url,
                    )
                else:
                    logger.debug("Fetched %s data from %s", network.value, endpoint.url)
                return reading

            if index < len(endpoints) - 1:
                logger.info("Trying next endpoint...")

        return FetchFailure(
            network=network,
            message=f"All RPC endpoints failed. Last error: {last_error}",
            attempts=tuple(attempts),
        )

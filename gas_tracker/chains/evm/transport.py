"""Fee transport: gas price and latest block from one endpoint."""
from __future__ import annotations

import asyncio

from ...config import EndpointConfig
from ...models import WEI_PER_GWEI, FeeReading
from .client import EvmRpcClient, optional_hex

# Priority fee is not queried from the chain; this estimate is reported instead.
DEFAULT_PRIORITY_FEE_GWEI = 1.5


class EvmFeeTransport:
    """Issue one metrics request (gas price + latest block) to an endpoint."""

    def __init__(self, priority_fee_gwei: float = DEFAULT_PRIORITY_FEE_GWEI) -> None:
        self.priority_fee = int(priority_fee_gwei * WEI_PER_GWEI)

    async def attempt(self, endpoint: EndpointConfig) -> FeeReading:
        client = EvmRpcClient(endpoint)
        gas_price, block = await asyncio.gather(
            client.get_gas_price(), client.get_latest_block()
        )
        return FeeReading(
            gas_price=gas_price,
            base_fee=optional_hex(block.get("baseFeePerGas")),
            priority_fee=self.priority_fee,
            block_number=optional_hex(block.get("number")),
            block_timestamp=optional_hex(block.get("timestamp")),
            endpoint=endpoint.url,
        )

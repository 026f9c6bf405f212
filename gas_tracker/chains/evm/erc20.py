"""ERC-20 reads over eth_call."""
from __future__ import annotations

import asyncio
import logging
from typing import Any

from ...config import EndpointConfig
from . import abi
from .client import EvmRpcClient

logger = logging.getLogger(__name__)

# ERC-20 decimals is a uint8.
MAX_DECIMALS = 255


class Erc20Reader:
    """Read token metadata and balances from one endpoint."""

    def __init__(self, endpoint: EndpointConfig) -> None:
        self._client = EvmRpcClient(endpoint)

    async def read_metadata(self, address: str) -> dict[str, Any]:
        """Fetch name, symbol, decimals and total supply concurrently."""
        name, symbol, decimals, total_supply = await asyncio.gather(
            self._client.call(address, abi.encode_call("name")),
            self._client.call(address, abi.encode_call("symbol")),
            self._client.call(address, abi.encode_call("decimals")),
            self._client.call(address, abi.encode_call("totalSupply")),
        )
        decimals = abi.decode_uint(decimals)
        if decimals > MAX_DECIMALS:
            raise ValueError(f"Invalid decimals {decimals} for token {address}")
        return {
            "name": abi.decode_string(name),
            "symbol": abi.decode_string(symbol),
            "decimals": decimals,
            "total_supply": abi.decode_uint(total_supply),
        }

    async def read_balance(self, address: str, owner: str) -> int:
        raw = await self._client.call(address, abi.encode_call("balanceOf", owner))
        return abi.decode_uint(raw)

"""EVM JSON-RPC client for a single endpoint."""
from __future__ import annotations

import asyncio
import logging
import ssl
from typing import Any

import aiohttp
import certifi

from ...config import EndpointConfig

logger = logging.getLogger(__name__)


class RpcError(RuntimeError):
    """JSON-RPC level error returned by a node."""


class EvmRpcClient:
    """JSON-RPC client bound to one endpoint.

    Owns the per-request timeout and the low-level retry policy; switching
    to another endpoint is the caller's concern.
    """

    def __init__(self, endpoint: EndpointConfig) -> None:
        self.url = endpoint.url
        self.timeout = endpoint.timeout
        self.retry_count = endpoint.retry_count
        self.retry_delay = endpoint.retry_delay

    async def _post(self, payload: dict[str, Any]) -> dict[str, Any]:
        ssl_context = ssl.create_default_context(cafile=certifi.where())
        connector = aiohttp.TCPConnector(ssl=ssl_context)
        async with aiohttp.ClientSession(connector=connector) as session:
            async with session.post(
                self.url,
                json=payload,
                timeout=aiohttp.ClientTimeout(total=self.timeout),
            ) as response:
                if response.status != 200:
                    raise RpcError(f"HTTP {response.status}")
                return await response.json()

    async def rpc_call(self, method: str, params: list[Any]) -> Any:
        """Make an RPC call, retrying transport failures ``retry_count`` times."""
        payload = {"jsonrpc": "2.0", "id": 1, "method": method, "params": params}

        attempt = 0
        while True:
            try:
                result = await self._post(payload)
                break
            except (aiohttp.ClientError, asyncio.TimeoutError) as e:
                if attempt >= self.retry_count:
                    raise
                attempt += 1
                logger.debug(
                    "%s %s failed (%s), retry %d/%d",
                    self.url, method, e, attempt, self.retry_count,
                )
                await asyncio.sleep(self.retry_delay)

        if not isinstance(result, dict):
            raise ValueError(f"Malformed RPC response from {self.url}")
        if "error" in result:
            raise RpcError(f"RPC Error: {result['error']}")
        if "result" not in result:
            raise ValueError(f"RPC response from {self.url} has no result")
        return result["result"]

    async def get_gas_price(self) -> int:
        return _hex_to_int(await self.rpc_call("eth_gasPrice", []))

    async def get_latest_block(self) -> dict[str, Any]:
        block = await self.rpc_call("eth_getBlockByNumber", ["latest", False])
        if not isinstance(block, dict):
            raise ValueError(f"Malformed block from {self.url}")
        return block

    async def call(self, to: str, data: str) -> str:
        """Execute a read-only ``eth_call`` against the latest block."""
        return await self.rpc_call("eth_call", [{"to": to, "data": data}, "latest"])


def _hex_to_int(value: Any) -> int:
    if not isinstance(value, str) or not value.startswith("0x"):
        raise ValueError(f"Expected hex quantity, got {value!r}")
    return int(value, 16)


def optional_hex(value: Any) -> int | None:
    """Parse an optional hex quantity (missing fields stay ``None``)."""
    if value is None:
        return None
    return _hex_to_int(value)

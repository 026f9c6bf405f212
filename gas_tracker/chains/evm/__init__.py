"""EVM JSON-RPC chain support."""
from .client import EvmRpcClient, RpcError
from .erc20 import Erc20Reader
from .transport import EvmFeeTransport

__all__ = ["Erc20Reader", "EvmFeeTransport", "EvmRpcClient", "RpcError"]

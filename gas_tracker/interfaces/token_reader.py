"""Token reader protocol: ERC-20 metadata and balances."""
from typing import Any, Protocol


class TokenReader(Protocol):
    """Abstract interface for reading ERC-20 token state."""

    async def read_metadata(self, address: str) -> dict[str, Any]: ...

    async def read_balance(self, address: str, owner: str) -> int: ...

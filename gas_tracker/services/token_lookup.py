"""Collateral token lookup."""
from __future__ import annotations

import logging

from ..chains.evm.abi import format_units, is_address
from ..interfaces.token_reader import TokenReader
from ..models import TokenSnapshot

logger = logging.getLogger(__name__)


def unknown_token(address: str) -> TokenSnapshot:
    return TokenSnapshot(
        address=address,
        name="Unknown Token",
        symbol="UNKNOWN",
        decimals=18,
        total_supply="0",
        balance="0",
        verified=False,
        error="Could not fetch token information",
    )


class TokenLookup:
    """Resolve ERC-20 metadata for a search input.

    Only the most recent call may publish a result: a lookup that finishes
    after a newer one has started is dropped. Debouncing keystrokes is left
    to the caller.
    """

    def __init__(self, reader: TokenReader) -> None:
        self._reader = reader
        self._generation = 0
        self._pending = 0
        self.current: TokenSnapshot | None = None

    @property
    def is_searching(self) -> bool:
        return self._pending > 0

    def clear(self) -> None:
        self._generation += 1
        self.current = None

    async def lookup(self, address: str, owner: str | None = None) -> TokenSnapshot | None:
        """Look up ``address``; returns None when cleared or superseded."""
        address = address.strip()
        if not is_address(address):
            self.clear()
            return None

        self._generation += 1
        generation = self._generation
        self.current = None
        self._pending += 1
        try:
            snapshot = await self._resolve(address, owner)
        finally:
            self._pending -= 1

        if generation != self._generation:
            logger.debug("Dropping superseded lookup for %s", address)
            return None
        self.current = snapshot
        return snapshot

    async def _resolve(self, address: str, owner: str | None) -> TokenSnapshot:
        try:
            meta = await self._reader.read_metadata(address)
            decimals = int(meta["decimals"])
            total_supply = format_units(int(meta["total_supply"]), decimals)
        except Exception as e:
            logger.error("Token lookup failed for %s: %s", address, e)
            return unknown_token(address)

        balance = "0"
        if owner:
            try:
                balance = format_units(
                    await self._reader.read_balance(address, owner), decimals
                )
            except Exception as e:
                logger.warning("Could not fetch token balance: %s", e)

        return TokenSnapshot(
            address=address,
            name=meta["name"],
            symbol=meta["symbol"],
            decimals=decimals,
            total_supply=total_supply,
            balance=balance,
            verified=True,
        )

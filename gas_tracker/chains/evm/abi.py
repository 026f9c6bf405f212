"""Pure ABI helpers for ERC-20 reads: no I/O."""
from __future__ import annotations

import re
from decimal import Decimal

# 4-byte function selectors (keccak256 of the signature, first 4 bytes).
SELECTORS: dict[str, str] = {
    "name": "0x06fdde03",
    "symbol": "0x95d89b41",
    "decimals": "0x313ce567",
    "totalSupply": "0x18160ddd",
    "balanceOf": "0x70a08231",
}

_ADDRESS_RE = re.compile(r"^0x[0-9a-fA-F]{40}$")


def is_address(value: str) -> bool:
    """True for a 20-byte hex address with ``0x`` prefix."""
    return bool(_ADDRESS_RE.match(value))


def encode_call(function: str, *addresses: str) -> str:
    """Build calldata for a no-arg or address-arg ERC-20 view function."""
    data = SELECTORS[function]
    for address in addresses:
        if not is_address(address):
            raise ValueError(f"Not an address: {address!r}")
        data += address[2:].lower().rjust(64, "0")
    return data


def _strip(data: str) -> str:
    if not isinstance(data, str) or not data.startswith("0x"):
        raise ValueError(f"Malformed hex payload: {data!r}")
    return data[2:]


def decode_uint(data: str) -> int:
    """Decode a single uint256 return value.

    Examples:
        "0x...0012" → 18
    """
    body = _strip(data)
    if not body:
        raise ValueError("Empty return data")
    return int(body[:64], 16)


def decode_string(data: str) -> str:
    """Decode an ABI ``string`` return value.

    Falls back to ``bytes32`` decoding for legacy tokens that return a
    fixed-size, null-padded name.
    """
    body = _strip(data)
    if not body:
        raise ValueError("Empty return data")

    if len(body) >= 128:
        offset = int(body[:64], 16) * 2
        if offset + 64 <= len(body):
            length = int(body[offset:offset + 64], 16) * 2
            start = offset + 64
            if start + length <= len(body):
                return bytes.fromhex(body[start:start + length]).decode(
                    "utf-8", "replace"
                )

    return bytes.fromhex(body[:64]).rstrip(b"\x00").decode("utf-8", "replace")


def format_units(value: int, decimals: int) -> str:
    """Render an integer token amount as a decimal string.

    Examples:
        format_units(1500000000000000000, 18) → "1.5"
        format_units(0, 6) → "0"
    """
    amount = Decimal(value).scaleb(-decimals).normalize()
    return format(amount, "f")

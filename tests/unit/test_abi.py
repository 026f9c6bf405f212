"""Unit tests for ERC-20 ABI helpers."""
from __future__ import annotations

import pytest

from gas_tracker.chains.evm import abi


def _word(value: int) -> str:
    return format(value, "064x")


def _abi_string(text: str) -> str:
    data = text.encode().hex()
    padded = data.ljust(((len(data) + 63) // 64) * 64 or 64, "0")
    return "0x" + _word(32) + _word(len(text.encode())) + padded


class TestIsAddress:
    @pytest.mark.parametrize(
        "value",
        ["0x3eede3fe85f32d013e368d02db07c0662390eadd", "0x" + "A" * 40],
    )
    def test_valid(self, value: str) -> None:
        assert abi.is_address(value)

    @pytest.mark.parametrize(
        "value",
        ["", "0x", "0x123", "3eede3fe85f32d013e368d02db07c0662390eadd", "0x" + "g" * 40, "0x" + "a" * 41],
    )
    def test_invalid(self, value: str) -> None:
        assert not abi.is_address(value)


class TestEncodeCall:
    def test_no_args(self) -> None:
        assert abi.encode_call("decimals") == "0x313ce567"

    def test_address_arg_is_left_padded(self) -> None:
        owner = "0x" + "AB" * 20
        data = abi.encode_call("balanceOf", owner)
        assert data == "0x70a08231" + "0" * 24 + "ab" * 20

    def test_rejects_bad_address(self) -> None:
        with pytest.raises(ValueError):
            abi.encode_call("balanceOf", "0x123")


class TestDecode:
    def test_uint(self) -> None:
        assert abi.decode_uint("0x" + _word(18)) == 18

    def test_uint_empty_raises(self) -> None:
        with pytest.raises(ValueError):
            abi.decode_uint("0x")

    def test_malformed_raises(self) -> None:
        with pytest.raises(ValueError):
            abi.decode_uint("12")

    def test_dynamic_string(self) -> None:
        assert abi.decode_string(_abi_string("Test Token")) == "Test Token"

    def test_bytes32_string(self) -> None:
        data = "0x" + b"MKR".hex().ljust(64, "0")
        assert abi.decode_string(data) == "MKR"


class TestFormatUnits:
    def test_fraction(self) -> None:
        assert abi.format_units(1_500_000_000_000_000_000, 18) == "1.5"

    def test_whole_number_has_no_exponent(self) -> None:
        assert abi.format_units(10 * 10**6, 6) == "10"

    def test_zero(self) -> None:
        assert abi.format_units(0, 18) == "0"

    def test_zero_decimals(self) -> None:
        assert abi.format_units(42, 0) == "42"

"""Tests for coercion helpers."""

import pytest
from hexbytes import HexBytes

from dapp_rpc.exceptions import ConversionError
from dapp_rpc.utils import (
    format_path,
    is_bytes_like,
    to_big_int,
    to_hex_chain_id,
    to_rpc_quantity,
)


class TestBigNumberish:
    """Test BigNumberish normalisation."""

    @pytest.mark.parametrize(
        "value",
        ["256", "0x100", "0x0100", b"\x01\x00", bytearray(b"\x01\x00"), HexBytes("0x0100"), [1, 0], (1, 0), 256],
    )
    def test_same_magnitude_from_every_encoding(self, value):
        """Every accepted encoding of 256 normalises to the same int."""
        assert to_big_int(value) == 256

    def test_empty_hex_is_zero(self):
        assert to_big_int("0x") == 0

    def test_empty_bytes_is_zero(self):
        assert to_big_int(b"") == 0

    def test_negative_strings(self):
        assert to_big_int("-5") == -5
        assert to_big_int("-0x10") == -16

    def test_large_values_keep_precision(self):
        """Values above 2**64 are not truncated."""
        assert to_big_int("0x" + "ff" * 32) == 2**256 - 1

    @pytest.mark.parametrize(
        "value",
        [1.5, 1.0, True, "abc", "", "0xzz", "0X10", "1e3", " 1", [256], [-1], [1, "2"], {"value": 1}, None],
    )
    def test_rejects_unsupported_shapes(self, value):
        """Unrecognised shapes fail explicitly."""
        with pytest.raises(ConversionError):
            to_big_int(value)

    def test_conversion_error_is_value_error(self):
        with pytest.raises(ValueError):
            to_big_int("nope")


class TestHexChainId:
    """Test canonical chain id rendering."""

    @pytest.mark.parametrize("value", [137, "137", "0x89", "0x0089", [0x89], b"\x00\x89"])
    def test_canonical_form(self, value):
        assert to_hex_chain_id(value) == "0x89"

    def test_lowercase(self):
        assert to_hex_chain_id("0xA4B1") == "0xa4b1"

    def test_zero(self):
        assert to_hex_chain_id(0) == "0x0"

    def test_negative_raises_error(self):
        with pytest.raises(ConversionError):
            to_hex_chain_id(-1)

    def test_rpc_quantity(self):
        assert to_rpc_quantity(255) == "0xff"
        assert to_rpc_quantity(0) == "0x0"


class TestBytesLike:
    """Test the permissive byte data check."""

    @pytest.mark.parametrize("value", ["0x", "0x1234", "0xABCD", b"", b"\x00", bytearray(2), [0, 255]])
    def test_accepts_byte_data(self, value):
        assert is_bytes_like(value)

    @pytest.mark.parametrize("value", ["0x123", "0X1234", "1234", "hello", 5, None, [256], {"a": 1}])
    def test_rejects_non_byte_data(self, value):
        assert not is_bytes_like(value)


def test_format_path() -> None:
    assert format_path(("params", 0, "value")) == "params.0.value"
    assert format_path(()) == ""


def test_hex_prefix_rule_is_shared() -> None:
    """Both helpers agree that only a lowercase ``0x`` marks hex data."""
    assert is_bytes_like("0x10") and to_big_int("0x10") == 16
    assert not is_bytes_like("0X10")
    with pytest.raises(ConversionError):
        to_big_int("0X10")

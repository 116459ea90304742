"""Coercion helpers for numeric-ish and byte-like values sent by dapps."""

import re
from collections.abc import Sequence
from typing import Any

from eth_utils import big_endian_to_int, is_hexstr
from hexbytes import HexBytes

from .exceptions import ConversionError
from .types import HexChainId

_DECIMAL_RE = re.compile(r"-?[0-9]+")
_HEX_RE = re.compile(r"-?0x[0-9a-fA-F]*")


def _is_byte_array(value: Any) -> bool:
    return isinstance(value, list | tuple) and all(
        isinstance(item, int) and not isinstance(item, bool) and 0 <= item <= 255 for item in value
    )


def to_big_int(value: Any) -> int:
    """Normalise a BigNumberish value to a Python ``int``.

    Accepts ints, decimal or ``0x`` hex strings, raw bytes (big-endian) and
    arrays of byte values. Every other shape is rejected.
    """
    if isinstance(value, bool):
        raise ConversionError("Boolean is not a numeric value", value)

    if isinstance(value, int):
        return value

    if isinstance(value, str):
        if _DECIMAL_RE.fullmatch(value):
            return int(value, 10)
        if _HEX_RE.fullmatch(value):
            negative = value.startswith("-")
            digits = value[3:] if negative else value[2:]
            magnitude = int(digits, 16) if digits else 0
            return -magnitude if negative else magnitude
        raise ConversionError(f"Invalid numeric string: {value!r}", value)

    if isinstance(value, bytes | bytearray | memoryview):
        return big_endian_to_int(bytes(value))

    if isinstance(value, list | tuple):
        if not _is_byte_array(value):
            raise ConversionError("Byte arrays must only contain integers between 0 and 255", value)
        return big_endian_to_int(bytes(value))

    raise ConversionError(f"Unsupported numeric value of type {type(value).__name__}", value)


def to_rpc_quantity(value: int) -> str:
    """Render an integer as a JSON-RPC quantity (``0x`` hex, no padding)."""
    if value < 0:
        return f"-0x{-value:x}"
    return f"0x{value:x}"


def to_hex_chain_id(value: Any) -> HexChainId:
    """Return the canonical lowercase hex representation of a chain id."""
    chain_id = to_big_int(value)
    if chain_id < 0:
        raise ConversionError("Chain id cannot be negative", value)
    return HexChainId(to_rpc_quantity(chain_id))


def is_bytes_like(value: Any) -> bool:
    """Return True when ``value`` plausibly holds byte data."""
    if isinstance(value, bytes | bytearray | memoryview):
        return True

    if isinstance(value, str):
        # lowercase prefix only, matching to_big_int
        return value.startswith("0x") and is_hexstr(value) and len(value) % 2 == 0

    return _is_byte_array(value)


def bytes_to_hex(value: Any) -> str:
    """Render byte-like data as a ``0x`` hex string, leaving strings untouched."""
    if isinstance(value, str):
        return value
    return HexBytes(bytes(value)).to_0x_hex()


def format_path(path: Sequence[str | int]) -> str:
    """Join a validation location into its dotted form, e.g. ``params.0``."""
    return ".".join(str(part) for part in path)

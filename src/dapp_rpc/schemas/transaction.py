"""Transaction request schema, mirroring ethers' ``TransactionRequest``.

https://docs.ethers.org/v5/api/providers/types/#providers-TransactionRequest
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Annotated, Any

from pydantic import AfterValidator, BeforeValidator, Field, StrictBool, StrictInt

from ..types import HexChainId
from ..utils import bytes_to_hex, is_bytes_like, to_big_int, to_hex_chain_id, to_rpc_quantity
from .base import WireModel


def _check_bytes_like(value: Any) -> Any:
    if value is not None and not is_bytes_like(value):
        raise ValueError("Expected hex string or byte data")
    return value


def normalize_access_list(value: Any) -> Any:
    """Accept any AccessListish shape and return the list-of-entries form.

    https://docs.ethers.org/v5/api/providers/types/#types--access-lists
    """
    if isinstance(value, Mapping):
        return [
            {"address": address, "storageKeys": value[address]}
            for address in sorted(value, key=str)
        ]

    if isinstance(value, list | tuple):
        entries: list[Any] = []
        for item in value:
            if isinstance(item, list | tuple):
                if len(item) != 2:
                    raise ValueError("Access list pairs must be [address, storageKeys]")
                entries.append({"address": item[0], "storageKeys": item[1]})
            else:
                entries.append(item)
        return entries

    return value


BigNumberish = Annotated[int, BeforeValidator(to_big_int)]
BytesLike = Annotated[Any, AfterValidator(_check_bytes_like)]
HexadecimalNumber = Annotated[HexChainId, BeforeValidator(to_hex_chain_id)]


class AccessListEntry(WireModel):
    address: str
    storage_keys: tuple[str, ...]


AccessList = Annotated[tuple[AccessListEntry, ...], BeforeValidator(normalize_access_list)]

_QUANTITY_FIELDS = frozenset(
    {
        "nonce",
        "gas_limit",
        "gas_price",
        "value",
        "max_priority_fee_per_gas",
        "max_fee_per_gas",
    }
)


class TransactionRequest(WireModel):
    """Unsigned transaction intent submitted by a dapp.

    Numeric-ish fields are normalised to ``int``, ``chain_id`` to the
    canonical hex form. ``data`` is only checked for being plausibly byte
    data and is passed through untouched for the signer to validate.
    """

    to: str | None = None
    from_: str | None = Field(default=None, alias="from")
    nonce: BigNumberish | None = None
    gas_limit: BigNumberish | None = None
    gas_price: BigNumberish | None = None
    data: BytesLike = None
    value: BigNumberish | None = None
    chain_id: HexadecimalNumber | None = None
    type: StrictInt | None = None
    access_list: AccessList | None = None
    max_priority_fee_per_gas: BigNumberish | None = None
    max_fee_per_gas: BigNumberish | None = None
    custom_data: dict[str, Any] | None = None
    ccip_read_enabled: StrictBool | None = None

    def to_rpc_dict(self) -> dict[str, Any]:
        """Render the request in its JSON-RPC wire shape."""

        wire: dict[str, Any] = {}
        for name, field in type(self).model_fields.items():
            value = getattr(self, name)
            if value is None:
                continue

            if name in _QUANTITY_FIELDS:
                value = to_rpc_quantity(value)
            elif name == "data":
                value = bytes_to_hex(value)
            elif name == "access_list":
                value = [
                    {"address": entry.address, "storageKeys": list(entry.storage_keys)}
                    for entry in value
                ]

            wire[field.alias or name] = value
        return wire

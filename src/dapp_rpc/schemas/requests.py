"""Per-method request schemas.

Each model validates the envelope of one JSON-RPC method and derives the
fields business logic works with (``transaction``, ``message_hex``, ...)
from the positional ``params``. Failures raise ``ValidationError`` with the
violating path, e.g. ``params.0``.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import Any, ClassVar, Literal

from pydantic import ValidationError as PydanticValidationError
from pydantic import model_validator

from ..constants import HomeTab
from ..exceptions import ConversionError, ValidationError
from ..types import Address, HexChainId
from ..utils import to_hex_chain_id
from .base import EthereumRequestWithId, from_pydantic_error
from .permissions import PermissionRequest, permission_request_adapter
from .transaction import TransactionRequest

logger = logging.getLogger(__name__)

_ELEMENT_COUNTS = {1: "one element", 2: "two elements"}

# Typed data nested deeper than this is rejected before decoding
_MAX_TYPED_DATA_DEPTH = 64


def _invalid(message: str, *path: str | int, value: Any | None = None) -> ValidationError:
    return ValidationError(message, value=value, path=("params", *path))


def _require_string(params: list[Any], index: int, message: str) -> str:
    value = params[index]
    if not isinstance(value, str):
        raise _invalid(message, index, value=value)
    return value


def _exceeds_depth(text: str, limit: int) -> bool:
    """Scan JSON text for array/object nesting deeper than ``limit``."""
    depth = 0
    in_string = False
    escaped = False
    for char in text:
        if in_string:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == '"':
                in_string = False
        elif char == '"':
            in_string = True
        elif char in "[{":
            depth += 1
            if depth > limit:
                return True
        elif char in "]}":
            depth -= 1
    return False


def _decode_typed_data(typed_data: str) -> Any:
    """Decode the JSON typed data of a signing request.

    Nesting is bounded before ``json.loads`` runs, so hostile payloads fail
    with a ``params.1`` error instead of exhausting the stack.
    """
    if _exceeds_depth(typed_data, _MAX_TYPED_DATA_DEPTH):
        raise _invalid("Typed data is nested too deeply", 1)
    try:
        return json.loads(typed_data)
    except (ValueError, RecursionError) as exc:
        raise _invalid("Typed data must be valid JSON", 1, value=typed_data) from exc


def _parse_transaction(value: Any) -> TransactionRequest:
    try:
        return TransactionRequest.model_validate(value)
    except PydanticValidationError as exc:
        raise from_pydantic_error(
            exc,
            prefix=("params", 0),
            message="First element of the array must be a transaction request",
        ) from exc


# ----------------------------------------------------------------------
# Methods without params
# ----------------------------------------------------------------------
class EthChainIdRequest(EthereumRequestWithId):
    method: Literal["eth_chainId"]


class EthRequestAccountsRequest(EthereumRequestWithId):
    method: Literal["eth_requestAccounts"]


class EthAccountsRequest(EthereumRequestWithId):
    method: Literal["eth_accounts"]


class WalletGetPermissionsRequest(EthereumRequestWithId):
    method: Literal["wallet_getPermissions"]


# ----------------------------------------------------------------------
# Methods with positional params
# ----------------------------------------------------------------------
class ArrayParamsRequest(EthereumRequestWithId):
    """Base for methods whose ``params`` must be an array.

    Subclasses set ``min_params`` and implement ``_derive`` to extract their
    typed fields; the length check always runs before any indexing.
    """

    params: list[Any]

    min_params: ClassVar[int] = 1

    @model_validator(mode="before")
    @classmethod
    def _derive_from_params(cls, data: Any) -> Any:
        if not isinstance(data, Mapping):
            return data

        params = data.get("params")
        if params is None:
            raise ValidationError("Missing params: method requires a params array", path=("params",))
        if not isinstance(params, list | tuple):
            raise ValidationError("Params must be an array", value=params, path=("params",))

        params = list(params)
        if len(params) < cls.min_params:
            raise ValidationError(
                f"Params array must contain at least {_ELEMENT_COUNTS[cls.min_params]}",
                value=params,
                path=("params",),
            )

        return {**data, "params": params, **cls._derive(params)}

    @classmethod
    def _derive(cls, params: list[Any]) -> dict[str, Any]:
        return {}


class _TransactionParamsRequest(ArrayParamsRequest):
    transaction: TransactionRequest

    @classmethod
    def _derive(cls, params: list[Any]) -> dict[str, Any]:
        return {"transaction": _parse_transaction(params[0])}


class EthSendTransactionRequest(_TransactionParamsRequest):
    method: Literal["eth_sendTransaction"]


class EthSignTransactionRequest(_TransactionParamsRequest):
    method: Literal["eth_signTransaction"]


class PersonalSignRequest(ArrayParamsRequest):
    """``personal_sign``: ``[messageHex, address]``.

    The address is only required to be a string here; its format is checked
    by the signer.
    """

    method: Literal["personal_sign"]
    message_hex: str
    address: Address

    min_params: ClassVar[int] = 2

    @classmethod
    def _derive(cls, params: list[Any]) -> dict[str, Any]:
        return {
            "messageHex": _require_string(params, 0, "Message must be a hex encoded string"),
            "address": _require_string(params, 1, "Address must be a string"),
        }


class EthSignTypedDataV4Request(ArrayParamsRequest):
    """``eth_signTypedData_v4``: ``[address, typedDataJson]``.

    The typed data must carry ``domain.chainId``; it is exposed in canonical
    hex form as ``chain_id``.
    """

    method: Literal["eth_signTypedData_v4"]
    address: Address
    typed_data: str
    chain_id: HexChainId

    min_params: ClassVar[int] = 2

    @classmethod
    def _derive(cls, params: list[Any]) -> dict[str, Any]:
        address = _require_string(params, 0, "Address must be a string")
        typed_data = _require_string(params, 1, "Typed data must be a JSON encoded string")

        decoded = _decode_typed_data(typed_data)
        domain = decoded.get("domain") if isinstance(decoded, dict) else None
        raw_chain_id = domain.get("chainId") if isinstance(domain, dict) else None
        if raw_chain_id is None:
            raise _invalid("Typed data must contain a chainId", 1)

        try:
            chain_id = to_hex_chain_id(raw_chain_id)
        except ConversionError as exc:
            raise _invalid(
                f"Typed data must contain a valid chainId: {exc.message}", 1, value=raw_chain_id
            ) from exc

        return {"address": address, "typedData": typed_data, "chainId": chain_id}


class WalletSwitchEthereumChainRequest(ArrayParamsRequest):
    method: Literal["wallet_switchEthereumChain"]
    chain_id: HexChainId

    @classmethod
    def _derive(cls, params: list[Any]) -> dict[str, Any]:
        parameter = params[0]
        raw_chain_id = parameter.get("chainId") if isinstance(parameter, Mapping) else None
        if not isinstance(raw_chain_id, str):
            raise _invalid(
                "Chain id should be specified as a hexadecimal string within object",
                0,
                value=parameter,
            )

        try:
            chain_id = to_hex_chain_id(raw_chain_id)
        except ConversionError as exc:
            raise _invalid(
                f"Chain id should be specified as a hexadecimal string: {exc.message}",
                0,
                "chainId",
                value=raw_chain_id,
            ) from exc

        return {"chainId": chain_id}


class _PermissionParamsRequest(ArrayParamsRequest):
    permissions: PermissionRequest

    @classmethod
    def _derive(cls, params: list[Any]) -> dict[str, Any]:
        try:
            permissions = permission_request_adapter.validate_python(params[0])
        except PydanticValidationError as exc:
            raise from_pydantic_error(
                exc, prefix=("params", 0), message="Invalid permission request"
            ) from exc
        return {"permissions": permissions}


class WalletRequestPermissionsRequest(_PermissionParamsRequest):
    method: Literal["wallet_requestPermissions"]


class WalletRevokePermissionsRequest(_PermissionParamsRequest):
    method: Literal["wallet_revokePermissions"]


class OpenSidebarRequest(ArrayParamsRequest):
    """Wallet specific request asking the extension sidebar to open.

    An unknown or missing tab means "no preference" rather than a failure.
    """

    method: Literal["uniswap_openSidebar"]
    tab: HomeTab | None = None

    min_params: ClassVar[int] = 0

    @classmethod
    def _derive(cls, params: list[Any]) -> dict[str, Any]:
        requested = params[0] if params else None
        tab = None
        if isinstance(requested, str):
            try:
                tab = HomeTab(requested)
            except ValueError:
                logger.debug("Ignoring unknown sidebar tab %r", requested)
        return {"tab": tab}


TypedRequest = (
    EthChainIdRequest
    | EthRequestAccountsRequest
    | EthAccountsRequest
    | EthSendTransactionRequest
    | PersonalSignRequest
    | EthSignTransactionRequest
    | EthSignTypedDataV4Request
    | WalletSwitchEthereumChainRequest
    | WalletRequestPermissionsRequest
    | WalletRevokePermissionsRequest
    | WalletGetPermissionsRequest
    | OpenSidebarRequest
)

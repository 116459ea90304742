"""Dispatch raw dapp requests to their method schema."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from ..constants import ErrorCode, RequestMethod
from ..exceptions import UnsupportedMethodError, ValidationError
from .base import EthereumRequestWithId, from_pydantic_error
from .requests import (
    EthAccountsRequest,
    EthChainIdRequest,
    EthRequestAccountsRequest,
    EthSendTransactionRequest,
    EthSignTransactionRequest,
    EthSignTypedDataV4Request,
    OpenSidebarRequest,
    PersonalSignRequest,
    TypedRequest,
    WalletGetPermissionsRequest,
    WalletRequestPermissionsRequest,
    WalletRevokePermissionsRequest,
    WalletSwitchEthereumChainRequest,
)

logger = logging.getLogger(__name__)

_SUPPORTED_METHODS = frozenset(method.value for method in RequestMethod)

REQUEST_SCHEMAS: Mapping[RequestMethod, type[TypedRequest]] = {
    RequestMethod.ETH_CHAIN_ID: EthChainIdRequest,
    RequestMethod.ETH_REQUEST_ACCOUNTS: EthRequestAccountsRequest,
    RequestMethod.ETH_ACCOUNTS: EthAccountsRequest,
    RequestMethod.ETH_SEND_TRANSACTION: EthSendTransactionRequest,
    RequestMethod.PERSONAL_SIGN: PersonalSignRequest,
    RequestMethod.ETH_SIGN_TRANSACTION: EthSignTransactionRequest,
    RequestMethod.ETH_SIGN_TYPED_DATA_V4: EthSignTypedDataV4Request,
    RequestMethod.WALLET_SWITCH_ETHEREUM_CHAIN: WalletSwitchEthereumChainRequest,
    RequestMethod.WALLET_REQUEST_PERMISSIONS: WalletRequestPermissionsRequest,
    RequestMethod.WALLET_REVOKE_PERMISSIONS: WalletRevokePermissionsRequest,
    RequestMethod.WALLET_GET_PERMISSIONS: WalletGetPermissionsRequest,
    RequestMethod.OPEN_SIDEBAR: OpenSidebarRequest,
}


@dataclass(frozen=True)
class ParseResult:
    """Outcome of :func:`safe_parse_request`: exactly one of the two is set."""

    request: TypedRequest | None = None
    error: ValidationError | None = None

    @property
    def success(self) -> bool:
        return self.error is None


def is_supported_method(method: Any) -> bool:
    return isinstance(method, str) and method in _SUPPORTED_METHODS


def get_request_schema(method: Any) -> type[TypedRequest] | None:
    if not is_supported_method(method):
        return None
    return REQUEST_SCHEMAS[RequestMethod(method)]


def _with_request_id(raw: Any, request_id: str | None) -> Any:
    if request_id is None or not isinstance(raw, Mapping):
        return raw
    return {**raw, "requestId": request_id}


def parse_request_envelope(raw: Any, request_id: str | None = None) -> EthereumRequestWithId:
    """Validate the ``{method, params, requestId}`` envelope only."""

    try:
        return EthereumRequestWithId.model_validate(_with_request_id(raw, request_id))
    except PydanticValidationError as exc:
        raise from_pydantic_error(
            exc, code=ErrorCode.INVALID_REQUEST, message="Malformed request"
        ) from exc


def parse_request(raw: Any, request_id: str | None = None) -> TypedRequest:
    """Validate a raw dapp request and return its typed form.

    ``request_id`` is merged into the envelope when the transport attaches
    it out of band. Raises ``UnsupportedMethodError`` for unknown methods and
    ``ValidationError`` for malformed requests.
    """

    raw = _with_request_id(raw, request_id)
    envelope = parse_request_envelope(raw)

    schema = get_request_schema(envelope.method)
    if schema is None:
        raise UnsupportedMethodError(envelope.method)

    try:
        return schema.model_validate(raw)
    except PydanticValidationError as exc:
        raise from_pydantic_error(exc, message=f"Invalid {envelope.method} request") from exc


def safe_parse_request(raw: Any, request_id: str | None = None) -> ParseResult:
    """Like :func:`parse_request` but returns the failure instead of raising."""

    try:
        return ParseResult(request=parse_request(raw, request_id))
    except ValidationError as exc:
        logger.debug(
            "Rejected dapp request method=%s path=%s code=%s",
            raw.get("method") if isinstance(raw, Mapping) else None,
            exc.field,
            exc.code.value,
        )
        return ParseResult(error=exc)

"""Schemas for requests that come via ``window.ethereum.request``."""

from .base import EthereumRequest, EthereumRequestWithId
from .parser import (
    REQUEST_SCHEMAS,
    ParseResult,
    get_request_schema,
    is_supported_method,
    parse_request,
    parse_request_envelope,
    safe_parse_request,
)
from .permissions import (
    Caveat,
    Permission,
    PermissionRequest,
    RequestedPermission,
    build_permission,
    requested_permissions,
)
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
from .transaction import AccessListEntry, TransactionRequest

__all__ = [
    "AccessListEntry",
    "Caveat",
    "EthAccountsRequest",
    "EthChainIdRequest",
    "EthRequestAccountsRequest",
    "EthSendTransactionRequest",
    "EthSignTransactionRequest",
    "EthSignTypedDataV4Request",
    "EthereumRequest",
    "EthereumRequestWithId",
    "OpenSidebarRequest",
    "ParseResult",
    "Permission",
    "PermissionRequest",
    "PersonalSignRequest",
    "REQUEST_SCHEMAS",
    "RequestedPermission",
    "TransactionRequest",
    "TypedRequest",
    "WalletGetPermissionsRequest",
    "WalletRequestPermissionsRequest",
    "WalletRevokePermissionsRequest",
    "WalletSwitchEthereumChainRequest",
    "build_permission",
    "get_request_schema",
    "is_supported_method",
    "parse_request",
    "parse_request_envelope",
    "safe_parse_request",
]

"""dapp-rpc - dapp request validation and multi-chain provider management.

This library validates EIP-1193 requests coming from web pages into typed
request records and manages the per-chain JSON-RPC connections a wallet
uses to serve them.
"""

from .constants import ConnectionKind, ErrorCode, HomeTab, ProviderStatus, RequestMethod
from .exceptions import (
    ConversionError,
    DappRpcError,
    IdentityMismatchError,
    NetworkError,
    ProviderNotConnectedError,
    UnsupportedMethodError,
    ValidationError,
)
from .providers import (
    AccountIdentity,
    ChainRpcConfig,
    ProviderConfig,
    ProviderManager,
    RpcConnection,
    Web3ConnectionFactory,
)
from .schemas import (
    ParseResult,
    TransactionRequest,
    TypedRequest,
    parse_request,
    safe_parse_request,
)
from .utils import is_bytes_like, to_big_int, to_hex_chain_id, to_rpc_quantity

__version__ = "0.1.0"

__all__ = [
    # Enums
    "ConnectionKind",
    "ErrorCode",
    "HomeTab",
    "ProviderStatus",
    "RequestMethod",
    # Request validation
    "ParseResult",
    "TransactionRequest",
    "TypedRequest",
    "parse_request",
    "safe_parse_request",
    # Providers
    "AccountIdentity",
    "ChainRpcConfig",
    "ProviderConfig",
    "ProviderManager",
    "RpcConnection",
    "Web3ConnectionFactory",
    # Exceptions
    "DappRpcError",
    "ValidationError",
    "UnsupportedMethodError",
    "ConversionError",
    "NetworkError",
    "ProviderNotConnectedError",
    "IdentityMismatchError",
    # Utility functions
    "to_big_int",
    "to_hex_chain_id",
    "to_rpc_quantity",
    "is_bytes_like",
]

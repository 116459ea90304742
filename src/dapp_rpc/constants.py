"""Constants and enumerations shared by the request and provider layers."""

from enum import Enum, IntEnum


class RequestMethod(str, Enum):
    """JSON-RPC methods accepted from dapps via ``window.ethereum.request``."""

    ETH_CHAIN_ID = "eth_chainId"
    ETH_REQUEST_ACCOUNTS = "eth_requestAccounts"
    ETH_ACCOUNTS = "eth_accounts"
    ETH_SEND_TRANSACTION = "eth_sendTransaction"
    PERSONAL_SIGN = "personal_sign"
    ETH_SIGN_TRANSACTION = "eth_signTransaction"
    ETH_SIGN_TYPED_DATA_V4 = "eth_signTypedData_v4"
    WALLET_SWITCH_ETHEREUM_CHAIN = "wallet_switchEthereumChain"
    WALLET_REQUEST_PERMISSIONS = "wallet_requestPermissions"
    WALLET_REVOKE_PERMISSIONS = "wallet_revokePermissions"
    WALLET_GET_PERMISSIONS = "wallet_getPermissions"
    OPEN_SIDEBAR = "uniswap_openSidebar"


class HomeTab(str, Enum):
    """Wallet home tabs a dapp may ask the sidebar to open on."""

    TOKENS = "tokens"
    NFTS = "nfts"
    ACTIVITY = "activity"


class ErrorCode(str, Enum):
    """Validation failure categories."""

    UNSUPPORTED_METHOD = "unsupported_method"
    INVALID_REQUEST = "invalid_request"
    INVALID_PARAMS = "invalid_params"


# https://eips.ethereum.org/EIPS/eip-1193#provider-errors
# https://www.jsonrpc.org/specification#error_object
RPC_ERROR_CODES = {
    ErrorCode.UNSUPPORTED_METHOD: 4200,
    ErrorCode.INVALID_REQUEST: -32600,
    ErrorCode.INVALID_PARAMS: -32602,
}


class ConnectionKind(str, Enum):
    """Network connection flavours held per chain."""

    PUBLIC = "public"  # anonymous, read-only
    PRIVATE = "private"  # bound to a signing identity


class ProviderStatus(IntEnum):
    """Lifecycle status of a live connection."""

    DISCONNECTED = 0
    CONNECTED = 1
    ERROR = 2

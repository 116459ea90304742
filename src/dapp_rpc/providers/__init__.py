"""Multi-chain JSON-RPC connection management."""

from .config import ChainRpcConfig, ProviderConfig
from .connection import Connection, RpcConnection
from .factory import ConnectionFactory, Web3ConnectionFactory
from .identity import AccountIdentity, SigningIdentity
from .manager import PrivateProviderDetails, ProviderDetails, ProviderInfo, ProviderManager

__all__ = [
    "AccountIdentity",
    "ChainRpcConfig",
    "Connection",
    "ConnectionFactory",
    "PrivateProviderDetails",
    "ProviderConfig",
    "ProviderDetails",
    "ProviderInfo",
    "ProviderManager",
    "RpcConnection",
    "SigningIdentity",
    "Web3ConnectionFactory",
]

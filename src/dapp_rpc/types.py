"""Type aliases used across the dapp RPC layers."""

from eth_typing import HexStr

Address = str  # Ethereum address, format checked downstream
HexChainId = HexStr  # Canonical lowercase 0x-prefixed chain id

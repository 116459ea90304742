"""Connection factories used by the provider manager."""

from __future__ import annotations

import logging
from collections.abc import Awaitable
from typing import Protocol

from eth_account.signers.local import LocalAccount
from web3 import HTTPProvider, Web3
from web3.middleware import SignAndSendRawMiddlewareBuilder

from ..constants import ConnectionKind, ProviderStatus
from ..types import HexChainId
from ..utils import to_hex_chain_id
from .config import ProviderConfig
from .connection import Connection, RpcConnection
from .identity import SigningIdentity

logger = logging.getLogger(__name__)


class ConnectionFactory(Protocol):
    """Creates connections; returns None when the chain is not supported.

    Public connections are created synchronously. On the private path the
    manager also accepts an awaitable result.
    """

    def create(
        self,
        chain_id: HexChainId,
        kind: ConnectionKind = ConnectionKind.PUBLIC,
        signer: SigningIdentity | None = None,
    ) -> Connection | None | Awaitable[Connection | None]: ...


class Web3ConnectionFactory:
    """Build ``Web3`` HTTP connections from a :class:`ProviderConfig`."""

    def __init__(self, config: ProviderConfig) -> None:
        self.config = config.with_normalized_chain_ids()

    def create(
        self,
        chain_id: HexChainId,
        kind: ConnectionKind = ConnectionKind.PUBLIC,
        signer: SigningIdentity | None = None,
    ) -> RpcConnection | None:
        chain_id = to_hex_chain_id(chain_id)
        chain_config = self.config.chains.get(chain_id)
        if chain_config is None:
            logger.debug("No RPC configured for chain %s", chain_id)
            return None

        rpc_url = chain_config.url_for(kind)
        web3 = self._build_web3(rpc_url)

        if kind is ConnectionKind.PRIVATE and signer is not None:
            self._apply_account_middleware(web3, signer)

        status = ProviderStatus.CONNECTED
        if self.config.verify_connectivity and not web3.is_connected():
            logger.warning("Unable to reach %s RPC for chain %s at %s", kind.value, chain_id, rpc_url)
            status = ProviderStatus.ERROR

        logger.info("Created %s connection for chain %s", kind.value, chain_id)
        return RpcConnection(web3, chain_id=chain_id, kind=kind, endpoint=rpc_url, status=status)

    # ------------------------------------------------------------------
    # Internal wiring
    # ------------------------------------------------------------------
    def _build_web3(self, rpc_url: str) -> Web3:
        provider = HTTPProvider(rpc_url, request_kwargs={"timeout": self.config.request_timeout})
        return Web3(provider)

    def _apply_account_middleware(self, web3: Web3, signer: SigningIdentity) -> None:
        account = getattr(signer, "account", None)
        if not isinstance(account, LocalAccount):
            logger.debug("Signing identity exposes no local account; transactions are not relayed")
            return

        web3.middleware_onion.add(SignAndSendRawMiddlewareBuilder.build(account))  # type: ignore[arg-type]
        web3.eth.default_account = account.address

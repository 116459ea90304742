"""Per-chain cache of public and identity-bound connections."""

from __future__ import annotations

import inspect
import logging
from collections.abc import Callable
from dataclasses import dataclass

from ..constants import ConnectionKind, ProviderStatus
from ..exceptions import DappRpcError, IdentityMismatchError, ProviderNotConnectedError
from ..types import Address, HexChainId
from ..utils import to_hex_chain_id
from .connection import Connection
from .factory import ConnectionFactory
from .identity import SigningIdentity

logger = logging.getLogger(__name__)


@dataclass
class ProviderDetails:
    connection: Connection

    @property
    def status(self) -> ProviderStatus:
        return self.connection.status


@dataclass
class PrivateProviderDetails(ProviderDetails):
    # A private connection can be authenticated and thus tied to an address
    address: Address | None = None


@dataclass
class ProviderInfo:
    public: ProviderDetails | None = None
    private: PrivateProviderDetails | None = None

    def details(self) -> list[ProviderDetails]:
        return [entry for entry in (self.public, self.private) if entry is not None]


class ProviderManager:
    """Hand out connected connections per chain, creating them lazily.

    Callers ask for a connection on every use and must not keep it around:
    entries are replaced when the bound identity changes and torn down by
    :meth:`invalidate`.
    """

    def __init__(self, factory: ConnectionFactory) -> None:
        self._factory = factory
        self._providers: dict[HexChainId, ProviderInfo] = {}
        self._on_update: Callable[[], None] | None = None

    def set_on_update(self, on_update: Callable[[], None] | None) -> None:
        """Register the single mutation callback, replacing any previous one."""

        self._on_update = on_update

    @property
    def chain_ids(self) -> list[HexChainId]:
        return list(self._providers)

    def get_status(
        self, chain_id: int | str, kind: ConnectionKind = ConnectionKind.PUBLIC
    ) -> ProviderStatus:
        info = self._providers.get(to_hex_chain_id(chain_id))
        entry = None
        if info is not None:
            entry = info.private if kind is ConnectionKind.PRIVATE else info.public
        return entry.status if entry is not None else ProviderStatus.DISCONNECTED

    # ------------------------------------------------------------------
    # Public connections
    # ------------------------------------------------------------------
    def try_get_connection(self, chain_id: int | str) -> Connection | None:
        try:
            return self.get_connection(chain_id)
        except DappRpcError as exc:
            logger.debug("No public connection for chain %r: %s", chain_id, exc)
            return None

    def get_connection(self, chain_id: int | str) -> Connection:
        chain_id = to_hex_chain_id(chain_id)

        cached = self._entry(chain_id).public
        if cached is None or cached.status != ProviderStatus.CONNECTED:
            logger.debug("Creating public connection for chain %s", chain_id)
            self._create_connection(chain_id)

        details = self._entry(chain_id).public
        if details is None or details.status != ProviderStatus.CONNECTED:
            raise ProviderNotConnectedError(
                f"Public provider not connected for chain: {chain_id}",
                chain_id=chain_id,
                connection_kind=ConnectionKind.PUBLIC,
            )

        return details.connection

    # ------------------------------------------------------------------
    # Private connections
    # ------------------------------------------------------------------
    async def get_private_connection(
        self, chain_id: int | str, signer: SigningIdentity | None = None
    ) -> Connection:
        chain_id = to_hex_chain_id(chain_id)
        signer_address = await signer.get_address() if signer is not None else None

        cached = self._entry(chain_id).private
        if (
            cached is None
            or cached.address != signer_address
            or cached.status != ProviderStatus.CONNECTED
        ):
            logger.debug(
                "Creating private connection for chain %s address %s", chain_id, signer_address
            )
            await self._create_private_connection(chain_id, signer, signer_address)

        # The identity may have changed while the factory was running.
        details = self._entry(chain_id).private
        if details is None or details.status != ProviderStatus.CONNECTED:
            raise ProviderNotConnectedError(
                f"Private provider not connected for chain {chain_id}, address {signer_address}",
                chain_id=chain_id,
                connection_kind=ConnectionKind.PRIVATE,
                address=signer_address,
            )
        if details.address != signer_address:
            raise IdentityMismatchError(chain_id, signer_address, details.address)

        return details.connection

    # ------------------------------------------------------------------
    # Invalidation
    # ------------------------------------------------------------------
    def invalidate(self, chain_id: int | str) -> None:
        """Detach listeners of every connection of ``chain_id`` and drop it."""

        chain_id = to_hex_chain_id(chain_id)
        info = self._providers.get(chain_id)
        if info is None:
            logger.warning("Attempting to remove non-existent provider: %s", chain_id)
            return

        for details in info.details():
            details.connection.remove_all_listeners()

        del self._providers[chain_id]
        logger.info("Removed providers for chain %s", chain_id)
        self._notify()

    def invalidate_all(self) -> None:
        for chain_id in list(self._providers):
            self.invalidate(chain_id)

    # ------------------------------------------------------------------
    # Internal wiring
    # ------------------------------------------------------------------
    def _entry(self, chain_id: HexChainId) -> ProviderInfo:
        return self._providers.get(chain_id) or ProviderInfo()

    def _create_connection(self, chain_id: HexChainId) -> None:
        connection = self._factory.create(chain_id, ConnectionKind.PUBLIC)
        if inspect.isawaitable(connection):
            if inspect.iscoroutine(connection):
                connection.close()
            raise TypeError("Public connections must be created synchronously")
        if connection is None:
            return

        info = self._providers.setdefault(chain_id, ProviderInfo())
        if info.public is not None and info.public.connection is not connection:
            info.public.connection.remove_all_listeners()
        info.public = ProviderDetails(connection=connection)
        self._notify()

    async def _create_private_connection(
        self,
        chain_id: HexChainId,
        signer: SigningIdentity | None,
        address: Address | None,
    ) -> None:
        connection = self._factory.create(chain_id, ConnectionKind.PRIVATE, signer)
        if inspect.isawaitable(connection):
            connection = await connection
        if connection is None:
            return

        info = self._providers.setdefault(chain_id, ProviderInfo())
        if info.private is not None and info.private.connection is not connection:
            info.private.connection.remove_all_listeners()
        info.private = PrivateProviderDetails(connection=connection, address=address)
        self._notify()

    def _notify(self) -> None:
        if self._on_update is not None:
            self._on_update()

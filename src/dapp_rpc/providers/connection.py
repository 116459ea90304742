"""Live JSON-RPC connections handed out by the provider manager."""

from __future__ import annotations

import logging
from collections import defaultdict
from collections.abc import Callable
from typing import Any, Protocol

from web3 import Web3

from ..constants import ConnectionKind, ProviderStatus
from ..types import HexChainId

logger = logging.getLogger(__name__)

Listener = Callable[..., None]


class Connection(Protocol):
    """What the provider manager needs from a live connection."""

    status: ProviderStatus

    def remove_all_listeners(self) -> None: ...


class RpcConnection:
    """A ``Web3`` instance for one chain plus its event listeners."""

    def __init__(
        self,
        web3: Web3,
        *,
        chain_id: HexChainId,
        kind: ConnectionKind,
        endpoint: str,
        status: ProviderStatus = ProviderStatus.CONNECTED,
    ) -> None:
        self._web3 = web3
        self.chain_id = chain_id
        self.kind = kind
        self.endpoint = endpoint
        self.status = status
        self._listeners: defaultdict[str, list[Listener]] = defaultdict(list)

    @property
    def web3(self) -> Web3:
        return self._web3

    def is_connected(self) -> bool:
        return self._web3.is_connected()

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------
    def on(self, event: str, listener: Listener) -> None:
        self._listeners[event].append(listener)

    def off(self, event: str, listener: Listener) -> None:
        listeners = self._listeners.get(event)
        if listeners and listener in listeners:
            listeners.remove(listener)

    def emit(self, event: str, *args: Any) -> int:
        """Call every listener of ``event``; return how many were called."""

        listeners = list(self._listeners.get(event, ()))
        for listener in listeners:
            listener(*args)
        return len(listeners)

    def listener_count(self, event: str | None = None) -> int:
        if event is not None:
            return len(self._listeners.get(event, ()))
        return sum(len(listeners) for listeners in self._listeners.values())

    def remove_all_listeners(self) -> None:
        count = self.listener_count()
        self._listeners.clear()
        if count:
            logger.debug(
                "Removed %d listener(s) from %s connection for chain %s",
                count,
                self.kind.value,
                self.chain_id,
            )

    def __repr__(self) -> str:
        return (
            f"RpcConnection(chain_id={self.chain_id!r}, kind={self.kind.value!r}, "
            f"status={self.status.name})"
        )

"""Configuration containers for the provider layer."""

from __future__ import annotations

import os
import re
from collections.abc import Mapping
from dataclasses import dataclass, field

from ..constants import ConnectionKind
from ..exceptions import ConversionError, ValidationError
from ..types import HexChainId
from ..utils import to_hex_chain_id

DEFAULT_REQUEST_TIMEOUT = 10.0

ENV_PUBLIC_URL_PREFIX = "DAPP_RPC_URL_"
ENV_PRIVATE_URL_PREFIX = "DAPP_PRIVATE_RPC_URL_"
ENV_REQUEST_TIMEOUT = "DAPP_RPC_TIMEOUT"
ENV_VERIFY_CONNECTIVITY = "DAPP_RPC_VERIFY_CONNECTIVITY"

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class ChainRpcConfig:
    """RPC endpoints for a single chain."""

    public_url: str
    private_url: str | None = None

    def url_for(self, kind: ConnectionKind) -> str:
        if kind is ConnectionKind.PRIVATE and self.private_url:
            return self.private_url
        return self.public_url


@dataclass(frozen=True)
class ProviderConfig:
    """Aggregated configuration used to build chain connections."""

    chains: Mapping[int | str, ChainRpcConfig] = field(default_factory=dict)
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT
    verify_connectivity: bool = False

    def with_normalized_chain_ids(self) -> ProviderConfig:
        """Return a copy keyed by canonical hex chain ids."""

        chains: dict[HexChainId, ChainRpcConfig] = {}
        for chain_id, chain_config in self.chains.items():
            try:
                chains[to_hex_chain_id(chain_id)] = chain_config
            except ConversionError as exc:
                raise ValidationError(
                    f"Invalid chain id in provider config: {chain_id!r}",
                    field="chains",
                    value=chain_id,
                ) from exc

        return ProviderConfig(
            chains=chains,
            request_timeout=self.request_timeout,
            verify_connectivity=self.verify_connectivity,
        )

    def chain_config(self, chain_id: int | str) -> ChainRpcConfig | None:
        """Return the endpoints for ``chain_id`` or None when unsupported."""

        target = to_hex_chain_id(chain_id)
        for key, chain_config in self.chains.items():
            if to_hex_chain_id(key) == target:
                return chain_config
        return None

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> ProviderConfig:
        """Build a config from ``DAPP_RPC_URL_<chainId>`` style variables."""

        environ = os.environ if environ is None else environ

        public: dict[str, str] = {}
        private: dict[str, str] = {}
        for name, value in environ.items():
            for prefix, target in (
                (ENV_PRIVATE_URL_PREFIX, private),
                (ENV_PUBLIC_URL_PREFIX, public),
            ):
                if name.startswith(prefix) and value:
                    suffix = name[len(prefix) :]
                    if not re.fullmatch(r"[0-9]+", suffix):
                        raise ValidationError(
                            "RPC url variables must end with a decimal chain id",
                            field=name,
                            value=suffix,
                        )
                    target[to_hex_chain_id(int(suffix))] = value
                    break

        orphaned = sorted(set(private) - set(public))
        if orphaned:
            raise ValidationError(
                "Private RPC url configured without a public RPC url",
                field="chains",
                value=orphaned,
            )

        timeout_raw = environ.get(ENV_REQUEST_TIMEOUT)
        try:
            request_timeout = float(timeout_raw) if timeout_raw else DEFAULT_REQUEST_TIMEOUT
        except ValueError as exc:
            raise ValidationError(
                "Request timeout must be a number", field=ENV_REQUEST_TIMEOUT, value=timeout_raw
            ) from exc

        verify = environ.get(ENV_VERIFY_CONNECTIVITY, "").strip().lower() in _TRUTHY

        return cls(
            chains={
                chain_id: ChainRpcConfig(public_url=url, private_url=private.get(chain_id))
                for chain_id, url in public.items()
            },
            request_timeout=request_timeout,
            verify_connectivity=verify,
        )

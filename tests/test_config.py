"""Tests for provider configuration."""

import pytest

from dapp_rpc.constants import ConnectionKind
from dapp_rpc.exceptions import ValidationError
from dapp_rpc.providers import ChainRpcConfig, ProviderConfig
from dapp_rpc.providers.config import DEFAULT_REQUEST_TIMEOUT


class TestChainRpcConfig:
    def test_private_url_preferred_for_private_kind(self):
        config = ChainRpcConfig(public_url="https://public", private_url="https://private")
        assert config.url_for(ConnectionKind.PUBLIC) == "https://public"
        assert config.url_for(ConnectionKind.PRIVATE) == "https://private"

    def test_private_kind_falls_back_to_public_url(self):
        config = ChainRpcConfig(public_url="https://public")
        assert config.url_for(ConnectionKind.PRIVATE) == "https://public"


class TestProviderConfig:
    def test_chain_lookup_normalises_ids(self):
        chain = ChainRpcConfig(public_url="https://polygon")
        config = ProviderConfig(chains={137: chain})

        assert config.chain_config("0x89") is chain
        assert config.chain_config("137") is chain
        assert config.chain_config(1) is None

    def test_with_normalized_chain_ids(self):
        chain = ChainRpcConfig(public_url="https://base")
        config = ProviderConfig(chains={"8453": chain}, request_timeout=3.0, verify_connectivity=True)

        normalized = config.with_normalized_chain_ids()

        assert dict(normalized.chains) == {"0x2105": chain}
        assert normalized.request_timeout == 3.0
        assert normalized.verify_connectivity is True

    def test_with_normalized_chain_ids_rejects_invalid_keys(self):
        config = ProviderConfig(chains={"mainnet": ChainRpcConfig(public_url="https://eth")})

        with pytest.raises(ValidationError) as excinfo:
            config.with_normalized_chain_ids()

        assert excinfo.value.field == "chains"
        assert excinfo.value.value == "mainnet"

    def test_defaults(self):
        config = ProviderConfig()
        assert config.chains == {}
        assert config.request_timeout == DEFAULT_REQUEST_TIMEOUT
        assert config.verify_connectivity is False


class TestProviderConfigFromEnv:
    def test_reads_urls_and_settings(self):
        config = ProviderConfig.from_env(
            {
                "DAPP_RPC_URL_1": "https://eth",
                "DAPP_PRIVATE_RPC_URL_1": "https://eth-private",
                "DAPP_RPC_URL_137": "https://polygon",
                "DAPP_RPC_TIMEOUT": "5",
                "DAPP_RPC_VERIFY_CONNECTIVITY": "true",
                "UNRELATED": "ignored",
            }
        )

        assert set(config.chains) == {"0x1", "0x89"}
        assert config.chain_config(1) == ChainRpcConfig(
            public_url="https://eth", private_url="https://eth-private"
        )
        assert config.chain_config(137).url_for(ConnectionKind.PRIVATE) == "https://polygon"
        assert config.request_timeout == 5.0
        assert config.verify_connectivity is True

    def test_defaults_when_unset(self):
        config = ProviderConfig.from_env({})
        assert config.chains == {}
        assert config.request_timeout == DEFAULT_REQUEST_TIMEOUT
        assert config.verify_connectivity is False

    def test_reads_process_environment(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("DAPP_RPC_URL_10", "https://optimism")
        config = ProviderConfig.from_env()
        assert config.chain_config(10) == ChainRpcConfig(public_url="https://optimism")

    def test_private_url_without_public_url(self):
        with pytest.raises(ValidationError):
            ProviderConfig.from_env({"DAPP_PRIVATE_RPC_URL_1": "https://eth-private"})

    def test_non_numeric_chain_suffix(self):
        with pytest.raises(ValidationError) as excinfo:
            ProviderConfig.from_env({"DAPP_RPC_URL_MAINNET": "https://eth"})
        assert excinfo.value.field == "DAPP_RPC_URL_MAINNET"

    def test_invalid_timeout(self):
        with pytest.raises(ValidationError):
            ProviderConfig.from_env({"DAPP_RPC_URL_1": "https://eth", "DAPP_RPC_TIMEOUT": "soon"})

"""
Unit tests for token_metadata_client.client module.

Tests cover:
- ClientConfig endpoint resolution and validation
- ClientConfig.from_env
- TokenMetadataClient wiring of the read and write APIs
"""

import pytest
from solana.rpc.commitment import Finalized

from token_metadata_client import constants as const
from token_metadata_client.client import (
    ENV_CLUSTER,
    ENV_COMMITMENT,
    ENV_CU_MULTIPLIER,
    ENV_RPC_URL,
    ClientConfig,
    TokenMetadataClient,
)
from token_metadata_client.deployments import DEVNET_RPC_URL, LOCALNET_RPC_URL
from token_metadata_client.errors import InvalidInputError
from token_metadata_client.write.priority import PriorityLevel

from tests.helpers.fakes import FakeSolanaClient


class TestClientConfig:
    def test_defaults_to_devnet(self) -> None:
        assert ClientConfig().endpoint == DEVNET_RPC_URL

    def test_cluster(self) -> None:
        assert ClientConfig(cluster="localnet").endpoint == LOCALNET_RPC_URL

    def test_rpc_url_wins_over_cluster(self) -> None:
        config = ClientConfig(rpc_url="https://rpc.example.com", cluster="devnet")
        assert config.endpoint == "https://rpc.example.com"

    @pytest.mark.parametrize(
        ("kwargs", "match"),
        [
            ({"cluster": "mainnet"}, "Unknown cluster"),
            ({"commitment": "max"}, "Unknown commitment"),
            ({"compute_unit_multiplier": 0}, "compute_unit_multiplier"),
        ],
    )
    def test_rejected(self, kwargs: dict[str, object], match: str) -> None:
        with pytest.raises(InvalidInputError, match=match):
            ClientConfig(**kwargs)  # type: ignore[arg-type]

    def test_write_options(self) -> None:
        config = ClientConfig(priority=PriorityLevel.LOW, compute_unit_multiplier=1.1)
        options = config.write_options
        assert options.priority is PriorityLevel.LOW
        assert options.compute_unit_multiplier == 1.1


class TestClientConfigFromEnv:
    def test_empty_environment(self) -> None:
        config = ClientConfig.from_env({})
        assert config.rpc_url is None
        assert config.cluster is None
        assert config.commitment == "confirmed"
        assert config.compute_unit_multiplier == const.DEFAULT_COMPUTE_UNIT_MULTIPLIER

    def test_values(self) -> None:
        config = ClientConfig.from_env(
            {
                ENV_RPC_URL: "http://127.0.0.1:8899",
                ENV_CLUSTER: "localnet",
                ENV_COMMITMENT: "finalized",
                ENV_CU_MULTIPLIER: "1.5",
            }
        )
        assert config.endpoint == "http://127.0.0.1:8899"
        assert config.commitment == "finalized"
        assert config.compute_unit_multiplier == 1.5

    def test_blank_values_are_ignored(self) -> None:
        config = ClientConfig.from_env({ENV_RPC_URL: "", ENV_CU_MULTIPLIER: ""})
        assert config.endpoint == DEVNET_RPC_URL
        assert config.compute_unit_multiplier == const.DEFAULT_COMPUTE_UNIT_MULTIPLIER

    def test_bad_multiplier(self) -> None:
        with pytest.raises(InvalidInputError, match=ENV_CU_MULTIPLIER):
            ClientConfig.from_env({ENV_CU_MULTIPLIER: "fast"})

    def test_reads_process_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv(ENV_CLUSTER, "testnet")
        assert ClientConfig.from_env().cluster == "testnet"


class TestTokenMetadataClient:
    def test_shares_one_chain_reader(self, fake_client: FakeSolanaClient) -> None:
        client = TokenMetadataClient(
            config=ClientConfig(commitment="finalized"),
            client=fake_client,  # type: ignore[arg-type]
        )
        assert client.read.chain is client.chain
        assert client.write.chain is client.chain
        assert client.chain.client is fake_client
        assert client.chain.commitment == Finalized

    def test_write_options_from_config(self, fake_client: FakeSolanaClient) -> None:
        client = TokenMetadataClient(
            config=ClientConfig(priority=PriorityLevel.HIGH),
            client=fake_client,  # type: ignore[arg-type]
        )
        assert client.write.options.priority is PriorityLevel.HIGH

    def test_from_url_builds_solana_client(self) -> None:
        client = TokenMetadataClient.from_url("http://127.0.0.1:8899")
        assert client.config.endpoint == "http://127.0.0.1:8899"

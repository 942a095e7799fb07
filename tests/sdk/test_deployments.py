"""
Unit tests for token_metadata_client.deployments module.

Tests cover:
- ClusterDeployment construction and validation
- ClusterDeployment immutability
- DEFAULT_DEPLOYMENTS canonical values
"""

from dataclasses import FrozenInstanceError

import pytest

from token_metadata_client import DEFAULT_DEPLOYMENTS
from token_metadata_client.deployments import (
    DEVNET_RPC_URL,
    LOCALNET_RPC_URL,
    MAINNET_BETA_RPC_URL,
    TESTNET_RPC_URL,
    ClusterDeployment,
)


class TestClusterDeployment:
    """Tests for ClusterDeployment construction and validation."""

    def test_accepts_http_and_https(self) -> None:
        assert ClusterDeployment(cluster="localnet", rpc_url=LOCALNET_RPC_URL).rpc_url
        assert ClusterDeployment(cluster="devnet", rpc_url=DEVNET_RPC_URL).rpc_url

    @pytest.mark.parametrize("rpc_url", ["ws://127.0.0.1:8900", "api.devnet.solana.com", ""])
    def test_rejects_non_http_url(self, rpc_url: str) -> None:
        with pytest.raises(ValueError, match="rpc_url"):
            ClusterDeployment(cluster="devnet", rpc_url=rpc_url)

    def test_instance_is_immutable(self) -> None:
        deployment = ClusterDeployment(cluster="devnet", rpc_url=DEVNET_RPC_URL)
        with pytest.raises(FrozenInstanceError):
            deployment.rpc_url = LOCALNET_RPC_URL  # type: ignore[misc]


class TestDefaultDeployments:
    """Tests for DEFAULT_DEPLOYMENTS canonical values."""

    def test_clusters(self) -> None:
        assert set(DEFAULT_DEPLOYMENTS) == {"mainnet-beta", "devnet", "testnet", "localnet"}

    @pytest.mark.parametrize(
        ("cluster", "rpc_url"),
        [
            ("mainnet-beta", MAINNET_BETA_RPC_URL),
            ("devnet", DEVNET_RPC_URL),
            ("testnet", TESTNET_RPC_URL),
            ("localnet", LOCALNET_RPC_URL),
        ],
    )
    def test_values(self, cluster: str, rpc_url: str) -> None:
        deployment = DEFAULT_DEPLOYMENTS[cluster]
        assert deployment.cluster == cluster
        assert deployment.rpc_url == rpc_url

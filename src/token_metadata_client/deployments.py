from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Final, Literal

# ---------------------------------------------------------------------------
# Public RPC endpoints
# ---------------------------------------------------------------------------
MAINNET_BETA_RPC_URL: Final[str] = "https://api.mainnet-beta.solana.com"
DEVNET_RPC_URL: Final[str] = "https://api.devnet.solana.com"
TESTNET_RPC_URL: Final[str] = "https://api.testnet.solana.com"
LOCALNET_RPC_URL: Final[str] = "http://127.0.0.1:8899"


@dataclass(frozen=True, slots=True)
class ClusterDeployment:
    """
    A Solana cluster the Token Metadata program is deployed on.

    The public endpoints are rate limited; production callers should pass their own
    RPC URL.
    """

    cluster: Literal["mainnet-beta", "devnet", "testnet", "localnet"]
    rpc_url: str

    def __post_init__(self) -> None:
        if not self.rpc_url.startswith(("http://", "https://")):
            raise ValueError(f"`ClusterDeployment.rpc_url` must be an http(s) URL: {self.rpc_url}")


DEFAULT_DEPLOYMENTS: Final[Mapping[str, ClusterDeployment]] = {
    "mainnet-beta": ClusterDeployment(cluster="mainnet-beta", rpc_url=MAINNET_BETA_RPC_URL),
    "devnet": ClusterDeployment(cluster="devnet", rpc_url=DEVNET_RPC_URL),
    "testnet": ClusterDeployment(cluster="testnet", rpc_url=TESTNET_RPC_URL),
    "localnet": ClusterDeployment(cluster="localnet", rpc_url=LOCALNET_RPC_URL),
}

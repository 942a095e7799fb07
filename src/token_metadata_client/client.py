from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass

from solana.rpc.api import Client
from solana.rpc.commitment import Commitment

from . import constants as const
from .deployments import DEFAULT_DEPLOYMENTS
from .errors import InvalidInputError
from .read.reader import TokenMetadataRead
from .rpc import ChainReader
from .write.priority import PriorityLevel
from .write.transaction import RetryPolicy
from .write.writer import TokenMetadataWrite, WriteOptions

logger = logging.getLogger(__name__)

ENV_RPC_URL = "TOKEN_METADATA_RPC_URL"
ENV_CLUSTER = "TOKEN_METADATA_CLUSTER"
ENV_COMMITMENT = "TOKEN_METADATA_COMMITMENT"
ENV_CU_MULTIPLIER = "TOKEN_METADATA_CU_MULTIPLIER"

DEFAULT_CLUSTER = "devnet"
COMMITMENTS = ("processed", "confirmed", "finalized")


@dataclass(frozen=True, slots=True)
class ClientConfig:
    """
    Configuration of a :class:`TokenMetadataClient`.

    `rpc_url` wins over `cluster`; with neither, the devnet endpoint is used.
    """

    rpc_url: str | None = None
    cluster: str | None = None
    commitment: str = "confirmed"
    compute_unit_multiplier: float = const.DEFAULT_COMPUTE_UNIT_MULTIPLIER
    priority: PriorityLevel | None = None
    retry: RetryPolicy | None = None

    def __post_init__(self) -> None:
        if self.cluster is not None and self.cluster not in DEFAULT_DEPLOYMENTS:
            raise InvalidInputError(
                f"Unknown cluster {self.cluster!r}; expected one of {sorted(DEFAULT_DEPLOYMENTS)}"
            )
        if self.commitment not in COMMITMENTS:
            raise InvalidInputError(f"Unknown commitment {self.commitment!r}")
        if self.compute_unit_multiplier <= 0:
            raise InvalidInputError("compute_unit_multiplier must be positive")

    @property
    def endpoint(self) -> str:
        if self.rpc_url:
            return self.rpc_url
        return DEFAULT_DEPLOYMENTS[self.cluster or DEFAULT_CLUSTER].rpc_url

    @property
    def write_options(self) -> WriteOptions:
        return WriteOptions(
            priority=self.priority,
            retry=self.retry,
            compute_unit_multiplier=self.compute_unit_multiplier,
        )

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> ClientConfig:
        env = os.environ if environ is None else environ
        raw_multiplier = env.get(ENV_CU_MULTIPLIER)
        try:
            multiplier = (
                float(raw_multiplier)
                if raw_multiplier
                else const.DEFAULT_COMPUTE_UNIT_MULTIPLIER
            )
        except ValueError as e:
            raise InvalidInputError(
                f"{ENV_CU_MULTIPLIER} must be a number, got {raw_multiplier!r}"
            ) from e
        return cls(
            rpc_url=env.get(ENV_RPC_URL) or None,
            cluster=env.get(ENV_CLUSTER) or None,
            commitment=env.get(ENV_COMMITMENT) or "confirmed",
            compute_unit_multiplier=multiplier,
        )


class TokenMetadataClient:
    """
    Facade over the read and write APIs sharing one RPC connection.

    Construct using one of the helpers:
    - `from_url(...)` for an explicit endpoint
    - `from_cluster(...)` for a known public cluster
    - `from_env()` for environment-driven configuration
    """

    def __init__(self, *, config: ClientConfig, client: Client | None = None) -> None:
        self.config = config
        commitment = Commitment(config.commitment)
        if client is None:
            logger.debug("Connecting to %s", config.endpoint)
            client = Client(config.endpoint, commitment=commitment)
        self.chain = ChainReader(client, commitment=commitment)
        self.read = TokenMetadataRead(self.chain)
        self.write = TokenMetadataWrite(self.chain, config.write_options)

    # ------------------------------------------------------------------
    # Constructors
    # ------------------------------------------------------------------
    @classmethod
    def from_url(
        cls, rpc_url: str, *, commitment: str = "confirmed"
    ) -> TokenMetadataClient:
        return cls(config=ClientConfig(rpc_url=rpc_url, commitment=commitment))

    @classmethod
    def from_cluster(cls, cluster: str) -> TokenMetadataClient:
        return cls(config=ClientConfig(cluster=cluster))

    @classmethod
    def from_env(cls) -> TokenMetadataClient:
        return cls(config=ClientConfig.from_env())

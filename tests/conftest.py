import os
from collections.abc import Callable

import pytest
from solders.keypair import Keypair
from solders.pubkey import Pubkey

from token_metadata_client.derive import derive_metadata_pda
from token_metadata_client.models import TokenStandard
from token_metadata_client.rpc import ChainReader

from .helpers.factories import metadata_bytes
from .helpers.fakes import FakeSolanaClient

LOCALNET_URL_ENV = "SOLANA_LOCALNET_URL"


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    if os.environ.get(LOCALNET_URL_ENV):
        return
    skip = pytest.mark.skip(reason=f"{LOCALNET_URL_ENV} is not set")
    for item in items:
        if "localnet" in item.keywords:
            item.add_marker(skip)


@pytest.fixture
def fake_client() -> FakeSolanaClient:
    return FakeSolanaClient()


@pytest.fixture
def chain(fake_client: FakeSolanaClient) -> ChainReader:
    return ChainReader(fake_client)  # type: ignore[arg-type]


@pytest.fixture
def authority() -> Keypair:
    return Keypair()


@pytest.fixture
def payer() -> Keypair:
    return Keypair()


@pytest.fixture
def mint() -> Pubkey:
    return Pubkey.new_unique()


@pytest.fixture
def put_metadata(fake_client: FakeSolanaClient) -> Callable[..., bytes]:
    """Store a metadata account for a mint; keyword arguments go to `metadata_bytes`."""

    def _put(mint: Pubkey, **kwargs: object) -> bytes:
        kwargs.setdefault("token_standard", TokenStandard.NON_FUNGIBLE)
        data = metadata_bytes(mint=mint, **kwargs)  # type: ignore[arg-type]
        fake_client.accounts[derive_metadata_pda(mint)] = data
        return data

    return _put

"""
Fetch-and-decode helpers.

Functions taking an explicit account address decode that account; the ``*_from_mint``
variants derive the address from the mint first. Address parameters accept any
:data:`~token_metadata_client.codec.AddressLike`.
"""

from __future__ import annotations

import logging

from ..accounts import (
    CollectionAuthorityRecord,
    Edition,
    EditionMarker,
    MasterEdition,
    Metadata,
    MetadataDelegateRecord,
    MintAccount,
    TokenAccount,
    TokenRecord,
    UpgradeableLoaderState,
    UseAuthorityRecord,
)
from ..codec import AddressLike, to_pubkey
from ..derive import (
    derive_edition_marker_pda,
    derive_edition_pda,
    derive_metadata_pda,
    derive_token_record_pda,
)
from ..rpc import ChainReader

logger = logging.getLogger(__name__)


def decode_metadata(chain: ChainReader, address: AddressLike) -> Metadata:
    address = to_pubkey(address)
    logger.debug("Decoding metadata account %s", address)
    return Metadata.parse(chain.get_account_data(address))


def decode_metadata_from_mint(chain: ChainReader, mint: AddressLike) -> Metadata:
    return decode_metadata(chain, derive_metadata_pda(to_pubkey(mint)))


def decode_master_edition(chain: ChainReader, address: AddressLike) -> MasterEdition:
    return MasterEdition.parse(chain.get_account_data(to_pubkey(address)))


def decode_master_edition_from_mint(chain: ChainReader, mint: AddressLike) -> MasterEdition:
    return decode_master_edition(chain, derive_edition_pda(to_pubkey(mint)))


def decode_edition(chain: ChainReader, address: AddressLike) -> Edition:
    return Edition.parse(chain.get_account_data(to_pubkey(address)))


def decode_edition_from_mint(chain: ChainReader, mint: AddressLike) -> Edition:
    """Decode the print edition of `mint` (not its master edition)."""
    return decode_edition(chain, derive_edition_pda(to_pubkey(mint)))


def decode_edition_marker(chain: ChainReader, address: AddressLike) -> EditionMarker:
    return EditionMarker.parse(chain.get_account_data(to_pubkey(address)))


def decode_edition_marker_from_mint(
    chain: ChainReader, mint: AddressLike, edition_number: int
) -> EditionMarker:
    """Decode the marker covering `edition_number` of the master edition `mint`."""
    return decode_edition_marker(
        chain, derive_edition_marker_pda(to_pubkey(mint), edition_number)
    )


def decode_mint(chain: ChainReader, mint: AddressLike) -> MintAccount:
    return MintAccount.parse(chain.get_account_data(to_pubkey(mint)))


def decode_token(chain: ChainReader, token: AddressLike) -> TokenAccount:
    return TokenAccount.parse(chain.get_account_data(to_pubkey(token)))


def decode_token_record(chain: ChainReader, address: AddressLike) -> TokenRecord:
    return TokenRecord.parse(chain.get_account_data(to_pubkey(address)))


def decode_token_record_from_mint(
    chain: ChainReader, mint: AddressLike, token: AddressLike | None = None
) -> TokenRecord:
    """
    Decode the token record of (`mint`, `token`).

    When `token` is omitted the single holder of `mint` is located first, so this only
    works for non-fungibles.
    """
    mint = to_pubkey(mint)
    token_pk = chain.find_single_holder(mint) if token is None else to_pubkey(token)
    return decode_token_record(chain, derive_token_record_pda(mint, token_pk))


def decode_metadata_delegate(
    chain: ChainReader, address: AddressLike
) -> MetadataDelegateRecord:
    return MetadataDelegateRecord.parse(chain.get_account_data(to_pubkey(address)))


def decode_collection_authority_record(
    chain: ChainReader, address: AddressLike
) -> CollectionAuthorityRecord:
    return CollectionAuthorityRecord.parse(chain.get_account_data(to_pubkey(address)))


def decode_use_authority_record(
    chain: ChainReader, address: AddressLike
) -> UseAuthorityRecord:
    return UseAuthorityRecord.parse(chain.get_account_data(to_pubkey(address)))


def decode_bpf_loader_upgradeable_state(
    chain: ChainReader, address: AddressLike
) -> UpgradeableLoaderState:
    return UpgradeableLoaderState.parse(chain.get_account_data(to_pubkey(address)))

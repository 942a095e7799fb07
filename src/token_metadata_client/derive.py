"""
Program-derived addresses used by the Token Metadata program.

All functions are pure: they never touch the network.
"""

from __future__ import annotations

from collections.abc import Sequence

from solders.pubkey import Pubkey
from spl.token.instructions import get_associated_token_address

from . import constants as const
from .models import MetadataDelegateRole


def derive_generic_pda(
    seeds: Sequence[bytes], program_id: Pubkey = const.TOKEN_METADATA_PROGRAM_ID
) -> Pubkey:
    """Find the canonical (highest-bump) program address for `seeds` under `program_id`."""
    return Pubkey.find_program_address(list(seeds), program_id)[0]


def _metadata_seeds(mint: Pubkey) -> list[bytes]:
    return [const.PREFIX, bytes(const.TOKEN_METADATA_PROGRAM_ID), bytes(mint)]


def derive_metadata_pda(mint: Pubkey) -> Pubkey:
    return derive_generic_pda(_metadata_seeds(mint))


def derive_edition_pda(mint: Pubkey) -> Pubkey:
    """Master edition or print edition account of `mint` (both share the same seeds)."""
    return derive_generic_pda([*_metadata_seeds(mint), const.EDITION])


def derive_edition_marker_pda(mint: Pubkey, edition_number: int) -> Pubkey:
    """
    Edition marker tracking prints of the master edition `mint`.

    Each marker covers 248 consecutive edition numbers.
    """
    if edition_number < 0:
        raise ValueError("edition_number must be non-negative")
    marker = str(edition_number // const.EDITION_MARKER_BIT_SIZE).encode("ascii")
    return derive_generic_pda([*_metadata_seeds(mint), const.EDITION, marker])


def derive_token_record_pda(mint: Pubkey, token: Pubkey) -> Pubkey:
    return derive_generic_pda(
        [*_metadata_seeds(mint), const.TOKEN_RECORD_SEED, bytes(token)]
    )


def derive_metadata_delegate_record_pda(
    mint: Pubkey,
    role: MetadataDelegateRole,
    update_authority: Pubkey,
    delegate: Pubkey,
) -> Pubkey:
    return derive_generic_pda(
        [
            *_metadata_seeds(mint),
            role.seed,
            bytes(update_authority),
            bytes(delegate),
        ]
    )


def derive_collection_authority_record_pda(mint: Pubkey, authority: Pubkey) -> Pubkey:
    return derive_generic_pda(
        [*_metadata_seeds(mint), const.COLLECTION_AUTHORITY, bytes(authority)]
    )


def derive_use_authority_record_pda(mint: Pubkey, use_authority: Pubkey) -> Pubkey:
    return derive_generic_pda(
        [*_metadata_seeds(mint), const.USER, bytes(use_authority)]
    )


def derive_cmv2_pda(candy_machine: Pubkey) -> Pubkey:
    """Creator address a Candy Machine v2 signs with when minting."""
    return derive_generic_pda(
        [const.CANDY_MACHINE, bytes(candy_machine)], const.CANDY_MACHINE_V2_PROGRAM_ID
    )


def derive_associated_token_address(owner: Pubkey, mint: Pubkey) -> Pubkey:
    return get_associated_token_address(owner, mint)

"""
Program-account scans over Token Metadata and SPL token accounts.

Metadata accounts are matched on their fixed byte layout: the update authority
starts at offset 1 and the `k`-th creator address at ``326 + 32 * k`` (valid as long
as name, symbol and uri are stored at their maximum padded length, which the
program does for every account it creates).
"""

from __future__ import annotations

import logging

from solana.rpc.types import MemcmpOpts
from solders.pubkey import Pubkey

from . import constants as const
from .accounts import Metadata, TokenAccount
from .codec import AddressLike, to_pubkey
from .errors import InvalidInputError
from .rpc import ChainReader

logger = logging.getLogger(__name__)


def creator_offset(position: int) -> int:
    if not 0 <= position < const.MAX_CREATOR_LIMIT:
        raise InvalidInputError(
            f"Creator position must be in 0..{const.MAX_CREATOR_LIMIT - 1}"
        )
    return const.OFFSET_TO_CREATORS + position * const.PUBKEY_LENGTH


def get_metadata_accounts_by_update_authority(
    chain: ChainReader, update_authority: AddressLike
) -> list[tuple[Pubkey, bytes]]:
    authority = to_pubkey(update_authority)
    accounts = chain.get_program_accounts(
        const.TOKEN_METADATA_PROGRAM_ID,
        filters=[
            MemcmpOpts(offset=const.OFFSET_TO_UPDATE_AUTHORITY, bytes=str(authority))
        ],
    )
    logger.info(
        "Found %d metadata accounts with update authority %s", len(accounts), authority
    )
    return accounts


def get_metadata_accounts_by_creator(
    chain: ChainReader, creator: AddressLike, position: int = 0
) -> list[tuple[Pubkey, bytes]]:
    creator_pk = to_pubkey(creator)
    accounts = chain.get_program_accounts(
        const.TOKEN_METADATA_PROGRAM_ID,
        filters=[MemcmpOpts(offset=creator_offset(position), bytes=str(creator_pk))],
    )
    logger.info(
        "Found %d metadata accounts with creator %s at position %d",
        len(accounts),
        creator_pk,
        position,
    )
    return accounts


def get_holder_token_accounts(
    chain: ChainReader, mint: AddressLike
) -> list[tuple[Pubkey, bytes]]:
    mint_pk = to_pubkey(mint)
    return chain.get_program_accounts(
        const.SPL_TOKEN_PROGRAM_ID,
        filters=[
            MemcmpOpts(offset=0, bytes=str(mint_pk)),
            const.TOKEN_ACCOUNT_SIZE,
        ],
    )


def decode_metadata_accounts(
    accounts: list[tuple[Pubkey, bytes]],
) -> list[tuple[Pubkey, Metadata]]:
    return [(address, Metadata.parse(data)) for address, data in accounts]


def decode_holder_accounts(
    accounts: list[tuple[Pubkey, bytes]], *, non_zero: bool = True
) -> list[tuple[Pubkey, TokenAccount]]:
    """Decode holder token accounts, dropping empty ones unless `non_zero` is False."""
    decoded = [(address, TokenAccount.parse(data)) for address, data in accounts]
    if non_zero:
        decoded = [(address, t) for address, t in decoded if t.amount > 0]
    return decoded

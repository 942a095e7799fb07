"""
Unit tests for token_metadata_client.snapshot.

Tests cover:
- Memcmp filters used to scan metadata by update authority and creator
- The fixed creator offset
- Holder token-account scans and decoding
"""

import pytest
from solana.rpc.types import MemcmpOpts
from solders.pubkey import Pubkey

from token_metadata_client import constants as const
from token_metadata_client.errors import InvalidInputError
from token_metadata_client.models import Creator
from token_metadata_client.rpc import ChainReader
from token_metadata_client.snapshot import (
    creator_offset,
    decode_holder_accounts,
    decode_metadata_accounts,
    get_holder_token_accounts,
    get_metadata_accounts_by_creator,
    get_metadata_accounts_by_update_authority,
)

from tests.helpers.factories import metadata_bytes, token_account_bytes
from tests.helpers.fakes import FakeSolanaClient


class TestCreatorOffset:
    def test_first_creator_offset(self) -> None:
        assert creator_offset(0) == 326

    def test_offset_matches_padded_layout(self) -> None:
        creator = Pubkey.new_unique()
        data = metadata_bytes(creators=[Creator(creator, share=100)])
        assert data[326 : 326 + 32] == bytes(creator)

    def test_later_positions(self) -> None:
        assert creator_offset(4) == 326 + 4 * 32

    @pytest.mark.parametrize("position", [-1, 5])
    def test_position_range(self, position: int) -> None:
        with pytest.raises(InvalidInputError):
            creator_offset(position)


class TestScans:
    def test_by_update_authority(self, fake_client: FakeSolanaClient, chain: ChainReader) -> None:
        authority = Pubkey.new_unique()
        get_metadata_accounts_by_update_authority(chain, authority)
        call = fake_client.program_account_calls[0]
        assert call["program_id"] == const.TOKEN_METADATA_PROGRAM_ID
        assert call["filters"] == [MemcmpOpts(offset=1, bytes=str(authority))]

    def test_by_creator(self, fake_client: FakeSolanaClient, chain: ChainReader) -> None:
        creator = Pubkey.new_unique()
        get_metadata_accounts_by_creator(chain, str(creator), position=1)
        call = fake_client.program_account_calls[0]
        assert call["filters"] == [MemcmpOpts(offset=358, bytes=str(creator))]

    def test_holders(self, fake_client: FakeSolanaClient, chain: ChainReader) -> None:
        mint = Pubkey.new_unique()
        get_holder_token_accounts(chain, mint)
        call = fake_client.program_account_calls[0]
        assert call["program_id"] == const.SPL_TOKEN_PROGRAM_ID
        assert call["filters"] == [MemcmpOpts(offset=0, bytes=str(mint)), 165]

    def test_decode_metadata_accounts(
        self, fake_client: FakeSolanaClient, chain: ChainReader
    ) -> None:
        address, mint = Pubkey.new_unique(), Pubkey.new_unique()
        fake_client.program_accounts = [(address, metadata_bytes(mint=mint))]
        decoded = decode_metadata_accounts(
            get_metadata_accounts_by_update_authority(chain, Pubkey.new_unique())
        )
        assert [(a, md.mint) for a, md in decoded] == [(address, mint)]

    def test_decode_holders_drops_empty_accounts(self) -> None:
        mint = Pubkey.new_unique()
        full, empty = Pubkey.new_unique(), Pubkey.new_unique()
        accounts = [
            (full, token_account_bytes(mint=mint, owner=Pubkey.new_unique(), amount=1)),
            (empty, token_account_bytes(mint=mint, owner=Pubkey.new_unique(), amount=0)),
        ]
        assert [a for a, _ in decode_holder_accounts(accounts)] == [full]
        assert len(decode_holder_accounts(accounts, non_zero=False)) == 2

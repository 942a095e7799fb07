"""
Unit tests for token_metadata_client.codec module.

Tests cover:
- to_pubkey over every accepted address form
- AddressParseError for malformed input
- PubkeyAdapter inside borsh layouts
- strip_padding
"""

import pytest
from solders.keypair import Keypair
from solders.pubkey import Pubkey

from token_metadata_client import AddressParseError, InvalidInputError
from token_metadata_client.codec import (
    PubkeyAdapter,
    strip_padding,
    to_optional_pubkey,
    to_pubkey,
)

ADDRESS = "metaqbxxUerdq28cj1RbAWkYQm3ybzjb6a8bt518x1s"


class TestToPubkey:
    """Tests for to_pubkey."""

    def test_pubkey_is_returned_as_is(self) -> None:
        pk = Pubkey.new_unique()
        assert to_pubkey(pk) is pk

    def test_base58_string(self) -> None:
        assert str(to_pubkey(ADDRESS)) == ADDRESS

    def test_base58_string_is_stripped(self) -> None:
        assert str(to_pubkey(f"  {ADDRESS}\n")) == ADDRESS

    def test_raw_bytes(self) -> None:
        pk = Pubkey.new_unique()
        assert to_pubkey(bytes(pk)) == pk
        assert to_pubkey(bytearray(bytes(pk))) == pk

    def test_keypair(self) -> None:
        kp = Keypair()
        assert to_pubkey(kp) == kp.pubkey()

    @pytest.mark.parametrize("bad", ["", "not-an-address", "0OIl", ADDRESS + "x"])
    def test_invalid_string(self, bad: str) -> None:
        with pytest.raises(AddressParseError, match="Invalid base58 address"):
            to_pubkey(bad)

    def test_wrong_byte_length(self) -> None:
        with pytest.raises(AddressParseError, match="32 bytes"):
            to_pubkey(b"\x01" * 31)

    def test_unsupported_type(self) -> None:
        with pytest.raises(AddressParseError, match="int"):
            to_pubkey(42)

    def test_parse_error_is_invalid_input(self) -> None:
        with pytest.raises(InvalidInputError):
            to_pubkey("nope")

    def test_optional(self) -> None:
        assert to_optional_pubkey(None) is None
        assert str(to_optional_pubkey(ADDRESS)) == ADDRESS


class TestPubkeyAdapter:
    """PubkeyAdapter round-trips through its 32-byte encoding."""

    def test_build_and_parse(self) -> None:
        adapter = PubkeyAdapter()
        pk = Pubkey.new_unique()
        raw = adapter.build(pk)
        assert raw == bytes(pk)
        assert adapter.parse(raw) == pk


class TestStripPadding:
    def test_strips_trailing_nuls(self) -> None:
        assert strip_padding("Name\x00\x00\x00") == "Name"

    def test_keeps_inner_text(self) -> None:
        assert strip_padding("A B") == "A B"

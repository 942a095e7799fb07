from __future__ import annotations

from dataclasses import dataclass

from solders.pubkey import Pubkey

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
from ..check import MetadataValue, check_metadata_value
from ..codec import AddressLike, to_pubkey
from ..derive import (
    derive_collection_authority_record_pda,
    derive_metadata_delegate_record_pda,
    derive_use_authority_record_pda,
)
from ..models import MetadataDelegateRole
from ..rpc import ChainReader
from . import decode
from .rule_set import RuleSet, decode_rule_set


@dataclass(slots=True)
class TokenMetadataRead:
    """
    Unified read API.

    Every method performs a single account fetch (plus a holder lookup where noted)
    and returns an immutable snapshot.
    """

    chain: ChainReader

    # ------------------------------------------------------------------
    # Metadata and editions
    # ------------------------------------------------------------------

    def metadata(self, mint: AddressLike) -> Metadata:
        return decode.decode_metadata_from_mint(self.chain, mint)

    def master_edition(self, mint: AddressLike) -> MasterEdition:
        return decode.decode_master_edition_from_mint(self.chain, mint)

    def edition(self, mint: AddressLike) -> Edition:
        return decode.decode_edition_from_mint(self.chain, mint)

    def edition_marker(self, mint: AddressLike, edition_number: int) -> EditionMarker:
        return decode.decode_edition_marker_from_mint(self.chain, mint, edition_number)

    def check(self, mint: AddressLike, value: MetadataValue | str) -> bool:
        """Compare one field of `mint`'s metadata against a ``key=value`` expectation."""
        if isinstance(value, str):
            value = MetadataValue.parse(value)
        return check_metadata_value(self.metadata(mint), value)

    # ------------------------------------------------------------------
    # SPL token
    # ------------------------------------------------------------------

    def mint(self, mint: AddressLike) -> MintAccount:
        return decode.decode_mint(self.chain, mint)

    def token(self, token: AddressLike) -> TokenAccount:
        return decode.decode_token(self.chain, token)

    def holder(self, mint: AddressLike) -> Pubkey:
        """Token account holding the single unit of a non-fungible `mint`."""
        return self.chain.find_single_holder(to_pubkey(mint))

    # ------------------------------------------------------------------
    # Delegates and authorities
    # ------------------------------------------------------------------

    def token_record(
        self, mint: AddressLike, token: AddressLike | None = None
    ) -> TokenRecord:
        return decode.decode_token_record_from_mint(self.chain, mint, token)

    def metadata_delegate(
        self,
        mint: AddressLike,
        role: MetadataDelegateRole,
        update_authority: AddressLike,
        delegate: AddressLike,
    ) -> MetadataDelegateRecord:
        address = derive_metadata_delegate_record_pda(
            to_pubkey(mint), role, to_pubkey(update_authority), to_pubkey(delegate)
        )
        return decode.decode_metadata_delegate(self.chain, address)

    def collection_authority_record(
        self, mint: AddressLike, authority: AddressLike
    ) -> CollectionAuthorityRecord:
        address = derive_collection_authority_record_pda(
            to_pubkey(mint), to_pubkey(authority)
        )
        return decode.decode_collection_authority_record(self.chain, address)

    def use_authority_record(
        self, mint: AddressLike, use_authority: AddressLike
    ) -> UseAuthorityRecord:
        address = derive_use_authority_record_pda(
            to_pubkey(mint), to_pubkey(use_authority)
        )
        return decode.decode_use_authority_record(self.chain, address)

    # ------------------------------------------------------------------
    # Programs
    # ------------------------------------------------------------------

    def rule_set(self, address: AddressLike, revision: int | None = None) -> RuleSet:
        return decode_rule_set(self.chain, address, revision)

    def program_state(self, address: AddressLike) -> UpgradeableLoaderState:
        return decode.decode_bpf_loader_upgradeable_state(self.chain, address)

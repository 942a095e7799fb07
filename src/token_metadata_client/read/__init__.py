"""Read API: decoding Token Metadata and SPL accounts fetched over RPC."""

from .decode import (
    decode_bpf_loader_upgradeable_state,
    decode_collection_authority_record,
    decode_edition,
    decode_edition_from_mint,
    decode_edition_marker,
    decode_edition_marker_from_mint,
    decode_master_edition,
    decode_master_edition_from_mint,
    decode_metadata,
    decode_metadata_delegate,
    decode_metadata_from_mint,
    decode_mint,
    decode_token,
    decode_token_record,
    decode_token_record_from_mint,
    decode_use_authority_record,
)
from .reader import TokenMetadataRead
from .rule_set import RuleSet, decode_rule_set

__all__ = [
    "RuleSet",
    "TokenMetadataRead",
    "decode_bpf_loader_upgradeable_state",
    "decode_collection_authority_record",
    "decode_edition",
    "decode_edition_from_mint",
    "decode_edition_marker",
    "decode_edition_marker_from_mint",
    "decode_master_edition",
    "decode_master_edition_from_mint",
    "decode_metadata",
    "decode_metadata_delegate",
    "decode_metadata_from_mint",
    "decode_mint",
    "decode_token",
    "decode_token_record",
    "decode_token_record_from_mint",
    "decode_rule_set",
    "decode_use_authority_record",
]

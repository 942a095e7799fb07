"""
Borsh layouts for Token Metadata accounts and instruction arguments.

Structs are declared with ``borsh_construct``; SPL and loader accounts (which use
fixed-width ``COption`` / bincode encodings) are declared with plain ``construct``.
Tagged unions are encoded by hand in :mod:`token_metadata_client.models` since
their variants carry heterogeneous payloads.
"""

from __future__ import annotations

from borsh_construct import U8, U16, U64, Bool, CStruct, Option, String, Vec
from construct import Bytes, Flag, Int8ul, Int32ul, Int64ul, Struct

from .codec import PubkeyAdapter

PUBKEY = PubkeyAdapter()

# ---------------------------------------------------------------------------
# Shared data types
# ---------------------------------------------------------------------------
CREATOR = CStruct(
    "address" / PUBKEY,
    "verified" / Bool,
    "share" / U8,
)

COLLECTION = CStruct(
    "verified" / Bool,
    "key" / PUBKEY,
)

USES = CStruct(
    "use_method" / U8,
    "remaining" / U64,
    "total" / U64,
)

DATA = CStruct(
    "name" / String,
    "symbol" / String,
    "uri" / String,
    "seller_fee_basis_points" / U16,
    "creators" / Option(Vec(CREATOR)),
)

DATA_V2 = CStruct(
    "name" / String,
    "symbol" / String,
    "uri" / String,
    "seller_fee_basis_points" / U16,
    "creators" / Option(Vec(CREATOR)),
    "collection" / Option(COLLECTION),
    "uses" / Option(USES),
)

OPTION_U8 = Option(U8)
OPTION_U64 = Option(U64)
OPTION_BOOL = Option(Bool)
OPTION_PUBKEY = Option(PUBKEY)
OPTION_COLLECTION = Option(COLLECTION)
OPTION_USES = Option(USES)
OPTION_DATA = Option(DATA)
OPTION_DATA_V2 = Option(DATA_V2)
OPTION_CREATORS = Option(Vec(CREATOR))
BYTES_8 = Bytes(8)
BYTES_32 = Bytes(32)
VEC_BYTES = Vec(Vec(U8))
VEC_BYTES_32 = Vec(BYTES_32)
VEC_U64 = Vec(U64)


# ---------------------------------------------------------------------------
# Token Metadata accounts
# ---------------------------------------------------------------------------
# Fixed head of a metadata account; the optional tail is parsed field by field
# because older accounts end before it.
METADATA_HEAD = CStruct(
    "key" / U8,
    "update_authority" / PUBKEY,
    "mint" / PUBKEY,
    "data" / DATA,
    "primary_sale_happened" / Bool,
    "is_mutable" / Bool,
)

MASTER_EDITION = CStruct(
    "key" / U8,
    "supply" / U64,
    "max_supply" / OPTION_U64,
)

EDITION = CStruct(
    "key" / U8,
    "parent" / PUBKEY,
    "edition" / U64,
)

EDITION_MARKER = CStruct(
    "key" / U8,
    "ledger" / Bytes(31),
)

TOKEN_RECORD = CStruct(
    "key" / U8,
    "bump" / U8,
    "state" / U8,
    "rule_set_revision" / OPTION_U64,
    "delegate" / OPTION_PUBKEY,
    "delegate_role" / OPTION_U8,
    "locked_transfer" / OPTION_PUBKEY,
)

METADATA_DELEGATE_RECORD = CStruct(
    "key" / U8,
    "bump" / U8,
    "mint" / PUBKEY,
    "delegate" / PUBKEY,
    "update_authority" / PUBKEY,
)

COLLECTION_AUTHORITY_RECORD = CStruct(
    "key" / U8,
    "bump" / U8,
    "update_authority" / OPTION_PUBKEY,
)

USE_AUTHORITY_RECORD = CStruct(
    "key" / U8,
    "allowed_uses" / U64,
    "bump" / U8,
)


# ---------------------------------------------------------------------------
# Rule sets
# ---------------------------------------------------------------------------
RULE_SET_HEADER = CStruct(
    "key" / U8,
    "rev_map_version_location" / U64,
)

RULE_SET_REVISION_MAP = CStruct(
    "rule_set_revisions" / VEC_U64,
)


# ---------------------------------------------------------------------------
# SPL token accounts (Pack layout, COption = u32 tag + value)
# ---------------------------------------------------------------------------
SPL_MINT = Struct(
    "mint_authority_option" / Int32ul,
    "mint_authority" / PUBKEY,
    "supply" / Int64ul,
    "decimals" / Int8ul,
    "is_initialized" / Flag,
    "freeze_authority_option" / Int32ul,
    "freeze_authority" / PUBKEY,
)

SPL_TOKEN_ACCOUNT = Struct(
    "mint" / PUBKEY,
    "owner" / PUBKEY,
    "amount" / Int64ul,
    "delegate_option" / Int32ul,
    "delegate" / PUBKEY,
    "state" / Int8ul,
    "is_native_option" / Int32ul,
    "is_native" / Int64ul,
    "delegated_amount" / Int64ul,
    "close_authority_option" / Int32ul,
    "close_authority" / PUBKEY,
)


# ---------------------------------------------------------------------------
# BPF upgradeable loader (bincode, u32 enum tag)
# ---------------------------------------------------------------------------
LOADER_STATE_TAG = Int32ul
LOADER_BUFFER = CStruct("authority_address" / OPTION_PUBKEY)
LOADER_PROGRAM = CStruct("programdata_address" / PUBKEY)
LOADER_PROGRAM_DATA = CStruct(
    "slot" / U64,
    "upgrade_authority_address" / OPTION_PUBKEY,
)

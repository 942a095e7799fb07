"""
Raw Token Metadata instruction encoders.

Each encoder takes a fully-resolved account set and returns a
:class:`solders.instruction.Instruction`. Account order, writability and signer flags
follow the program's positional account list; absent optional accounts are filled
with the program id as a read-only, non-signer placeholder.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from borsh_construct import U8, U64, Bool
from solders.instruction import AccountMeta, Instruction
from solders.pubkey import Pubkey

from .. import constants as const
from .. import enums
from ..models import (
    AssetData,
    AuthorizationData,
    CollectionDetails,
    DataV2,
    DelegateArgs,
    PrintSupply,
    RevokeArgs,
    UpdateArgs,
    encode_option,
)

PROGRAM_ID = const.TOKEN_METADATA_PROGRAM_ID


def _meta(pubkey: Pubkey, *, writable: bool = False, signer: bool = False) -> AccountMeta:
    return AccountMeta(pubkey=pubkey, is_signer=signer, is_writable=writable)


def _optional(
    pubkey: Pubkey | None, *, writable: bool = False, signer: bool = False
) -> AccountMeta:
    if pubkey is None:
        return AccountMeta(pubkey=PROGRAM_ID, is_signer=False, is_writable=False)
    return _meta(pubkey, writable=writable, signer=signer)


def _authorization_data(value: AuthorizationData | None) -> bytes:
    return encode_option(value, lambda v: v.serialized)


def _instruction(data: bytes, accounts: Sequence[AccountMeta]) -> Instruction:
    return Instruction(program_id=PROGRAM_ID, data=bytes(data), accounts=list(accounts))


def _sysvars() -> list[AccountMeta]:
    return [_meta(const.SYSTEM_PROGRAM_ID), _meta(const.SYSVAR_INSTRUCTIONS_ID)]


# ---------------------------------------------------------------------------
# Create / Mint
# ---------------------------------------------------------------------------
@dataclass(frozen=True, slots=True)
class CreateV1Accounts:
    metadata: Pubkey
    mint: Pubkey
    authority: Pubkey
    payer: Pubkey
    update_authority: Pubkey
    master_edition: Pubkey | None = None
    mint_is_signer: bool = True
    update_authority_is_signer: bool = True
    spl_token_program: Pubkey = const.SPL_TOKEN_PROGRAM_ID


def create_v1(
    accounts: CreateV1Accounts,
    asset_data: AssetData,
    *,
    decimals: int | None = None,
    print_supply: PrintSupply | None = None,
) -> Instruction:
    data = (
        U8.build(enums.IX_CREATE)
        + U8.build(enums.ARGS_V1)
        + asset_data.serialized
        + encode_option(decimals, U8.build)
        + encode_option(print_supply, lambda p: p.serialized)
    )
    a = accounts
    return _instruction(
        data,
        [
            _meta(a.metadata, writable=True),
            _optional(a.master_edition, writable=True),
            _meta(a.mint, writable=True, signer=a.mint_is_signer),
            _meta(a.authority, signer=True),
            _meta(a.payer, writable=True, signer=True),
            _meta(a.update_authority, signer=a.update_authority_is_signer),
            *_sysvars(),
            _meta(a.spl_token_program),
        ],
    )


@dataclass(frozen=True, slots=True)
class MintV1Accounts:
    token: Pubkey
    metadata: Pubkey
    mint: Pubkey
    authority: Pubkey
    payer: Pubkey
    token_owner: Pubkey | None = None
    master_edition: Pubkey | None = None
    token_record: Pubkey | None = None
    delegate_record: Pubkey | None = None
    authorization_rules_program: Pubkey | None = None
    authorization_rules: Pubkey | None = None


def mint_v1(
    accounts: MintV1Accounts,
    amount: int,
    *,
    authorization_data: AuthorizationData | None = None,
) -> Instruction:
    data = (
        U8.build(enums.IX_MINT)
        + U8.build(enums.ARGS_V1)
        + U64.build(amount)
        + _authorization_data(authorization_data)
    )
    a = accounts
    return _instruction(
        data,
        [
            _meta(a.token, writable=True),
            _optional(a.token_owner),
            _meta(a.metadata),
            _optional(a.master_edition, writable=True),
            _optional(a.token_record, writable=True),
            _meta(a.mint, writable=True),
            _meta(a.authority, signer=True),
            _optional(a.delegate_record),
            _meta(a.payer, writable=True, signer=True),
            *_sysvars(),
            _meta(const.SPL_TOKEN_PROGRAM_ID),
            _meta(const.SPL_ASSOCIATED_TOKEN_PROGRAM_ID),
            _optional(a.authorization_rules_program),
            _optional(a.authorization_rules),
        ],
    )


# ---------------------------------------------------------------------------
# Transfer
# ---------------------------------------------------------------------------
@dataclass(frozen=True, slots=True)
class TransferV1Accounts:
    token: Pubkey
    token_owner: Pubkey
    destination_token: Pubkey
    destination_owner: Pubkey
    mint: Pubkey
    metadata: Pubkey
    authority: Pubkey
    payer: Pubkey
    edition: Pubkey | None = None
    token_record: Pubkey | None = None
    destination_token_record: Pubkey | None = None
    authorization_rules_program: Pubkey | None = None
    authorization_rules: Pubkey | None = None


def transfer_v1(
    accounts: TransferV1Accounts,
    amount: int,
    *,
    authorization_data: AuthorizationData | None = None,
) -> Instruction:
    data = (
        U8.build(enums.IX_TRANSFER)
        + U8.build(enums.ARGS_V1)
        + U64.build(amount)
        + _authorization_data(authorization_data)
    )
    a = accounts
    return _instruction(
        data,
        [
            _meta(a.token, writable=True),
            _meta(a.token_owner),
            _meta(a.destination_token, writable=True),
            _meta(a.destination_owner),
            _meta(a.mint),
            _meta(a.metadata, writable=True),
            _optional(a.edition),
            _optional(a.token_record, writable=True),
            _optional(a.destination_token_record, writable=True),
            _meta(a.authority, signer=True),
            _meta(a.payer, writable=True, signer=True),
            *_sysvars(),
            _meta(const.SPL_TOKEN_PROGRAM_ID),
            _meta(const.SPL_ASSOCIATED_TOKEN_PROGRAM_ID),
            _optional(a.authorization_rules_program),
            _optional(a.authorization_rules),
        ],
    )


# ---------------------------------------------------------------------------
# Burn
# ---------------------------------------------------------------------------
@dataclass(frozen=True, slots=True)
class BurnV1Accounts:
    authority: Pubkey
    metadata: Pubkey
    mint: Pubkey
    token: Pubkey
    collection_metadata: Pubkey | None = None
    edition: Pubkey | None = None
    master_edition: Pubkey | None = None
    master_edition_mint: Pubkey | None = None
    master_edition_token: Pubkey | None = None
    edition_marker: Pubkey | None = None
    token_record: Pubkey | None = None


def burn_v1(accounts: BurnV1Accounts, amount: int) -> Instruction:
    data = U8.build(enums.IX_BURN) + U8.build(enums.ARGS_V1) + U64.build(amount)
    a = accounts
    return _instruction(
        data,
        [
            _meta(a.authority, writable=True, signer=True),
            _optional(a.collection_metadata, writable=True),
            _meta(a.metadata, writable=True),
            _optional(a.edition, writable=True),
            _meta(a.mint, writable=True),
            _meta(a.token, writable=True),
            _optional(a.master_edition, writable=True),
            _optional(a.master_edition_mint),
            _optional(a.master_edition_token),
            _optional(a.edition_marker, writable=True),
            _optional(a.token_record, writable=True),
            *_sysvars(),
            _meta(const.SPL_TOKEN_PROGRAM_ID),
        ],
    )


# ---------------------------------------------------------------------------
# Update
# ---------------------------------------------------------------------------
@dataclass(frozen=True, slots=True)
class UpdateV1Accounts:
    authority: Pubkey
    mint: Pubkey
    metadata: Pubkey
    payer: Pubkey
    delegate_record: Pubkey | None = None
    token: Pubkey | None = None
    edition: Pubkey | None = None
    authorization_rules_program: Pubkey | None = None
    authorization_rules: Pubkey | None = None


def update_v1(accounts: UpdateV1Accounts, args: UpdateArgs) -> Instruction:
    data = U8.build(enums.IX_UPDATE) + U8.build(enums.ARGS_V1) + args.serialized
    a = accounts
    return _instruction(
        data,
        [
            _meta(a.authority, signer=True),
            _optional(a.delegate_record),
            _optional(a.token),
            _meta(a.mint),
            _meta(a.metadata, writable=True),
            _optional(a.edition),
            _meta(a.payer, writable=True, signer=True),
            *_sysvars(),
            _optional(a.authorization_rules_program),
            _optional(a.authorization_rules),
        ],
    )


# ---------------------------------------------------------------------------
# Delegate / Revoke
# ---------------------------------------------------------------------------
@dataclass(frozen=True, slots=True)
class DelegateAccounts:
    """Accounts shared by the delegate and revoke instructions."""

    delegate: Pubkey
    metadata: Pubkey
    mint: Pubkey
    authority: Pubkey
    payer: Pubkey
    delegate_record: Pubkey | None = None
    master_edition: Pubkey | None = None
    token_record: Pubkey | None = None
    token: Pubkey | None = None
    spl_token_program: Pubkey | None = const.SPL_TOKEN_PROGRAM_ID
    authorization_rules_program: Pubkey | None = None
    authorization_rules: Pubkey | None = None


def _delegate_metas(a: DelegateAccounts) -> list[AccountMeta]:
    return [
        _optional(a.delegate_record, writable=True),
        _meta(a.delegate),
        _meta(a.metadata, writable=True),
        _optional(a.master_edition),
        _optional(a.token_record, writable=True),
        _meta(a.mint),
        _optional(a.token, writable=True),
        _meta(a.authority, signer=True),
        _meta(a.payer, writable=True, signer=True),
        *_sysvars(),
        _optional(a.spl_token_program),
        _optional(a.authorization_rules_program),
        _optional(a.authorization_rules),
    ]


def delegate(accounts: DelegateAccounts, args: DelegateArgs) -> Instruction:
    return _instruction(
        U8.build(enums.IX_DELEGATE) + args.serialized, _delegate_metas(accounts)
    )


def revoke(accounts: DelegateAccounts, args: RevokeArgs) -> Instruction:
    return _instruction(
        U8.build(enums.IX_REVOKE) + args.serialized, _delegate_metas(accounts)
    )


# ---------------------------------------------------------------------------
# Verify / Unverify
# ---------------------------------------------------------------------------
@dataclass(frozen=True, slots=True)
class VerificationAccounts:
    authority: Pubkey
    metadata: Pubkey
    delegate_record: Pubkey | None = None
    collection_mint: Pubkey | None = None
    collection_metadata: Pubkey | None = None
    collection_master_edition: Pubkey | None = None


def verify(accounts: VerificationAccounts, variant: int) -> Instruction:
    a = accounts
    return _instruction(
        U8.build(enums.IX_VERIFY) + U8.build(variant),
        [
            _meta(a.authority, signer=True),
            _optional(a.delegate_record),
            _meta(a.metadata, writable=True),
            _optional(a.collection_mint),
            _optional(a.collection_metadata, writable=True),
            _optional(a.collection_master_edition),
            *_sysvars(),
        ],
    )


def unverify(accounts: VerificationAccounts, variant: int) -> Instruction:
    """Same as :func:`verify` minus the collection master edition slot."""
    a = accounts
    return _instruction(
        U8.build(enums.IX_UNVERIFY) + U8.build(variant),
        [
            _meta(a.authority, signer=True),
            _optional(a.delegate_record),
            _meta(a.metadata, writable=True),
            _optional(a.collection_mint),
            _optional(a.collection_metadata, writable=True),
            *_sysvars(),
        ],
    )


# ---------------------------------------------------------------------------
# Legacy instructions
# ---------------------------------------------------------------------------
def create_metadata_account_v3(
    *,
    metadata: Pubkey,
    mint: Pubkey,
    mint_authority: Pubkey,
    payer: Pubkey,
    update_authority: Pubkey,
    data: DataV2,
    is_mutable: bool,
    collection_details: CollectionDetails | None = None,
    update_authority_is_signer: bool = True,
) -> Instruction:
    payload = (
        U8.build(enums.IX_CREATE_METADATA_ACCOUNT_V3)
        + data.serialized
        + Bool.build(is_mutable)
        + encode_option(collection_details, lambda d: d.serialized)
    )
    return _instruction(
        payload,
        [
            _meta(metadata, writable=True),
            _meta(mint),
            _meta(mint_authority, signer=True),
            _meta(payer, writable=True, signer=True),
            _meta(update_authority, signer=update_authority_is_signer),
            _meta(const.SYSTEM_PROGRAM_ID),
            _optional(None),
        ],
    )


def create_master_edition_v3(
    *,
    edition: Pubkey,
    mint: Pubkey,
    update_authority: Pubkey,
    mint_authority: Pubkey,
    payer: Pubkey,
    metadata: Pubkey,
    max_supply: int | None,
) -> Instruction:
    payload = U8.build(enums.IX_CREATE_MASTER_EDITION_V3) + encode_option(
        max_supply, U64.build
    )
    return _instruction(
        payload,
        [
            _meta(edition, writable=True),
            _meta(mint, writable=True),
            _meta(update_authority, signer=True),
            _meta(mint_authority, signer=True),
            _meta(payer, writable=True, signer=True),
            _meta(metadata, writable=True),
            _meta(const.SPL_TOKEN_PROGRAM_ID),
            _meta(const.SYSTEM_PROGRAM_ID),
            _optional(None),
        ],
    )


def update_metadata_account_v2(
    *,
    metadata: Pubkey,
    update_authority: Pubkey,
    data: DataV2 | None = None,
    new_update_authority: Pubkey | None = None,
    primary_sale_happened: bool | None = None,
    is_mutable: bool | None = None,
) -> Instruction:
    payload = (
        U8.build(enums.IX_UPDATE_METADATA_ACCOUNT_V2)
        + encode_option(data, lambda d: d.serialized)
        + encode_option(new_update_authority, bytes)
        + encode_option(primary_sale_happened, Bool.build)
        + encode_option(is_mutable, Bool.build)
    )
    return _instruction(
        payload,
        [
            _meta(metadata, writable=True),
            _meta(update_authority, signer=True),
        ],
    )

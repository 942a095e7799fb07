"""
Collection and creator (un)verification.

Only non-fungible assets (or assets without a recorded token standard) carry
verifiable creators and collections. Other standards are rejected after the metadata
read, before anything is submitted.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from solders.instruction import Instruction
from solders.keypair import Keypair
from solders.signature import Signature

from .. import constants as const
from .. import enums
from ..accounts import Metadata
from ..asset import Asset
from ..codec import AddressLike, to_pubkey
from ..derive import derive_metadata_delegate_record_pda
from ..errors import InvalidInputError, UnsupportedTokenStandardError
from ..models import MetadataDelegateRole, supports_verification
from ..rpc import ChainReader
from .common import signers_of
from .instructions import VerificationAccounts, unverify, verify
from .priority import PriorityLevel, with_priority
from .transaction import RetryPolicy, submit

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class VerifyCollectionArgsV1:
    """
    (Un)verify `mint` as a member of `collection_mint`.

    With `is_delegate`, the authority signs as a collection delegate of the update
    authority of `mint`.
    """

    authority: Keypair
    mint: AddressLike
    collection_mint: AddressLike
    is_delegate: bool = False
    payer: Keypair | None = None


@dataclass(frozen=True, slots=True)
class UnverifyCollectionArgsV1(VerifyCollectionArgsV1):
    pass


@dataclass(frozen=True, slots=True)
class VerifyCreatorArgsV1:
    """(Un)verify the authority as a creator of `mint`."""

    authority: Keypair
    mint: AddressLike
    payer: Keypair | None = None


@dataclass(frozen=True, slots=True)
class UnverifyCreatorArgsV1(VerifyCreatorArgsV1):
    pass


VerifyCollectionArgs = VerifyCollectionArgsV1
UnverifyCollectionArgs = UnverifyCollectionArgsV1
VerifyCreatorArgs = VerifyCreatorArgsV1
UnverifyCreatorArgs = UnverifyCreatorArgsV1


def _checked_target(chain: ChainReader, mint: AddressLike) -> tuple[Asset, Metadata]:
    asset = Asset(to_pubkey(mint))
    md = asset.get_metadata(chain)
    if not supports_verification(md.token_standard):
        raise UnsupportedTokenStandardError(
            f"Cannot verify creators or collections of {md.token_standard.name} asset "
            f"{asset.mint}"
        )
    return asset, md


def _collection_accounts(
    chain: ChainReader, args: VerifyCollectionArgsV1
) -> VerificationAccounts:
    authority = args.authority.pubkey()
    asset, md = _checked_target(chain, args.mint)
    collection = Asset(to_pubkey(args.collection_mint))
    collection.add_edition()
    delegate_record = None
    if args.is_delegate:
        delegate_record = derive_metadata_delegate_record_pda(
            collection.mint, MetadataDelegateRole.COLLECTION, md.update_authority, authority
        )
    logger.debug(
        "Collection verification of %s in %s (delegate_record=%s)",
        asset.mint,
        collection.mint,
        delegate_record,
    )
    return VerificationAccounts(
        authority=authority,
        delegate_record=delegate_record,
        metadata=asset.metadata,
        collection_mint=collection.mint,
        collection_metadata=collection.metadata,
        collection_master_edition=collection.edition,
    )


def _creator_accounts(chain: ChainReader, args: VerifyCreatorArgsV1) -> VerificationAccounts:
    asset, _ = _checked_target(chain, args.mint)
    return VerificationAccounts(authority=args.authority.pubkey(), metadata=asset.metadata)


def _verification_ix(
    chain: ChainReader,
    args: VerifyCollectionArgsV1 | VerifyCreatorArgsV1,
) -> Instruction:
    # Unverify variants subclass their verify counterparts, so they are matched first.
    match args:
        case UnverifyCollectionArgsV1():
            return unverify(
                _collection_accounts(chain, args), enums.VERIFICATION_COLLECTION_V1
            )
        case VerifyCollectionArgsV1():
            return verify(_collection_accounts(chain, args), enums.VERIFICATION_COLLECTION_V1)
        case UnverifyCreatorArgsV1():
            return unverify(_creator_accounts(chain, args), enums.VERIFICATION_CREATOR_V1)
        case VerifyCreatorArgsV1():
            return verify(_creator_accounts(chain, args), enums.VERIFICATION_CREATOR_V1)
    raise InvalidInputError(f"Unsupported verification request: {type(args).__name__}")


def verification_ix(
    chain: ChainReader,
    args: VerifyCollectionArgsV1 | VerifyCreatorArgsV1,
    *,
    priority: PriorityLevel | None = None,
) -> list[Instruction]:
    """Assemble any of the four (un)verify requests."""
    ix = _verification_ix(chain, args)
    return with_priority([ix], priority, const.VERIFY_COMPUTE_UNITS)


def _submit(
    chain: ChainReader,
    args: VerifyCollectionArgsV1 | VerifyCreatorArgsV1,
    priority: PriorityLevel | None,
    retry: RetryPolicy | None,
) -> Signature:
    instructions = verification_ix(chain, args, priority=priority)
    return submit(chain, signers_of(args.authority, args.payer), instructions, retry=retry)


def verify_collection(
    chain: ChainReader,
    args: VerifyCollectionArgs,
    *,
    priority: PriorityLevel | None = None,
    retry: RetryPolicy | None = None,
) -> Signature:
    if isinstance(args, UnverifyCollectionArgsV1):
        raise InvalidInputError("Use unverify_collection for UnverifyCollectionArgs")
    return _submit(chain, args, priority, retry)


def unverify_collection(
    chain: ChainReader,
    args: UnverifyCollectionArgs,
    *,
    priority: PriorityLevel | None = None,
    retry: RetryPolicy | None = None,
) -> Signature:
    if not isinstance(args, UnverifyCollectionArgsV1):
        raise InvalidInputError("unverify_collection expects UnverifyCollectionArgs")
    return _submit(chain, args, priority, retry)


def verify_creator(
    chain: ChainReader,
    args: VerifyCreatorArgs,
    *,
    priority: PriorityLevel | None = None,
    retry: RetryPolicy | None = None,
) -> Signature:
    if isinstance(args, UnverifyCreatorArgsV1):
        raise InvalidInputError("Use unverify_creator for UnverifyCreatorArgs")
    return _submit(chain, args, priority, retry)


def unverify_creator(
    chain: ChainReader,
    args: UnverifyCreatorArgs,
    *,
    priority: PriorityLevel | None = None,
    retry: RetryPolicy | None = None,
) -> Signature:
    if not isinstance(args, UnverifyCreatorArgsV1):
        raise InvalidInputError("unverify_creator expects UnverifyCreatorArgs")
    return _submit(chain, args, priority, retry)

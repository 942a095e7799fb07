"""
Delegate and revoke assembly.

Both instructions share one account list. Which optional slots are filled depends on
the role's family (see :data:`~token_metadata_client.models.ROLE_TABLE`):

* token-record roles resolve the token account (located on chain when omitted) and
  its token record;
* metadata-record roles derive the metadata delegate record seeded by the payer;
* the standard role resolves the token account only.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from solders.instruction import Instruction
from solders.keypair import Keypair
from solders.pubkey import Pubkey
from solders.signature import Signature

from .. import constants as const
from ..asset import Asset
from ..codec import AddressLike, to_optional_pubkey, to_pubkey
from ..derive import derive_metadata_delegate_record_pda
from ..errors import InvalidInputError
from ..models import (
    DelegateArgs,
    DelegateFamily,
    DelegateRole,
    RevokeArgs,
    requires_edition,
)
from ..rpc import ChainReader
from .common import authorization_rules_accounts, signers_of
from .instructions import DelegateAccounts, delegate, revoke
from .priority import PriorityLevel, with_priority
from .transaction import RetryPolicy, submit

logger = logging.getLogger(__name__)

_TOKEN_ACCOUNT_FAMILIES = (DelegateFamily.TOKEN_RECORD, DelegateFamily.STANDARD)


@dataclass(frozen=True, slots=True)
class DelegateAssetArgsV1:
    authority: Keypair
    mint: AddressLike
    delegate: AddressLike
    delegate_args: DelegateArgs
    token: AddressLike | None = None
    payer: Keypair | None = None


@dataclass(frozen=True, slots=True)
class RevokeAssetArgsV1:
    authority: Keypair
    mint: AddressLike
    delegate: AddressLike
    role: DelegateRole
    token: AddressLike | None = None
    payer: Keypair | None = None


DelegateAssetArgs = DelegateAssetArgsV1
RevokeAssetArgs = RevokeAssetArgsV1


def resolve_delegate_accounts(
    chain: ChainReader,
    *,
    role: DelegateRole,
    authority: Pubkey,
    payer: Pubkey,
    mint: Pubkey,
    delegate_address: Pubkey,
    token: Pubkey | None = None,
) -> DelegateAccounts:
    """Fill the delegate/revoke account set for `role` after one metadata read."""
    spec = role.spec
    asset = Asset(mint)
    md = asset.get_metadata(chain)
    if requires_edition(md.token_standard):
        asset.add_edition()

    token_record = delegate_record = None
    if spec.family in _TOKEN_ACCOUNT_FAMILIES and token is None:
        token = chain.find_single_holder(mint)
    if spec.family is DelegateFamily.TOKEN_RECORD:
        token_record = asset.get_token_record(token)
    elif spec.family is DelegateFamily.METADATA_RECORD:
        delegate_record = derive_metadata_delegate_record_pda(
            mint, spec.metadata_role, payer, delegate_address
        )
    rules_program, rule_set = authorization_rules_accounts(md)
    logger.debug(
        "%s delegate for %s: token=%s token_record=%s delegate_record=%s",
        role.name,
        mint,
        token,
        token_record,
        delegate_record,
    )

    return DelegateAccounts(
        delegate=delegate_address,
        metadata=asset.metadata,
        mint=mint,
        authority=authority,
        payer=payer,
        delegate_record=delegate_record,
        master_edition=asset.edition,
        token_record=token_record,
        token=token,
        authorization_rules_program=rules_program,
        authorization_rules=rule_set,
    )


def _accounts_for(
    chain: ChainReader,
    args: DelegateAssetArgsV1 | RevokeAssetArgsV1,
    role: DelegateRole,
) -> DelegateAccounts:
    payer = args.payer or args.authority
    return resolve_delegate_accounts(
        chain,
        role=role,
        authority=args.authority.pubkey(),
        payer=payer.pubkey(),
        mint=to_pubkey(args.mint),
        delegate_address=to_pubkey(args.delegate),
        token=to_optional_pubkey(args.token),
    )


def delegate_ix(
    chain: ChainReader,
    args: DelegateAssetArgs,
    *,
    priority: PriorityLevel | None = None,
) -> list[Instruction]:
    match args:
        case DelegateAssetArgsV1():
            accounts = _accounts_for(chain, args, args.delegate_args.role)
            ix = delegate(accounts, args.delegate_args)
        case _:
            raise InvalidInputError(f"Unsupported delegate request: {type(args).__name__}")
    return with_priority([ix], priority, const.DELEGATE_COMPUTE_UNITS)


def delegate_asset(
    chain: ChainReader,
    args: DelegateAssetArgs,
    *,
    priority: PriorityLevel | None = None,
    retry: RetryPolicy | None = None,
) -> Signature:
    instructions = delegate_ix(chain, args, priority=priority)
    return submit(chain, signers_of(args.authority, args.payer), instructions, retry=retry)


def revoke_ix(
    chain: ChainReader,
    args: RevokeAssetArgs,
    *,
    priority: PriorityLevel | None = None,
) -> list[Instruction]:
    match args:
        case RevokeAssetArgsV1():
            accounts = _accounts_for(chain, args, args.role)
            ix = revoke(accounts, RevokeArgs(args.role))
        case _:
            raise InvalidInputError(f"Unsupported revoke request: {type(args).__name__}")
    return with_priority([ix], priority, const.REVOKE_COMPUTE_UNITS)


def revoke_asset(
    chain: ChainReader,
    args: RevokeAssetArgs,
    *,
    priority: PriorityLevel | None = None,
    retry: RetryPolicy | None = None,
) -> Signature:
    instructions = revoke_ix(chain, args, priority=priority)
    return submit(chain, signers_of(args.authority, args.payer), instructions, retry=retry)

from __future__ import annotations

import logging
from dataclasses import dataclass

from solders.instruction import Instruction
from solders.keypair import Keypair
from solders.signature import Signature

from .. import constants as const
from ..asset import Asset
from ..codec import AddressLike, to_optional_pubkey, to_pubkey
from ..derive import derive_associated_token_address
from ..errors import InvalidInputError
from ..models import AuthorizationData, TokenStandard, requires_edition
from ..rpc import ChainReader
from .common import authorization_rules_accounts, signers_of
from .instructions import TransferV1Accounts, transfer_v1
from .priority import PriorityLevel, with_priority
from .transaction import RetryPolicy, submit

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class TransferAssetArgsV1:
    """
    Move `amount` units of `mint` from `source_owner` to `destination_owner`.

    `source_owner` defaults to the authority. Token accounts default to the owners'
    associated token accounts.
    """

    authority: Keypair
    mint: AddressLike
    destination_owner: AddressLike
    amount: int = 1
    source_owner: AddressLike | None = None
    source_token: AddressLike | None = None
    destination_token: AddressLike | None = None
    authorization_data: AuthorizationData | None = None
    payer: Keypair | None = None


TransferAssetArgs = TransferAssetArgsV1


def _transfer_v1_ix(chain: ChainReader, args: TransferAssetArgsV1) -> Instruction:
    if args.amount <= 0:
        raise InvalidInputError("amount must be positive")
    authority = args.authority.pubkey()
    payer = args.payer or args.authority
    asset = Asset(to_pubkey(args.mint))
    source_owner = to_optional_pubkey(args.source_owner) or authority
    destination_owner = to_pubkey(args.destination_owner)
    source_token = to_optional_pubkey(
        args.source_token
    ) or derive_associated_token_address(source_owner, asset.mint)
    destination_token = to_optional_pubkey(
        args.destination_token
    ) or derive_associated_token_address(destination_owner, asset.mint)

    md = asset.get_metadata(chain)
    if requires_edition(md.token_standard):
        asset.add_edition()

    token_record = destination_token_record = None
    rules_program = rule_set = None
    if md.token_standard is TokenStandard.PROGRAMMABLE_NON_FUNGIBLE:
        token_record = asset.get_token_record(source_token)
        destination_token_record = asset.get_token_record(destination_token)
        rules_program, rule_set = authorization_rules_accounts(md)
    logger.debug(
        "Transfer %s: %s -> %s (standard=%s, rule_set=%s)",
        asset.mint,
        source_token,
        destination_token,
        md.token_standard,
        rule_set,
    )

    return transfer_v1(
        TransferV1Accounts(
            token=source_token,
            token_owner=source_owner,
            destination_token=destination_token,
            destination_owner=destination_owner,
            mint=asset.mint,
            metadata=asset.metadata,
            edition=asset.edition,
            token_record=token_record,
            destination_token_record=destination_token_record,
            authority=authority,
            payer=payer.pubkey(),
            authorization_rules_program=rules_program,
            authorization_rules=rule_set,
        ),
        args.amount,
        authorization_data=args.authorization_data,
    )


def transfer_ix(
    chain: ChainReader,
    args: TransferAssetArgs,
    *,
    priority: PriorityLevel | None = None,
) -> list[Instruction]:
    match args:
        case TransferAssetArgsV1():
            ix = _transfer_v1_ix(chain, args)
        case _:
            raise InvalidInputError(f"Unsupported transfer request: {type(args).__name__}")
    return with_priority([ix], priority, const.TRANSFER_COMPUTE_UNITS)


def transfer(
    chain: ChainReader,
    args: TransferAssetArgs,
    *,
    priority: PriorityLevel | None = None,
    retry: RetryPolicy | None = None,
) -> Signature:
    instructions = transfer_ix(chain, args, priority=priority)
    return submit(chain, signers_of(args.authority, args.payer), instructions, retry=retry)

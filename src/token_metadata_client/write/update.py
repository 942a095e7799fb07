from __future__ import annotations

import logging
from dataclasses import dataclass

from solders.instruction import Instruction
from solders.keypair import Keypair
from solders.signature import Signature

from .. import constants as const
from ..asset import Asset
from ..codec import AddressLike, to_optional_pubkey, to_pubkey
from ..errors import InvalidInputError
from ..models import TokenStandard, UpdateArgs, requires_edition
from ..rpc import ChainReader
from .common import authorization_rules_accounts, signers_of
from .instructions import UpdateV1Accounts, update_v1
from .priority import PriorityLevel, with_priority
from .transaction import RetryPolicy, submit

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class UpdateAssetArgsV1:
    """
    Apply `update_args` to the metadata of `mint`.

    `token` is only needed for programmable non-fungibles and is located on chain
    when omitted.
    """

    authority: Keypair
    mint: AddressLike
    update_args: UpdateArgs
    token: AddressLike | None = None
    delegate_record: AddressLike | None = None
    payer: Keypair | None = None


UpdateAssetArgs = UpdateAssetArgsV1


def _update_v1_ix(chain: ChainReader, args: UpdateAssetArgsV1) -> Instruction:
    asset = Asset(to_pubkey(args.mint))
    payer = args.payer or args.authority
    token = to_optional_pubkey(args.token)

    md = asset.get_metadata(chain)
    if token is None and md.token_standard is TokenStandard.PROGRAMMABLE_NON_FUNGIBLE:
        token = chain.find_single_holder(asset.mint)
    if requires_edition(md.token_standard):
        asset.add_edition()
    rules_program, rule_set = authorization_rules_accounts(md)
    logger.debug(
        "Update %s (token=%s, rule_set=%s)", asset.mint, token, rule_set
    )

    return update_v1(
        UpdateV1Accounts(
            authority=args.authority.pubkey(),
            delegate_record=to_optional_pubkey(args.delegate_record),
            token=token,
            mint=asset.mint,
            metadata=asset.metadata,
            edition=asset.edition,
            payer=payer.pubkey(),
            authorization_rules_program=rules_program,
            authorization_rules=rule_set,
        ),
        args.update_args,
    )


def update_ix(
    chain: ChainReader,
    args: UpdateAssetArgs,
    *,
    priority: PriorityLevel | None = None,
) -> list[Instruction]:
    match args:
        case UpdateAssetArgsV1():
            ix = _update_v1_ix(chain, args)
        case _:
            raise InvalidInputError(f"Unsupported update request: {type(args).__name__}")
    return with_priority([ix], priority, const.UPDATE_COMPUTE_UNITS)


def update(
    chain: ChainReader,
    args: UpdateAssetArgs,
    *,
    priority: PriorityLevel | None = None,
    retry: RetryPolicy | None = None,
) -> Signature:
    instructions = update_ix(chain, args, priority=priority)
    return submit(chain, signers_of(args.authority, args.payer), instructions, retry=retry)

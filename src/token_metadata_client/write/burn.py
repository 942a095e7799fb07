from __future__ import annotations

import logging
from dataclasses import dataclass

from solders.instruction import Instruction
from solders.keypair import Keypair
from solders.signature import Signature

from .. import constants as const
from ..asset import Asset
from ..codec import AddressLike, to_optional_pubkey, to_pubkey
from ..derive import derive_metadata_pda
from ..errors import InvalidInputError
from ..models import TokenStandard, requires_edition
from ..rpc import ChainReader
from .common import signers_of
from .instructions import BurnV1Accounts, burn_v1
from .priority import PriorityLevel, with_priority
from .transaction import RetryPolicy, submit

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class BurnAssetArgsV1:
    """Burn `amount` units of `mint` held in `token`, owned by the authority."""

    authority: Keypair
    mint: AddressLike
    token: AddressLike
    amount: int = 1
    token_record: AddressLike | None = None
    payer: Keypair | None = None


BurnAssetArgs = BurnAssetArgsV1


def _burn_v1_ix(chain: ChainReader, args: BurnAssetArgsV1) -> Instruction:
    if args.amount <= 0:
        raise InvalidInputError("amount must be positive")
    asset = Asset(to_pubkey(args.mint))
    token = to_pubkey(args.token)

    md = asset.get_metadata(chain)
    if requires_edition(md.token_standard):
        asset.add_edition()
    token_record = None
    if md.token_standard is TokenStandard.PROGRAMMABLE_NON_FUNGIBLE:
        token_record = to_optional_pubkey(args.token_record) or asset.get_token_record(token)
    collection = md.verified_collection
    collection_metadata = (
        derive_metadata_pda(collection.key) if collection is not None else None
    )
    logger.debug(
        "Burn %s from %s (token_record=%s, collection_metadata=%s)",
        asset.mint,
        token,
        token_record,
        collection_metadata,
    )

    return burn_v1(
        BurnV1Accounts(
            authority=args.authority.pubkey(),
            collection_metadata=collection_metadata,
            metadata=asset.metadata,
            edition=asset.edition,
            mint=asset.mint,
            token=token,
            token_record=token_record,
        ),
        args.amount,
    )


def burn_ix(
    chain: ChainReader,
    args: BurnAssetArgs,
    *,
    priority: PriorityLevel | None = None,
) -> list[Instruction]:
    match args:
        case BurnAssetArgsV1():
            ix = _burn_v1_ix(chain, args)
        case _:
            raise InvalidInputError(f"Unsupported burn request: {type(args).__name__}")
    return with_priority([ix], priority, const.BURN_COMPUTE_UNITS)


def burn(
    chain: ChainReader,
    args: BurnAssetArgs,
    *,
    priority: PriorityLevel | None = None,
    retry: RetryPolicy | None = None,
) -> Signature:
    instructions = burn_ix(chain, args, priority=priority)
    return submit(chain, signers_of(args.authority, args.payer), instructions, retry=retry)

"""
Create + mint assembly.

:func:`mint_asset` allocates the metadata (and, for non-fungibles, the master edition)
with a ``Create`` instruction and credits the receiver's associated token account with
a ``Mint`` instruction, both in one transaction. :func:`mint_legacy_nft` builds the
same asset with the SPL token program and the legacy metadata instructions.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from solders.instruction import Instruction
from solders.keypair import Keypair
from solders.pubkey import Pubkey
from solders.signature import Signature
from solders.system_program import CreateAccountParams, create_account
from spl.token.instructions import (
    InitializeMintParams,
    MintToParams,
    create_associated_token_account,
    initialize_mint,
    mint_to,
)

from .. import constants as const
from ..asset import Asset
from ..codec import AddressLike, to_pubkey
from ..derive import derive_associated_token_address
from ..errors import InvalidInputError
from ..models import AssetData, AuthorizationData, DataV2, PrintSupply, TokenStandard
from ..rpc import ChainReader
from .instructions import (
    CreateV1Accounts,
    MintV1Accounts,
    create_master_edition_v3,
    create_metadata_account_v3,
    create_v1,
    mint_v1,
    update_metadata_account_v2,
)
from .priority import PriorityLevel, with_priority
from .transaction import RetryPolicy, submit

logger = logging.getLogger(__name__)

_SINGLE_UNIT_STANDARDS = (
    TokenStandard.NON_FUNGIBLE,
    TokenStandard.PROGRAMMABLE_NON_FUNGIBLE,
)


@dataclass(frozen=True, slots=True)
class MintAssetArgsV1:
    """
    Create a new asset and mint `amount` units of it to `receiver`.

    `payer` defaults to `authority`; `mint` is generated when omitted.
    """

    authority: Keypair
    receiver: AddressLike
    asset_data: AssetData
    amount: int = 1
    payer: Keypair | None = None
    mint: Keypair | None = None
    mint_decimals: int | None = None
    print_supply: PrintSupply | None = None
    authorization_data: AuthorizationData | None = None


MintAssetArgs = MintAssetArgsV1


@dataclass(frozen=True, slots=True)
class PreparedMint:
    """Instructions of a create+mint together with the keypair of the new mint."""

    instructions: list[Instruction]
    mint: Keypair
    signers: list[Keypair]


@dataclass(frozen=True, slots=True)
class MintResult:
    signature: Signature
    mint: Pubkey


def _validate(args: MintAssetArgsV1) -> None:
    standard = args.asset_data.token_standard
    if args.mint_decimals is not None and args.mint_decimals > const.MAX_MINT_DECIMALS:
        raise InvalidInputError(
            f"mint_decimals must be <= {const.MAX_MINT_DECIMALS}, got {args.mint_decimals}"
        )
    if args.amount <= 0:
        raise InvalidInputError("amount must be positive")
    if standard in _SINGLE_UNIT_STANDARDS and args.amount != 1:
        raise InvalidInputError(
            f"{standard.name} assets must be minted with amount 1, got {args.amount}"
        )
    if standard.is_fungible and args.print_supply is not None:
        raise InvalidInputError(f"print_supply cannot be set for {standard.name} assets")


def _mint_asset_v1_ix(
    args: MintAssetArgsV1, priority: PriorityLevel | None
) -> PreparedMint:
    _validate(args)
    standard = args.asset_data.token_standard
    authority = args.authority.pubkey()
    payer = args.payer or args.authority
    mint_signer = args.mint or Keypair()
    receiver = to_pubkey(args.receiver)

    asset = Asset(mint_signer.pubkey())
    if standard in _SINGLE_UNIT_STANDARDS:
        asset.add_edition()
    token = derive_associated_token_address(receiver, asset.mint)
    token_record = (
        asset.get_token_record(token)
        if standard is TokenStandard.PROGRAMMABLE_NON_FUNGIBLE
        else None
    )
    logger.debug(
        "Mint %s: metadata=%s edition=%s token=%s token_record=%s",
        asset.mint,
        asset.metadata,
        asset.edition,
        token,
        token_record,
    )

    create_ix = create_v1(
        CreateV1Accounts(
            metadata=asset.metadata,
            mint=asset.mint,
            authority=authority,
            payer=payer.pubkey(),
            update_authority=authority,
            master_edition=asset.edition,
        ),
        args.asset_data,
        decimals=args.mint_decimals,
        print_supply=args.print_supply,
    )
    mint_ix = mint_v1(
        MintV1Accounts(
            token=token,
            token_owner=receiver,
            metadata=asset.metadata,
            master_edition=asset.edition,
            token_record=token_record,
            mint=asset.mint,
            authority=authority,
            payer=payer.pubkey(),
        ),
        args.amount,
        authorization_data=args.authorization_data,
    )
    return PreparedMint(
        instructions=with_priority(
            [create_ix, mint_ix], priority, const.CREATE_MINT_COMPUTE_UNITS
        ),
        mint=mint_signer,
        signers=[payer, args.authority, mint_signer],
    )


def mint_asset_ix(
    args: MintAssetArgs, *, priority: PriorityLevel | None = None
) -> PreparedMint:
    """Assemble the create and mint instructions without submitting them."""
    match args:
        case MintAssetArgsV1():
            return _mint_asset_v1_ix(args, priority)
    raise InvalidInputError(f"Unsupported mint request: {type(args).__name__}")


def mint_asset(
    chain: ChainReader,
    args: MintAssetArgs,
    *,
    priority: PriorityLevel | None = None,
    retry: RetryPolicy | None = None,
) -> MintResult:
    prepared = mint_asset_ix(args, priority=priority)
    signature = submit(chain, prepared.signers, prepared.instructions, retry=retry)
    logger.info("Minted %s in %s", prepared.mint.pubkey(), signature)
    return MintResult(signature=signature, mint=prepared.mint.pubkey())


# ---------------------------------------------------------------------------
# Legacy (pre-programmable) mint
# ---------------------------------------------------------------------------
@dataclass(frozen=True, slots=True)
class LegacyMintArgs:
    """
    Mint a one-of-one NFT the legacy way.

    `funder` pays for every account and becomes mint authority, freeze authority and
    update authority.
    """

    funder: Keypair
    receiver: AddressLike
    data: DataV2
    is_mutable: bool = True
    primary_sale_happened: bool = False
    mint: Keypair | None = None


def mint_legacy_nft_ix(
    chain: ChainReader,
    args: LegacyMintArgs,
    *,
    priority: PriorityLevel | None = None,
) -> PreparedMint:
    funder = args.funder.pubkey()
    mint_signer = args.mint or Keypair()
    receiver = to_pubkey(args.receiver)
    asset = Asset(mint_signer.pubkey())
    edition = asset.add_edition()
    token = derive_associated_token_address(receiver, asset.mint)
    rent = chain.minimum_balance_for_rent_exemption(const.MINT_LAYOUT_SIZE)

    instructions = [
        create_account(
            CreateAccountParams(
                from_pubkey=funder,
                to_pubkey=asset.mint,
                lamports=rent,
                space=const.MINT_LAYOUT_SIZE,
                owner=const.SPL_TOKEN_PROGRAM_ID,
            )
        ),
        initialize_mint(
            InitializeMintParams(
                decimals=0,
                program_id=const.SPL_TOKEN_PROGRAM_ID,
                mint=asset.mint,
                mint_authority=funder,
                freeze_authority=funder,
            )
        ),
        create_associated_token_account(payer=funder, owner=receiver, mint=asset.mint),
        mint_to(
            MintToParams(
                program_id=const.SPL_TOKEN_PROGRAM_ID,
                mint=asset.mint,
                dest=token,
                mint_authority=funder,
                amount=1,
                signers=[],
            )
        ),
        create_metadata_account_v3(
            metadata=asset.metadata,
            mint=asset.mint,
            mint_authority=funder,
            payer=funder,
            update_authority=funder,
            data=args.data,
            is_mutable=args.is_mutable,
        ),
        create_master_edition_v3(
            edition=edition,
            mint=asset.mint,
            update_authority=funder,
            mint_authority=funder,
            payer=funder,
            metadata=asset.metadata,
            max_supply=0,
        ),
    ]
    if args.primary_sale_happened:
        instructions.append(
            update_metadata_account_v2(
                metadata=asset.metadata,
                update_authority=funder,
                primary_sale_happened=True,
            )
        )
    return PreparedMint(
        instructions=with_priority(
            instructions, priority, const.CREATE_MINT_COMPUTE_UNITS
        ),
        mint=mint_signer,
        signers=[args.funder, mint_signer],
    )


def mint_legacy_nft(
    chain: ChainReader,
    args: LegacyMintArgs,
    *,
    priority: PriorityLevel | None = None,
    retry: RetryPolicy | None = None,
) -> MintResult:
    prepared = mint_legacy_nft_ix(chain, args, priority=priority)
    signature = submit(chain, prepared.signers, prepared.instructions, retry=retry)
    logger.info("Minted legacy NFT %s in %s", prepared.mint.pubkey(), signature)
    return MintResult(signature=signature, mint=prepared.mint.pubkey())

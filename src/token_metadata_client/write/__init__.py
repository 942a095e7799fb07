"""Write API: instruction assembly, priority fees and transaction submission."""

from .burn import BurnAssetArgs, BurnAssetArgsV1, burn, burn_ix
from .delegate import (
    DelegateAssetArgs,
    DelegateAssetArgsV1,
    RevokeAssetArgs,
    RevokeAssetArgsV1,
    delegate_asset,
    delegate_ix,
    revoke_asset,
    revoke_ix,
)
from .mint import (
    LegacyMintArgs,
    MintAssetArgs,
    MintAssetArgsV1,
    MintResult,
    PreparedMint,
    mint_asset,
    mint_asset_ix,
    mint_legacy_nft,
    mint_legacy_nft_ix,
)
from .priority import PriorityLevel, compute_budget_instructions, with_priority
from .transaction import (
    RetryPolicy,
    estimate_compute_units,
    send_and_confirm,
    send_and_confirm_with_retries,
)
from .transfer import TransferAssetArgs, TransferAssetArgsV1, transfer, transfer_ix
from .update import UpdateAssetArgs, UpdateAssetArgsV1, update, update_ix
from .verify import (
    UnverifyCollectionArgs,
    UnverifyCollectionArgsV1,
    UnverifyCreatorArgs,
    UnverifyCreatorArgsV1,
    VerifyCollectionArgs,
    VerifyCollectionArgsV1,
    VerifyCreatorArgs,
    VerifyCreatorArgsV1,
    unverify_collection,
    unverify_creator,
    verification_ix,
    verify_collection,
    verify_creator,
)
from .writer import TokenMetadataWrite, WriteOptions

__all__ = [
    # Facade
    "TokenMetadataWrite",
    "WriteOptions",
    # Create + mint
    "LegacyMintArgs",
    "MintAssetArgs",
    "MintAssetArgsV1",
    "MintResult",
    "PreparedMint",
    "mint_asset",
    "mint_asset_ix",
    "mint_legacy_nft",
    "mint_legacy_nft_ix",
    # Transfer / burn / update
    "TransferAssetArgs",
    "TransferAssetArgsV1",
    "transfer",
    "transfer_ix",
    "BurnAssetArgs",
    "BurnAssetArgsV1",
    "burn",
    "burn_ix",
    "UpdateAssetArgs",
    "UpdateAssetArgsV1",
    "update",
    "update_ix",
    # Delegates
    "DelegateAssetArgs",
    "DelegateAssetArgsV1",
    "RevokeAssetArgs",
    "RevokeAssetArgsV1",
    "delegate_asset",
    "delegate_ix",
    "revoke_asset",
    "revoke_ix",
    # Verification
    "VerifyCollectionArgs",
    "VerifyCollectionArgsV1",
    "UnverifyCollectionArgs",
    "UnverifyCollectionArgsV1",
    "VerifyCreatorArgs",
    "VerifyCreatorArgsV1",
    "UnverifyCreatorArgs",
    "UnverifyCreatorArgsV1",
    "verification_ix",
    "verify_collection",
    "unverify_collection",
    "verify_creator",
    "unverify_creator",
    # Submission
    "PriorityLevel",
    "RetryPolicy",
    "compute_budget_instructions",
    "estimate_compute_units",
    "send_and_confirm",
    "send_and_confirm_with_retries",
    "with_priority",
]

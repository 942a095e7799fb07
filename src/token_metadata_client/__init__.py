# ruff: noqa: RUF022
"""
Token Metadata Python SDK.

Public entrypoints:
- :class:`token_metadata_client.client.TokenMetadataClient`
- :class:`token_metadata_client.read.reader.TokenMetadataRead`
- :class:`token_metadata_client.write.writer.TokenMetadataWrite`

The SDK assembles, submits and interprets transactions for the Solana Token Metadata
program (``metaqbxxUerdq28cj1RbAWkYQm3ybzjb6a8bt518x1s``) on top of solana-py and
solders.
"""

from __future__ import annotations

from . import constants, enums, snapshot
from .accounts import (
    CollectionAuthorityRecord,
    Edition,
    EditionMarker,
    MasterEdition,
    Metadata,
    MetadataData,
    MetadataDelegateRecord,
    MintAccount,
    TokenAccount,
    TokenRecord,
    UpgradeableLoaderState,
    UseAuthorityRecord,
)
from .asset import Asset
from .check import MetadataKey, MetadataValue, check_metadata_value
from .client import ClientConfig, TokenMetadataClient
from .codec import AddressLike, to_pubkey
from .deployments import DEFAULT_DEPLOYMENTS, ClusterDeployment
from .derive import (
    derive_associated_token_address,
    derive_cmv2_pda,
    derive_collection_authority_record_pda,
    derive_edition_marker_pda,
    derive_edition_pda,
    derive_generic_pda,
    derive_metadata_delegate_record_pda,
    derive_metadata_pda,
    derive_token_record_pda,
    derive_use_authority_record_pda,
)
from .errors import (
    AccountNotFoundError,
    AddressParseError,
    AmbiguousHolderError,
    DecodeError,
    HolderNotFoundError,
    InvalidInputError,
    NumericalOverflowError,
    RuleSetRevisionNotAvailableError,
    SimulationError,
    TokenMetadataError,
    TransportError,
    UnsupportedTokenStandardError,
)
from .models import (
    AssetData,
    AuthorizationData,
    Collection,
    CollectionDetails,
    Creator,
    Data,
    DataV2,
    DelegateArgs,
    DelegateFamily,
    DelegateRole,
    MetadataDelegateRole,
    PayloadValue,
    PrintSupply,
    ProgrammableConfig,
    RevokeArgs,
    Toggle,
    TokenDelegateRole,
    TokenStandard,
    UpdateArgs,
    UseMethod,
    Uses,
)
from .read.reader import TokenMetadataRead
from .read.rule_set import RuleSet
from .rpc import ChainReader
from .write import (
    BurnAssetArgs,
    DelegateAssetArgs,
    LegacyMintArgs,
    MintAssetArgs,
    MintResult,
    PriorityLevel,
    RetryPolicy,
    RevokeAssetArgs,
    TokenMetadataWrite,
    TransferAssetArgs,
    UnverifyCollectionArgs,
    UnverifyCreatorArgs,
    UpdateAssetArgs,
    VerifyCollectionArgs,
    VerifyCreatorArgs,
    WriteOptions,
)

__all__ = [
    # Deployments
    "DEFAULT_DEPLOYMENTS",
    "ClusterDeployment",
    # Facade
    "ClientConfig",
    "TokenMetadataClient",
    # Read/Write helpers
    "ChainReader",
    "TokenMetadataRead",
    "TokenMetadataWrite",
    "WriteOptions",
    "RetryPolicy",
    "PriorityLevel",
    # Requests
    "MintAssetArgs",
    "MintResult",
    "LegacyMintArgs",
    "TransferAssetArgs",
    "BurnAssetArgs",
    "UpdateAssetArgs",
    "DelegateAssetArgs",
    "RevokeAssetArgs",
    "VerifyCollectionArgs",
    "UnverifyCollectionArgs",
    "VerifyCreatorArgs",
    "UnverifyCreatorArgs",
    # Addresses
    "AddressLike",
    "Asset",
    "to_pubkey",
    "derive_associated_token_address",
    "derive_cmv2_pda",
    "derive_collection_authority_record_pda",
    "derive_edition_marker_pda",
    "derive_edition_pda",
    "derive_generic_pda",
    "derive_metadata_delegate_record_pda",
    "derive_metadata_pda",
    "derive_token_record_pda",
    "derive_use_authority_record_pda",
    # Models
    "AssetData",
    "AuthorizationData",
    "Collection",
    "CollectionDetails",
    "Creator",
    "Data",
    "DataV2",
    "DelegateArgs",
    "DelegateFamily",
    "DelegateRole",
    "MetadataDelegateRole",
    "PayloadValue",
    "PrintSupply",
    "ProgrammableConfig",
    "RevokeArgs",
    "Toggle",
    "TokenDelegateRole",
    "TokenStandard",
    "UpdateArgs",
    "UseMethod",
    "Uses",
    # Accounts
    "CollectionAuthorityRecord",
    "Edition",
    "EditionMarker",
    "MasterEdition",
    "Metadata",
    "MetadataData",
    "MetadataDelegateRecord",
    "MintAccount",
    "TokenAccount",
    "TokenRecord",
    "UpgradeableLoaderState",
    "UseAuthorityRecord",
    "RuleSet",
    # Checks
    "MetadataKey",
    "MetadataValue",
    "check_metadata_value",
    # Errors
    "TokenMetadataError",
    "InvalidInputError",
    "AddressParseError",
    "AccountNotFoundError",
    "HolderNotFoundError",
    "AmbiguousHolderError",
    "DecodeError",
    "RuleSetRevisionNotAvailableError",
    "NumericalOverflowError",
    "TransportError",
    "SimulationError",
    "UnsupportedTokenStandardError",
    # Modules
    "constants",
    "enums",
    "snapshot",
]

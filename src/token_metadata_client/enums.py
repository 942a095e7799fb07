"""Token Metadata wire tags: instruction discriminators and enum variants."""

from typing import Final

# ---------------------------------------------------------------------------
# Instruction discriminators
# ---------------------------------------------------------------------------
IX_CREATE_MASTER_EDITION_V3: Final[int] = 17
IX_UPDATE_METADATA_ACCOUNT_V2: Final[int] = 15
IX_CREATE_METADATA_ACCOUNT_V3: Final[int] = 33
IX_BURN: Final[int] = 41
IX_CREATE: Final[int] = 42
IX_MINT: Final[int] = 43
IX_DELEGATE: Final[int] = 44
IX_REVOKE: Final[int] = 45
IX_TRANSFER: Final[int] = 49
IX_UPDATE: Final[int] = 50
IX_VERIFY: Final[int] = 52
IX_UNVERIFY: Final[int] = 53

# V1 is the first variant of the versioned argument enums.
ARGS_V1: Final[int] = 0

VERIFICATION_CREATOR_V1: Final[int] = 0
VERIFICATION_COLLECTION_V1: Final[int] = 1


# ---------------------------------------------------------------------------
# Account keys
# ---------------------------------------------------------------------------
KEY_UNINITIALIZED: Final[int] = 0
KEY_EDITION_V1: Final[int] = 1
KEY_MASTER_EDITION_V1: Final[int] = 2
KEY_RESERVATION_LIST_V1: Final[int] = 3
KEY_METADATA_V1: Final[int] = 4
KEY_RESERVATION_LIST_V2: Final[int] = 5
KEY_MASTER_EDITION_V2: Final[int] = 6
KEY_EDITION_MARKER: Final[int] = 7
KEY_USE_AUTHORITY_RECORD: Final[int] = 8
KEY_COLLECTION_AUTHORITY_RECORD: Final[int] = 9
KEY_TOKEN_OWNED_ESCROW: Final[int] = 10
KEY_TOKEN_RECORD: Final[int] = 11
KEY_METADATA_DELEGATE: Final[int] = 12
KEY_EDITION_MARKER_V2: Final[int] = 13
KEY_HOLDER_DELEGATE: Final[int] = 14


# ---------------------------------------------------------------------------
# Token standard
# ---------------------------------------------------------------------------
TOKEN_STANDARD_NON_FUNGIBLE: Final[int] = 0
TOKEN_STANDARD_FUNGIBLE_ASSET: Final[int] = 1
TOKEN_STANDARD_FUNGIBLE: Final[int] = 2
TOKEN_STANDARD_NON_FUNGIBLE_EDITION: Final[int] = 3
TOKEN_STANDARD_PROGRAMMABLE_NON_FUNGIBLE: Final[int] = 4
TOKEN_STANDARD_PROGRAMMABLE_NON_FUNGIBLE_EDITION: Final[int] = 5


# ---------------------------------------------------------------------------
# Misc enums
# ---------------------------------------------------------------------------
USE_METHOD_BURN: Final[int] = 0
USE_METHOD_MULTIPLE: Final[int] = 1
USE_METHOD_SINGLE: Final[int] = 2

PRINT_SUPPLY_ZERO: Final[int] = 0
PRINT_SUPPLY_LIMITED: Final[int] = 1
PRINT_SUPPLY_UNLIMITED: Final[int] = 2

COLLECTION_DETAILS_V1: Final[int] = 0
COLLECTION_DETAILS_V2: Final[int] = 1

TOGGLE_NONE: Final[int] = 0
TOGGLE_CLEAR: Final[int] = 1
TOGGLE_SET: Final[int] = 2

PAYLOAD_TYPE_PUBKEY: Final[int] = 0
PAYLOAD_TYPE_SEEDS: Final[int] = 1
PAYLOAD_TYPE_MERKLE_PROOF: Final[int] = 2
PAYLOAD_TYPE_NUMBER: Final[int] = 3

TOKEN_STATE_UNLOCKED: Final[int] = 0
TOKEN_STATE_LOCKED: Final[int] = 1
TOKEN_STATE_LISTED: Final[int] = 2

SPL_ACCOUNT_STATE_UNINITIALIZED: Final[int] = 0
SPL_ACCOUNT_STATE_INITIALIZED: Final[int] = 1
SPL_ACCOUNT_STATE_FROZEN: Final[int] = 2


# ---------------------------------------------------------------------------
# Delegate roles
# ---------------------------------------------------------------------------
# Tags of the `DelegateArgs` instruction enum.
DELEGATE_COLLECTION_V1: Final[int] = 0
DELEGATE_SALE_V1: Final[int] = 1
DELEGATE_TRANSFER_V1: Final[int] = 2
DELEGATE_DATA_V1: Final[int] = 3
DELEGATE_UTILITY_V1: Final[int] = 4
DELEGATE_STAKING_V1: Final[int] = 5
DELEGATE_STANDARD_V1: Final[int] = 6
DELEGATE_LOCKED_TRANSFER_V1: Final[int] = 7
DELEGATE_PROGRAMMABLE_CONFIG_V1: Final[int] = 8
DELEGATE_AUTHORITY_ITEM_V1: Final[int] = 9
DELEGATE_DATA_ITEM_V1: Final[int] = 10
DELEGATE_COLLECTION_ITEM_V1: Final[int] = 11
DELEGATE_PROGRAMMABLE_CONFIG_ITEM_V1: Final[int] = 12
DELEGATE_PRINT_DELEGATE_V1: Final[int] = 13

# Tags of the `RevokeArgs` instruction enum.
REVOKE_COLLECTION_V1: Final[int] = 0
REVOKE_SALE_V1: Final[int] = 1
REVOKE_TRANSFER_V1: Final[int] = 2
REVOKE_DATA_V1: Final[int] = 3
REVOKE_UTILITY_V1: Final[int] = 4
REVOKE_STAKING_V1: Final[int] = 5
REVOKE_STANDARD_V1: Final[int] = 6
REVOKE_LOCKED_TRANSFER_V1: Final[int] = 7
REVOKE_PROGRAMMABLE_CONFIG_V1: Final[int] = 8
REVOKE_MIGRATION_V1: Final[int] = 9
REVOKE_AUTHORITY_ITEM_V1: Final[int] = 10
REVOKE_DATA_ITEM_V1: Final[int] = 11
REVOKE_COLLECTION_ITEM_V1: Final[int] = 12
REVOKE_PROGRAMMABLE_CONFIG_ITEM_V1: Final[int] = 13
REVOKE_PRINT_DELEGATE_V1: Final[int] = 14

# `MetadataDelegateRole` values as stored in metadata delegate records.
METADATA_DELEGATE_AUTHORITY_ITEM: Final[int] = 0
METADATA_DELEGATE_COLLECTION: Final[int] = 1
METADATA_DELEGATE_USE: Final[int] = 2
METADATA_DELEGATE_DATA: Final[int] = 3
METADATA_DELEGATE_PROGRAMMABLE_CONFIG: Final[int] = 4
METADATA_DELEGATE_DATA_ITEM: Final[int] = 5
METADATA_DELEGATE_COLLECTION_ITEM: Final[int] = 6
METADATA_DELEGATE_PROGRAMMABLE_CONFIG_ITEM: Final[int] = 7

# `TokenDelegateRole` values as stored in token records.
TOKEN_DELEGATE_SALE: Final[int] = 0
TOKEN_DELEGATE_TRANSFER: Final[int] = 1
TOKEN_DELEGATE_UTILITY: Final[int] = 2
TOKEN_DELEGATE_STAKING: Final[int] = 3
TOKEN_DELEGATE_STANDARD: Final[int] = 4
TOKEN_DELEGATE_LOCKED_TRANSFER: Final[int] = 5
TOKEN_DELEGATE_MIGRATION: Final[int] = 6


# ---------------------------------------------------------------------------
# BPF upgradeable loader state
# ---------------------------------------------------------------------------
LOADER_STATE_UNINITIALIZED: Final[int] = 0
LOADER_STATE_BUFFER: Final[int] = 1
LOADER_STATE_PROGRAM: Final[int] = 2
LOADER_STATE_PROGRAM_DATA: Final[int] = 3

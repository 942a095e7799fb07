"""Token Metadata program constants, seed tags and account layout sizes."""

from typing import Final

from solders.pubkey import Pubkey

# ---------------------------------------------------------------------------
# Program ids
# ---------------------------------------------------------------------------
TOKEN_METADATA_PROGRAM_ID: Final[Pubkey] = Pubkey.from_string(
    "metaqbxxUerdq28cj1RbAWkYQm3ybzjb6a8bt518x1s"
)
AUTH_RULES_PROGRAM_ID: Final[Pubkey] = Pubkey.from_string(
    "auth9SigNpDKz4sJJ1DfCTuZrZNSAgh9sFD3rboVmgg"
)
CANDY_MACHINE_V2_PROGRAM_ID: Final[Pubkey] = Pubkey.from_string(
    "cndy3Z4yapfJBmL3ShUp5exZKqR3z33thTzeNMm2gRZ"
)
SYSTEM_PROGRAM_ID: Final[Pubkey] = Pubkey.from_string(
    "11111111111111111111111111111111"
)
SPL_TOKEN_PROGRAM_ID: Final[Pubkey] = Pubkey.from_string(
    "TokenkegQfeZyiNwAJbNbGKPFXCWuBvf9Ss623VQ5DA"
)
SPL_ASSOCIATED_TOKEN_PROGRAM_ID: Final[Pubkey] = Pubkey.from_string(
    "ATokenGPvbdGVxr1b2hvZbsiqW5xWH25efTNsLJA8knL"
)
BPF_LOADER_UPGRADEABLE_PROGRAM_ID: Final[Pubkey] = Pubkey.from_string(
    "BPFLoaderUpgradeab1e11111111111111111111111"
)
SYSVAR_INSTRUCTIONS_ID: Final[Pubkey] = Pubkey.from_string(
    "Sysvar1nstructions1111111111111111111111111"
)
SYSVAR_RENT_ID: Final[Pubkey] = Pubkey.from_string(
    "SysvarRent111111111111111111111111111111111"
)


# ---------------------------------------------------------------------------
# PDA seed tags
# ---------------------------------------------------------------------------
PREFIX: Final[bytes] = b"metadata"
EDITION: Final[bytes] = b"edition"
TOKEN_RECORD_SEED: Final[bytes] = b"token_record"
COLLECTION_AUTHORITY: Final[bytes] = b"collection_authority"
USER: Final[bytes] = b"user"
CANDY_MACHINE: Final[bytes] = b"candy_machine"

# Editions are tracked in markers of 31 bytes, i.e. 248 bits.
EDITION_MARKER_BIT_SIZE: Final[int] = 248


# ---------------------------------------------------------------------------
# Account layout sizes and offsets
# ---------------------------------------------------------------------------
PUBKEY_LENGTH: Final[int] = 32
MINT_LAYOUT_SIZE: Final[int] = 82
TOKEN_ACCOUNT_SIZE: Final[int] = 165

# key (1) + update_authority (32) + mint (32) + name (4 + 32) + symbol (4 + 10)
# + uri (4 + 200) + seller_fee_basis_points (2) + creators option (1) + vec len (4)
OFFSET_TO_CREATORS: Final[int] = 326
OFFSET_TO_UPDATE_AUTHORITY: Final[int] = 1

MAX_NAME_LENGTH: Final[int] = 32
MAX_SYMBOL_LENGTH: Final[int] = 10
MAX_URI_LENGTH: Final[int] = 200
MAX_CREATOR_LIMIT: Final[int] = 5
MAX_SELLER_FEE_BASIS_POINTS: Final[int] = 10_000
MAX_MINT_DECIMALS: Final[int] = 9


# ---------------------------------------------------------------------------
# Rule sets
# ---------------------------------------------------------------------------
RULE_SET_SERIALIZED_HEADER_LEN: Final[int] = 9
RULE_SET_REV_MAP_VERSION: Final[int] = 1


# ---------------------------------------------------------------------------
# Compute budget
# ---------------------------------------------------------------------------
# Compute-unit prices in micro-lamports.
PRIORITY_FEE_NONE: Final[int] = 20
PRIORITY_FEE_LOW: Final[int] = 20_000
PRIORITY_FEE_MEDIUM: Final[int] = 200_000
PRIORITY_FEE_HIGH: Final[int] = 1_000_000
PRIORITY_FEE_MAX: Final[int] = 2_000_000

# Compute-unit limits requested per operation when a priority is attached.
CREATE_MINT_COMPUTE_UNITS: Final[int] = 250_000
TRANSFER_COMPUTE_UNITS: Final[int] = 100_000
BURN_COMPUTE_UNITS: Final[int] = 75_000
UPDATE_COMPUTE_UNITS: Final[int] = 50_000
DELEGATE_COMPUTE_UNITS: Final[int] = 50_000
REVOKE_COMPUTE_UNITS: Final[int] = 50_000
VERIFY_COMPUTE_UNITS: Final[int] = 50_000

DEFAULT_COMPUTE_UNIT_MULTIPLIER: Final[float] = 1.20


# ---------------------------------------------------------------------------
# Submission retries
# ---------------------------------------------------------------------------
RETRY_MAX_ATTEMPTS: Final[int] = 3
RETRY_BASE_DELAY_SECONDS: Final[float] = 0.25
RETRY_BACKOFF_FACTOR: Final[int] = 2

from __future__ import annotations

import enum
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from borsh_construct import U8, U32, U64, Bool, String
from solders.pubkey import Pubkey

from . import constants as const
from . import enums, layouts
from .codec import AddressLike, to_pubkey
from .errors import InvalidInputError


def encode_option(value: Any, encode: Callable[[Any], bytes]) -> bytes:
    """Borsh ``Option<T>``: a 0/1 tag followed by the encoded value when present."""
    if value is None:
        return b"\x00"
    return b"\x01" + encode(value)


def _pubkey(value: Pubkey) -> bytes:
    return bytes(value)


# ---------------------------------------------------------------------------
# Token standard and simple enums
# ---------------------------------------------------------------------------
class TokenStandard(enum.IntEnum):
    NON_FUNGIBLE = enums.TOKEN_STANDARD_NON_FUNGIBLE
    FUNGIBLE_ASSET = enums.TOKEN_STANDARD_FUNGIBLE_ASSET
    FUNGIBLE = enums.TOKEN_STANDARD_FUNGIBLE
    NON_FUNGIBLE_EDITION = enums.TOKEN_STANDARD_NON_FUNGIBLE_EDITION
    PROGRAMMABLE_NON_FUNGIBLE = enums.TOKEN_STANDARD_PROGRAMMABLE_NON_FUNGIBLE
    PROGRAMMABLE_NON_FUNGIBLE_EDITION = (
        enums.TOKEN_STANDARD_PROGRAMMABLE_NON_FUNGIBLE_EDITION
    )

    @property
    def is_fungible(self) -> bool:
        return self in (TokenStandard.FUNGIBLE, TokenStandard.FUNGIBLE_ASSET)

    @property
    def is_programmable(self) -> bool:
        return self in (
            TokenStandard.PROGRAMMABLE_NON_FUNGIBLE,
            TokenStandard.PROGRAMMABLE_NON_FUNGIBLE_EDITION,
        )


def requires_edition(token_standard: TokenStandard | None) -> bool:
    """
    True when instructions for an asset of this standard must carry its edition account.

    Accounts without a token standard are assumed to be non-fungible.
    """
    return token_standard is None or not token_standard.is_fungible


def supports_verification(token_standard: TokenStandard | None) -> bool:
    """True when creators and collections of an asset of this standard can be (un)verified."""
    return token_standard in (
        None,
        TokenStandard.NON_FUNGIBLE,
        TokenStandard.PROGRAMMABLE_NON_FUNGIBLE,
    )


class UseMethod(enum.IntEnum):
    BURN = enums.USE_METHOD_BURN
    MULTIPLE = enums.USE_METHOD_MULTIPLE
    SINGLE = enums.USE_METHOD_SINGLE


# ---------------------------------------------------------------------------
# Shared data types
# ---------------------------------------------------------------------------
@dataclass(frozen=True, slots=True)
class Creator:
    address: Pubkey
    verified: bool = False
    share: int = 0

    def __post_init__(self) -> None:
        if not 0 <= self.share <= 100:
            raise InvalidInputError("Creator share must be in 0..100")

    @staticmethod
    def new(address: AddressLike, *, verified: bool = False, share: int = 0) -> Creator:
        return Creator(address=to_pubkey(address), verified=verified, share=share)

    def to_container(self) -> dict[str, Any]:
        return {"address": self.address, "verified": self.verified, "share": self.share}

    @staticmethod
    def from_container(c: Any) -> Creator:
        return Creator(address=c.address, verified=bool(c.verified), share=int(c.share))


def _creators_container(
    creators: Sequence[Creator] | None,
) -> list[dict[str, Any]] | None:
    if creators is None:
        return None
    if len(creators) > const.MAX_CREATOR_LIMIT:
        raise InvalidInputError(
            f"At most {const.MAX_CREATOR_LIMIT} creators are allowed, got {len(creators)}"
        )
    return [c.to_container() for c in creators]


@dataclass(frozen=True, slots=True)
class Collection:
    key: Pubkey
    verified: bool = False

    def to_container(self) -> dict[str, Any]:
        return {"verified": self.verified, "key": self.key}

    @property
    def serialized(self) -> bytes:
        return layouts.COLLECTION.build(self.to_container())


@dataclass(frozen=True, slots=True)
class Uses:
    use_method: UseMethod
    remaining: int
    total: int

    def to_container(self) -> dict[str, Any]:
        return {
            "use_method": int(self.use_method),
            "remaining": self.remaining,
            "total": self.total,
        }

    @property
    def serialized(self) -> bytes:
        return layouts.USES.build(self.to_container())


@dataclass(frozen=True, slots=True)
class CollectionDetails:
    """
    Sized-collection details.

    V1 carries the collection size; V2 only reserves 8 bytes of padding (the size is
    tracked elsewhere on-chain).
    """

    version: int = enums.COLLECTION_DETAILS_V1
    size: int = 0
    padding: bytes = b"\x00" * 8

    @staticmethod
    def v1(size: int) -> CollectionDetails:
        return CollectionDetails(version=enums.COLLECTION_DETAILS_V1, size=size)

    @property
    def serialized(self) -> bytes:
        if self.version == enums.COLLECTION_DETAILS_V1:
            return U8.build(self.version) + U64.build(self.size)
        if self.version == enums.COLLECTION_DETAILS_V2:
            if len(self.padding) != 8:
                raise InvalidInputError("CollectionDetails V2 padding must be 8 bytes")
            return U8.build(self.version) + bytes(self.padding)
        raise InvalidInputError(f"Unknown CollectionDetails version: {self.version}")


@dataclass(frozen=True, slots=True)
class ProgrammableConfig:
    rule_set: Pubkey | None = None


@dataclass(frozen=True, slots=True)
class PrintSupply:
    """Number of prints a master edition allows: zero, a fixed limit, or unlimited."""

    kind: int
    limit: int | None = None

    @staticmethod
    def zero() -> PrintSupply:
        return PrintSupply(kind=enums.PRINT_SUPPLY_ZERO)

    @staticmethod
    def limited(limit: int) -> PrintSupply:
        if limit < 0:
            raise InvalidInputError("Print supply limit must be non-negative")
        return PrintSupply(kind=enums.PRINT_SUPPLY_LIMITED, limit=limit)

    @staticmethod
    def unlimited() -> PrintSupply:
        return PrintSupply(kind=enums.PRINT_SUPPLY_UNLIMITED)

    @property
    def serialized(self) -> bytes:
        if self.kind == enums.PRINT_SUPPLY_LIMITED:
            return U8.build(self.kind) + U64.build(self.limit or 0)
        return U8.build(self.kind)


# ---------------------------------------------------------------------------
# Authorization data
# ---------------------------------------------------------------------------
class PayloadKind(enum.IntEnum):
    PUBKEY = enums.PAYLOAD_TYPE_PUBKEY
    SEEDS = enums.PAYLOAD_TYPE_SEEDS
    MERKLE_PROOF = enums.PAYLOAD_TYPE_MERKLE_PROOF
    NUMBER = enums.PAYLOAD_TYPE_NUMBER


@dataclass(frozen=True, slots=True)
class PayloadValue:
    """One entry of an authorization payload, handed to the rule set on evaluation."""

    kind: PayloadKind
    value: Any

    @staticmethod
    def pubkey(value: AddressLike) -> PayloadValue:
        return PayloadValue(PayloadKind.PUBKEY, to_pubkey(value))

    @staticmethod
    def seeds(value: Sequence[bytes]) -> PayloadValue:
        return PayloadValue(PayloadKind.SEEDS, [bytes(s) for s in value])

    @staticmethod
    def merkle_proof(value: Sequence[bytes]) -> PayloadValue:
        proof = [bytes(p) for p in value]
        if any(len(p) != 32 for p in proof):
            raise InvalidInputError("Merkle proof nodes must be 32 bytes")
        return PayloadValue(PayloadKind.MERKLE_PROOF, proof)

    @staticmethod
    def number(value: int) -> PayloadValue:
        return PayloadValue(PayloadKind.NUMBER, int(value))

    @property
    def serialized(self) -> bytes:
        tag = U8.build(int(self.kind))
        match self.kind:
            case PayloadKind.PUBKEY:
                return tag + bytes(self.value)
            case PayloadKind.SEEDS:
                return tag + layouts.VEC_BYTES.build([list(s) for s in self.value])
            case PayloadKind.MERKLE_PROOF:
                return tag + layouts.VEC_BYTES_32.build(list(self.value))
            case PayloadKind.NUMBER:
                return tag + U64.build(self.value)
        raise InvalidInputError(f"Unknown payload kind: {self.kind}")


@dataclass(frozen=True, slots=True)
class AuthorizationData:
    payload: Mapping[str, PayloadValue] = field(default_factory=dict)

    @property
    def serialized(self) -> bytes:
        # Borsh maps are written in key order.
        out = bytearray(U32.build(len(self.payload)))
        for key in sorted(self.payload):
            out += String.build(key)
            out += self.payload[key].serialized
        return bytes(out)


def _authorization_data(value: AuthorizationData | None) -> bytes:
    return encode_option(value, lambda v: v.serialized)


# ---------------------------------------------------------------------------
# Asset data
# ---------------------------------------------------------------------------
def _check_lengths(name: str, symbol: str, uri: str, seller_fee_basis_points: int) -> None:
    if len(name.encode("utf-8")) > const.MAX_NAME_LENGTH:
        raise InvalidInputError(f"Name exceeds {const.MAX_NAME_LENGTH} bytes")
    if len(symbol.encode("utf-8")) > const.MAX_SYMBOL_LENGTH:
        raise InvalidInputError(f"Symbol exceeds {const.MAX_SYMBOL_LENGTH} bytes")
    if len(uri.encode("utf-8")) > const.MAX_URI_LENGTH:
        raise InvalidInputError(f"URI exceeds {const.MAX_URI_LENGTH} bytes")
    if not 0 <= seller_fee_basis_points <= const.MAX_SELLER_FEE_BASIS_POINTS:
        raise InvalidInputError(
            f"seller_fee_basis_points must be in 0..{const.MAX_SELLER_FEE_BASIS_POINTS}"
        )


@dataclass(frozen=True, slots=True)
class Data:
    """Mutable metadata fields, as replaced by an update."""

    name: str
    symbol: str
    uri: str
    seller_fee_basis_points: int = 0
    creators: Sequence[Creator] | None = None

    def __post_init__(self) -> None:
        _check_lengths(self.name, self.symbol, self.uri, self.seller_fee_basis_points)

    def to_container(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "symbol": self.symbol,
            "uri": self.uri,
            "seller_fee_basis_points": self.seller_fee_basis_points,
            "creators": _creators_container(self.creators),
        }

    @property
    def serialized(self) -> bytes:
        return layouts.DATA.build(self.to_container())


@dataclass(frozen=True, slots=True)
class DataV2:
    """Data accepted by the legacy ``CreateMetadataAccountV3`` instruction."""

    name: str
    symbol: str
    uri: str
    seller_fee_basis_points: int = 0
    creators: Sequence[Creator] | None = None
    collection: Collection | None = None
    uses: Uses | None = None

    def __post_init__(self) -> None:
        _check_lengths(self.name, self.symbol, self.uri, self.seller_fee_basis_points)

    @property
    def serialized(self) -> bytes:
        return layouts.DATA_V2.build(
            {
                "name": self.name,
                "symbol": self.symbol,
                "uri": self.uri,
                "seller_fee_basis_points": self.seller_fee_basis_points,
                "creators": _creators_container(self.creators),
                "collection": (
                    None if self.collection is None else self.collection.to_container()
                ),
                "uses": None if self.uses is None else self.uses.to_container(),
            }
        )


@dataclass(frozen=True, slots=True)
class AssetData:
    """Initial state of an asset, recorded by the create instruction."""

    name: str
    symbol: str
    uri: str
    seller_fee_basis_points: int
    token_standard: TokenStandard
    creators: Sequence[Creator] | None = None
    primary_sale_happened: bool = False
    is_mutable: bool = True
    collection: Collection | None = None
    uses: Uses | None = None
    collection_details: CollectionDetails | None = None
    rule_set: Pubkey | None = None

    def __post_init__(self) -> None:
        _check_lengths(self.name, self.symbol, self.uri, self.seller_fee_basis_points)

    @property
    def serialized(self) -> bytes:
        head = layouts.DATA.build(
            {
                "name": self.name,
                "symbol": self.symbol,
                "uri": self.uri,
                "seller_fee_basis_points": self.seller_fee_basis_points,
                "creators": _creators_container(self.creators),
            }
        )
        return (
            head
            + Bool.build(self.primary_sale_happened)
            + Bool.build(self.is_mutable)
            + U8.build(int(self.token_standard))
            + encode_option(self.collection, lambda c: c.serialized)
            + encode_option(self.uses, lambda u: u.serialized)
            + encode_option(self.collection_details, lambda d: d.serialized)
            + encode_option(self.rule_set, _pubkey)
        )


# ---------------------------------------------------------------------------
# Update toggles
# ---------------------------------------------------------------------------
class ToggleKind(enum.IntEnum):
    NONE = enums.TOGGLE_NONE
    CLEAR = enums.TOGGLE_CLEAR
    SET = enums.TOGGLE_SET


@dataclass(frozen=True, slots=True)
class Toggle:
    """
    Three-way update of an optional field: leave untouched, clear it, or set a value.

    Unlike ``Optional``, this distinguishes "leave as is" from "clear".
    """

    kind: ToggleKind = ToggleKind.NONE
    value: Any = None

    @staticmethod
    def none() -> Toggle:
        return Toggle(ToggleKind.NONE)

    @staticmethod
    def clear() -> Toggle:
        return Toggle(ToggleKind.CLEAR)

    @staticmethod
    def set(value: Any) -> Toggle:
        if value is None:
            raise InvalidInputError("Toggle.set requires a value; use Toggle.clear()")
        return Toggle(ToggleKind.SET, value)

    @property
    def is_none(self) -> bool:
        return self.kind == ToggleKind.NONE

    def encode(self, encode_value: Callable[[Any], bytes]) -> bytes:
        tag = U8.build(int(self.kind))
        if self.kind == ToggleKind.SET:
            return tag + encode_value(self.value)
        return tag


@dataclass(frozen=True, slots=True)
class UpdateArgs:
    """
    Changes applied by an update. Every field defaults to "leave untouched".

    ``collection``, ``collection_details``, ``uses`` and ``rule_set`` are :class:`Toggle`
    values holding a :class:`Collection`, :class:`CollectionDetails`, :class:`Uses`
    and a ``Pubkey`` respectively.
    """

    new_update_authority: Pubkey | None = None
    data: Data | None = None
    primary_sale_happened: bool | None = None
    is_mutable: bool | None = None
    collection: Toggle = field(default_factory=Toggle.none)
    collection_details: Toggle = field(default_factory=Toggle.none)
    uses: Toggle = field(default_factory=Toggle.none)
    rule_set: Toggle = field(default_factory=Toggle.none)
    authorization_data: AuthorizationData | None = None

    @property
    def serialized(self) -> bytes:
        return (
            encode_option(self.new_update_authority, _pubkey)
            + encode_option(self.data, lambda d: d.serialized)
            + encode_option(self.primary_sale_happened, Bool.build)
            + encode_option(self.is_mutable, Bool.build)
            + self.collection.encode(lambda c: c.serialized)
            + self.collection_details.encode(lambda d: d.serialized)
            + self.uses.encode(lambda u: u.serialized)
            + self.rule_set.encode(lambda r: bytes(to_pubkey(r)))
            + _authorization_data(self.authorization_data)
        )


# ---------------------------------------------------------------------------
# Delegates
# ---------------------------------------------------------------------------
class MetadataDelegateRole(enum.IntEnum):
    AUTHORITY_ITEM = enums.METADATA_DELEGATE_AUTHORITY_ITEM
    COLLECTION = enums.METADATA_DELEGATE_COLLECTION
    USE = enums.METADATA_DELEGATE_USE
    DATA = enums.METADATA_DELEGATE_DATA
    PROGRAMMABLE_CONFIG = enums.METADATA_DELEGATE_PROGRAMMABLE_CONFIG
    DATA_ITEM = enums.METADATA_DELEGATE_DATA_ITEM
    COLLECTION_ITEM = enums.METADATA_DELEGATE_COLLECTION_ITEM
    PROGRAMMABLE_CONFIG_ITEM = enums.METADATA_DELEGATE_PROGRAMMABLE_CONFIG_ITEM

    @property
    def seed(self) -> bytes:
        return _METADATA_DELEGATE_SEEDS[self]


_METADATA_DELEGATE_SEEDS: Mapping[MetadataDelegateRole, bytes] = {
    MetadataDelegateRole.AUTHORITY_ITEM: b"authority_item_delegate",
    MetadataDelegateRole.COLLECTION: b"collection_delegate",
    MetadataDelegateRole.USE: b"use_delegate",
    MetadataDelegateRole.DATA: b"data_delegate",
    MetadataDelegateRole.PROGRAMMABLE_CONFIG: b"programmable_config_delegate",
    MetadataDelegateRole.DATA_ITEM: b"data_item_delegate",
    MetadataDelegateRole.COLLECTION_ITEM: b"collection_item_delegate",
    MetadataDelegateRole.PROGRAMMABLE_CONFIG_ITEM: b"prog_config_item_delegate",
}


class TokenDelegateRole(enum.IntEnum):
    """Role recorded in a token record next to its delegate."""

    SALE = enums.TOKEN_DELEGATE_SALE
    TRANSFER = enums.TOKEN_DELEGATE_TRANSFER
    UTILITY = enums.TOKEN_DELEGATE_UTILITY
    STAKING = enums.TOKEN_DELEGATE_STAKING
    STANDARD = enums.TOKEN_DELEGATE_STANDARD
    LOCKED_TRANSFER = enums.TOKEN_DELEGATE_LOCKED_TRANSFER
    MIGRATION = enums.TOKEN_DELEGATE_MIGRATION


class DelegateFamily(enum.Enum):
    TOKEN_RECORD = "token_record"
    METADATA_RECORD = "metadata_record"
    STANDARD = "standard"


class DelegateRole(enum.Enum):
    COLLECTION = "collection"
    SALE = "sale"
    TRANSFER = "transfer"
    DATA = "data"
    UTILITY = "utility"
    STAKING = "staking"
    STANDARD = "standard"
    LOCKED_TRANSFER = "locked_transfer"
    PROGRAMMABLE_CONFIG = "programmable_config"
    AUTHORITY_ITEM = "authority_item"
    DATA_ITEM = "data_item"
    COLLECTION_ITEM = "collection_item"
    PROGRAMMABLE_CONFIG_ITEM = "programmable_config_item"
    PRINT_DELEGATE = "print_delegate"
    MIGRATION = "migration"

    @property
    def spec(self) -> RoleSpec:
        return ROLE_TABLE[self]

    @property
    def family(self) -> DelegateFamily:
        return ROLE_TABLE[self].family


@dataclass(frozen=True, slots=True)
class RoleSpec:
    """
    How one delegate role is encoded and which accounts it resolves.

    `delegate_tag` is None for roles that can only be revoked.
    """

    family: DelegateFamily
    delegate_tag: int | None
    revoke_tag: int
    metadata_role: MetadataDelegateRole | None = None
    has_amount: bool = False
    has_locked_address: bool = False
    has_authorization_data: bool = True


_TOKEN = DelegateFamily.TOKEN_RECORD
_METADATA = DelegateFamily.METADATA_RECORD

ROLE_TABLE: Mapping[DelegateRole, RoleSpec] = {
    DelegateRole.COLLECTION: RoleSpec(
        _METADATA,
        enums.DELEGATE_COLLECTION_V1,
        enums.REVOKE_COLLECTION_V1,
        metadata_role=MetadataDelegateRole.COLLECTION,
    ),
    DelegateRole.SALE: RoleSpec(
        _TOKEN, enums.DELEGATE_SALE_V1, enums.REVOKE_SALE_V1, has_amount=True
    ),
    DelegateRole.TRANSFER: RoleSpec(
        _TOKEN, enums.DELEGATE_TRANSFER_V1, enums.REVOKE_TRANSFER_V1, has_amount=True
    ),
    DelegateRole.DATA: RoleSpec(
        _METADATA,
        enums.DELEGATE_DATA_V1,
        enums.REVOKE_DATA_V1,
        metadata_role=MetadataDelegateRole.DATA,
    ),
    DelegateRole.UTILITY: RoleSpec(
        _TOKEN, enums.DELEGATE_UTILITY_V1, enums.REVOKE_UTILITY_V1, has_amount=True
    ),
    DelegateRole.STAKING: RoleSpec(
        _TOKEN, enums.DELEGATE_STAKING_V1, enums.REVOKE_STAKING_V1, has_amount=True
    ),
    DelegateRole.STANDARD: RoleSpec(
        DelegateFamily.STANDARD,
        enums.DELEGATE_STANDARD_V1,
        enums.REVOKE_STANDARD_V1,
        has_amount=True,
        has_authorization_data=False,
    ),
    DelegateRole.LOCKED_TRANSFER: RoleSpec(
        _TOKEN,
        enums.DELEGATE_LOCKED_TRANSFER_V1,
        enums.REVOKE_LOCKED_TRANSFER_V1,
        has_amount=True,
        has_locked_address=True,
    ),
    DelegateRole.PROGRAMMABLE_CONFIG: RoleSpec(
        _METADATA,
        enums.DELEGATE_PROGRAMMABLE_CONFIG_V1,
        enums.REVOKE_PROGRAMMABLE_CONFIG_V1,
        metadata_role=MetadataDelegateRole.PROGRAMMABLE_CONFIG,
    ),
    DelegateRole.AUTHORITY_ITEM: RoleSpec(
        _METADATA,
        enums.DELEGATE_AUTHORITY_ITEM_V1,
        enums.REVOKE_AUTHORITY_ITEM_V1,
        metadata_role=MetadataDelegateRole.AUTHORITY_ITEM,
    ),
    DelegateRole.DATA_ITEM: RoleSpec(
        _METADATA,
        enums.DELEGATE_DATA_ITEM_V1,
        enums.REVOKE_DATA_ITEM_V1,
        metadata_role=MetadataDelegateRole.DATA_ITEM,
    ),
    DelegateRole.COLLECTION_ITEM: RoleSpec(
        _METADATA,
        enums.DELEGATE_COLLECTION_ITEM_V1,
        enums.REVOKE_COLLECTION_ITEM_V1,
        metadata_role=MetadataDelegateRole.COLLECTION_ITEM,
    ),
    DelegateRole.PROGRAMMABLE_CONFIG_ITEM: RoleSpec(
        _METADATA,
        enums.DELEGATE_PROGRAMMABLE_CONFIG_ITEM_V1,
        enums.REVOKE_PROGRAMMABLE_CONFIG_ITEM_V1,
        metadata_role=MetadataDelegateRole.PROGRAMMABLE_CONFIG_ITEM,
    ),
    DelegateRole.PRINT_DELEGATE: RoleSpec(
        _TOKEN, enums.DELEGATE_PRINT_DELEGATE_V1, enums.REVOKE_PRINT_DELEGATE_V1
    ),
    DelegateRole.MIGRATION: RoleSpec(_TOKEN, None, enums.REVOKE_MIGRATION_V1),
}


@dataclass(frozen=True, slots=True)
class DelegateArgs:
    """
    Arguments of a delegate instruction.

    `amount` is only encoded for roles that carry one (Sale, Transfer, Utility, Staking,
    Standard, LockedTransfer); `locked_address` is required for LockedTransfer.
    """

    role: DelegateRole
    amount: int = 1
    locked_address: Pubkey | None = None
    authorization_data: AuthorizationData | None = None

    def __post_init__(self) -> None:
        spec = self.role.spec
        if spec.delegate_tag is None:
            raise InvalidInputError(f"{self.role.name} can only be revoked")
        if spec.has_locked_address and self.locked_address is None:
            raise InvalidInputError("LOCKED_TRANSFER requires a locked_address")
        if spec.has_amount and self.amount < 0:
            raise InvalidInputError("Delegate amount must be non-negative")

    @property
    def serialized(self) -> bytes:
        spec = self.role.spec
        out = U8.build(spec.delegate_tag)
        if spec.has_amount:
            out += U64.build(self.amount)
        if spec.has_locked_address:
            out += bytes(to_pubkey(self.locked_address))
        if spec.has_authorization_data:
            out += _authorization_data(self.authorization_data)
        return out


@dataclass(frozen=True, slots=True)
class RevokeArgs:
    role: DelegateRole

    @property
    def serialized(self) -> bytes:
        return U8.build(self.role.spec.revoke_tag)

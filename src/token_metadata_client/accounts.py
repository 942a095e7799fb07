"""
Decoded Token Metadata, SPL token and loader accounts.

Every record exposes a ``parse(data)`` constructor that raises :class:`DecodeError`
when the bytes do not match the expected layout.
"""

from __future__ import annotations

import io
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from borsh_construct import U8, U64
from construct import ConstructError
from solders.pubkey import Pubkey

from . import enums, layouts
from .codec import strip_padding
from .errors import DecodeError
from .models import (
    Collection,
    CollectionDetails,
    Creator,
    ProgrammableConfig,
    TokenDelegateRole,
    TokenStandard,
    UseMethod,
    Uses,
)


def _parse(layout: Any, data: bytes, *, what: str) -> Any:
    try:
        return layout.parse(data)
    except (ConstructError, ValueError) as e:
        raise DecodeError(f"Failed to decode {what}") from e


def _expect_key(actual: int, expected: int, *, what: str) -> None:
    if actual != expected:
        raise DecodeError(f"Invalid {what} account key: {actual} (expected {expected})")


# ---------------------------------------------------------------------------
# Metadata
# ---------------------------------------------------------------------------
def _read_collection_details(stream: io.BytesIO) -> CollectionDetails | None:
    if U8.parse_stream(stream) == 0:
        return None
    version = U8.parse_stream(stream)
    if version == enums.COLLECTION_DETAILS_V1:
        return CollectionDetails.v1(U64.parse_stream(stream))
    if version == enums.COLLECTION_DETAILS_V2:
        return CollectionDetails(
            version=version, padding=layouts.BYTES_8.parse_stream(stream)
        )
    raise ValueError(f"Unknown collection details variant: {version}")


def _read_programmable_config(stream: io.BytesIO) -> ProgrammableConfig | None:
    tag = U8.parse_stream(stream)
    if tag == 0:
        return None
    version = U8.parse_stream(stream)
    if version != 0:
        raise ValueError(f"Unknown programmable config variant: {version}")
    return ProgrammableConfig(rule_set=layouts.OPTION_PUBKEY.parse_stream(stream))


@dataclass(frozen=True, slots=True)
class MetadataData:
    name: str
    symbol: str
    uri: str
    seller_fee_basis_points: int
    creators: Sequence[Creator] | None


@dataclass(frozen=True, slots=True)
class Metadata:
    """
    Token Metadata account.

    Fields after ``is_mutable`` were added in later program versions; they decode as
    ``None`` for accounts that predate them.
    """

    key: int
    update_authority: Pubkey
    mint: Pubkey
    data: MetadataData
    primary_sale_happened: bool
    is_mutable: bool
    edition_nonce: int | None = None
    token_standard: TokenStandard | None = None
    collection: Collection | None = None
    uses: Uses | None = None
    collection_details: CollectionDetails | None = None
    programmable_config: ProgrammableConfig | None = None

    @property
    def name(self) -> str:
        return strip_padding(self.data.name)

    @property
    def symbol(self) -> str:
        return strip_padding(self.data.symbol)

    @property
    def uri(self) -> str:
        return strip_padding(self.data.uri)

    @property
    def rule_set(self) -> Pubkey | None:
        if self.programmable_config is None:
            return None
        return self.programmable_config.rule_set

    @property
    def verified_collection(self) -> Collection | None:
        if self.collection is not None and self.collection.verified:
            return self.collection
        return None

    @classmethod
    def parse(cls, data: bytes) -> Metadata:
        stream = io.BytesIO(data)
        try:
            head = layouts.METADATA_HEAD.parse_stream(stream)
        except (ConstructError, ValueError) as e:
            raise DecodeError("Failed to decode metadata account") from e
        _expect_key(head.key, enums.KEY_METADATA_V1, what="metadata")

        creators = head.data.creators
        md_data = MetadataData(
            name=head.data.name,
            symbol=head.data.symbol,
            uri=head.data.uri,
            seller_fee_basis_points=head.data.seller_fee_basis_points,
            creators=(
                None
                if creators is None
                else tuple(Creator.from_container(c) for c in creators)
            ),
        )

        tail: dict[str, Any] = {}
        readers = (
            ("edition_nonce", lambda s: layouts.OPTION_U8.parse_stream(s)),
            ("token_standard", lambda s: layouts.OPTION_U8.parse_stream(s)),
            ("collection", lambda s: layouts.OPTION_COLLECTION.parse_stream(s)),
            ("uses", lambda s: layouts.OPTION_USES.parse_stream(s)),
            ("collection_details", _read_collection_details),
            ("programmable_config", _read_programmable_config),
        )
        # Older or corrupted accounts end early: everything after the first
        # unreadable field is treated as absent.
        for name, read in readers:
            try:
                tail[name] = read(stream)
            except (ConstructError, ValueError):
                break

        token_standard = tail.get("token_standard")
        if token_standard is not None:
            try:
                token_standard = TokenStandard(token_standard)
            except ValueError:
                token_standard = None

        collection = tail.get("collection")
        uses = tail.get("uses")
        if uses is not None:
            try:
                use_method = UseMethod(uses.use_method)
            except ValueError as e:
                raise DecodeError(f"Unknown use method: {uses.use_method}") from e
            uses = Uses(use_method=use_method, remaining=uses.remaining, total=uses.total)
        return cls(
            key=head.key,
            update_authority=head.update_authority,
            mint=head.mint,
            data=md_data,
            primary_sale_happened=bool(head.primary_sale_happened),
            is_mutable=bool(head.is_mutable),
            edition_nonce=tail.get("edition_nonce"),
            token_standard=token_standard,
            collection=(
                None
                if collection is None
                else Collection(key=collection.key, verified=bool(collection.verified))
            ),
            uses=uses,
            collection_details=tail.get("collection_details"),
            programmable_config=tail.get("programmable_config"),
        )


# ---------------------------------------------------------------------------
# Editions
# ---------------------------------------------------------------------------
@dataclass(frozen=True, slots=True)
class MasterEdition:
    key: int
    supply: int
    max_supply: int | None

    @classmethod
    def parse(cls, data: bytes) -> MasterEdition:
        c = _parse(layouts.MASTER_EDITION, data, what="master edition")
        if c.key not in (enums.KEY_MASTER_EDITION_V1, enums.KEY_MASTER_EDITION_V2):
            raise DecodeError(f"Invalid master edition account key: {c.key}")
        return cls(key=c.key, supply=c.supply, max_supply=c.max_supply)


@dataclass(frozen=True, slots=True)
class Edition:
    key: int
    parent: Pubkey
    edition: int

    @classmethod
    def parse(cls, data: bytes) -> Edition:
        c = _parse(layouts.EDITION, data, what="edition")
        _expect_key(c.key, enums.KEY_EDITION_V1, what="edition")
        return cls(key=c.key, parent=c.parent, edition=c.edition)


@dataclass(frozen=True, slots=True)
class EditionMarker:
    key: int
    ledger: bytes

    def is_printed(self, edition_number: int) -> bool:
        """True if `edition_number` has been printed, according to this marker's bitmap."""
        bit = edition_number % 248
        return bool(self.ledger[bit // 8] & (0b1000_0000 >> (bit % 8)))

    @classmethod
    def parse(cls, data: bytes) -> EditionMarker:
        c = _parse(layouts.EDITION_MARKER, data, what="edition marker")
        _expect_key(c.key, enums.KEY_EDITION_MARKER, what="edition marker")
        return cls(key=c.key, ledger=bytes(c.ledger))


# ---------------------------------------------------------------------------
# Delegate and authority records
# ---------------------------------------------------------------------------
@dataclass(frozen=True, slots=True)
class TokenRecord:
    key: int
    bump: int
    state: int
    rule_set_revision: int | None
    delegate: Pubkey | None
    delegate_role: TokenDelegateRole | None
    locked_transfer: Pubkey | None

    @property
    def is_locked(self) -> bool:
        return self.state == enums.TOKEN_STATE_LOCKED

    @classmethod
    def parse(cls, data: bytes) -> TokenRecord:
        c = _parse(layouts.TOKEN_RECORD, data, what="token record")
        _expect_key(c.key, enums.KEY_TOKEN_RECORD, what="token record")
        try:
            role = None if c.delegate_role is None else TokenDelegateRole(c.delegate_role)
        except ValueError as e:
            raise DecodeError(f"Unknown token delegate role: {c.delegate_role}") from e
        return cls(
            key=c.key,
            bump=c.bump,
            state=c.state,
            rule_set_revision=c.rule_set_revision,
            delegate=c.delegate,
            delegate_role=role,
            locked_transfer=c.locked_transfer,
        )


@dataclass(frozen=True, slots=True)
class MetadataDelegateRecord:
    key: int
    bump: int
    mint: Pubkey
    delegate: Pubkey
    update_authority: Pubkey

    @classmethod
    def parse(cls, data: bytes) -> MetadataDelegateRecord:
        c = _parse(layouts.METADATA_DELEGATE_RECORD, data, what="metadata delegate")
        _expect_key(c.key, enums.KEY_METADATA_DELEGATE, what="metadata delegate")
        return cls(
            key=c.key,
            bump=c.bump,
            mint=c.mint,
            delegate=c.delegate,
            update_authority=c.update_authority,
        )


@dataclass(frozen=True, slots=True)
class CollectionAuthorityRecord:
    key: int
    bump: int
    update_authority: Pubkey | None

    @classmethod
    def parse(cls, data: bytes) -> CollectionAuthorityRecord:
        c = _parse(
            layouts.COLLECTION_AUTHORITY_RECORD, data, what="collection authority record"
        )
        _expect_key(
            c.key,
            enums.KEY_COLLECTION_AUTHORITY_RECORD,
            what="collection authority record",
        )
        return cls(key=c.key, bump=c.bump, update_authority=c.update_authority)


@dataclass(frozen=True, slots=True)
class UseAuthorityRecord:
    key: int
    allowed_uses: int
    bump: int

    @classmethod
    def parse(cls, data: bytes) -> UseAuthorityRecord:
        c = _parse(layouts.USE_AUTHORITY_RECORD, data, what="use authority record")
        _expect_key(c.key, enums.KEY_USE_AUTHORITY_RECORD, what="use authority record")
        return cls(key=c.key, allowed_uses=c.allowed_uses, bump=c.bump)


# ---------------------------------------------------------------------------
# SPL token
# ---------------------------------------------------------------------------
@dataclass(frozen=True, slots=True)
class MintAccount:
    mint_authority: Pubkey | None
    supply: int
    decimals: int
    is_initialized: bool
    freeze_authority: Pubkey | None

    @classmethod
    def parse(cls, data: bytes) -> MintAccount:
        c = _parse(layouts.SPL_MINT, data, what="mint")
        return cls(
            mint_authority=c.mint_authority if c.mint_authority_option else None,
            supply=c.supply,
            decimals=c.decimals,
            is_initialized=bool(c.is_initialized),
            freeze_authority=c.freeze_authority if c.freeze_authority_option else None,
        )


@dataclass(frozen=True, slots=True)
class TokenAccount:
    mint: Pubkey
    owner: Pubkey
    amount: int
    delegate: Pubkey | None
    state: int
    is_native: int | None
    delegated_amount: int
    close_authority: Pubkey | None

    @property
    def is_frozen(self) -> bool:
        return self.state == enums.SPL_ACCOUNT_STATE_FROZEN

    @classmethod
    def parse(cls, data: bytes) -> TokenAccount:
        c = _parse(layouts.SPL_TOKEN_ACCOUNT, data, what="token account")
        if c.state == enums.SPL_ACCOUNT_STATE_UNINITIALIZED:
            raise DecodeError("Token account is not initialized")
        return cls(
            mint=c.mint,
            owner=c.owner,
            amount=c.amount,
            delegate=c.delegate if c.delegate_option else None,
            state=c.state,
            is_native=c.is_native if c.is_native_option else None,
            delegated_amount=c.delegated_amount,
            close_authority=c.close_authority if c.close_authority_option else None,
        )


# ---------------------------------------------------------------------------
# BPF upgradeable loader
# ---------------------------------------------------------------------------
@dataclass(frozen=True, slots=True)
class UpgradeableLoaderState:
    """
    State of an account owned by the upgradeable BPF loader.

    Only the fields relevant to `kind` are set.
    """

    kind: int
    authority_address: Pubkey | None = None
    programdata_address: Pubkey | None = None
    slot: int | None = None

    @classmethod
    def parse(cls, data: bytes) -> UpgradeableLoaderState:
        stream = io.BytesIO(data)
        try:
            kind = layouts.LOADER_STATE_TAG.parse_stream(stream)
            match kind:
                case enums.LOADER_STATE_UNINITIALIZED:
                    return cls(kind=kind)
                case enums.LOADER_STATE_BUFFER:
                    c = layouts.LOADER_BUFFER.parse_stream(stream)
                    return cls(kind=kind, authority_address=c.authority_address)
                case enums.LOADER_STATE_PROGRAM:
                    c = layouts.LOADER_PROGRAM.parse_stream(stream)
                    return cls(kind=kind, programdata_address=c.programdata_address)
                case enums.LOADER_STATE_PROGRAM_DATA:
                    c = layouts.LOADER_PROGRAM_DATA.parse_stream(stream)
                    return cls(
                        kind=kind,
                        slot=c.slot,
                        authority_address=c.upgrade_authority_address,
                    )
        except (ConstructError, ValueError) as e:
            raise DecodeError("Failed to decode upgradeable loader state") from e
        raise DecodeError(f"Unknown upgradeable loader state: {kind}")

"""
``key=value`` expectations against decoded metadata.

Grammar (one expectation per string, split on the first ``=``)::

    name=<text> | symbol=<text> | uri=<text> | sfbp=<u16>
    creators=<address>:<true|false>:<share>[,<address>:<true|false>:<share>...]
    update_authority=<address> | primary_sale_happened=<bool> | is_mutable=<bool>
    token_standard=<fungible|fungible_asset|nonfungible|nonfungible_edition|
                    programmable_nonfungible|programmable_nonfungible_edition>
    collection_parent=<address> | collection_verified=<bool> | rule_set=<address>
"""

from __future__ import annotations

import enum
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from .accounts import Metadata
from .codec import to_pubkey
from .errors import InvalidInputError
from .models import Creator, TokenStandard

TOKEN_STANDARD_NAMES: Mapping[TokenStandard, str] = {
    TokenStandard.FUNGIBLE: "fungible",
    TokenStandard.FUNGIBLE_ASSET: "fungible_asset",
    TokenStandard.NON_FUNGIBLE: "nonfungible",
    TokenStandard.NON_FUNGIBLE_EDITION: "nonfungible_edition",
    TokenStandard.PROGRAMMABLE_NON_FUNGIBLE: "programmable_nonfungible",
    TokenStandard.PROGRAMMABLE_NON_FUNGIBLE_EDITION: "programmable_nonfungible_edition",
}


class MetadataKey(str, enum.Enum):
    NAME = "name"
    SYMBOL = "symbol"
    URI = "uri"
    SELLER_FEE_BASIS_POINTS = "sfbp"
    CREATORS = "creators"
    UPDATE_AUTHORITY = "update_authority"
    PRIMARY_SALE_HAPPENED = "primary_sale_happened"
    IS_MUTABLE = "is_mutable"
    TOKEN_STANDARD = "token_standard"
    COLLECTION_PARENT = "collection_parent"
    COLLECTION_VERIFIED = "collection_verified"
    RULE_SET = "rule_set"


_BOOL_KEYS = frozenset(
    {
        MetadataKey.PRIMARY_SALE_HAPPENED,
        MetadataKey.IS_MUTABLE,
        MetadataKey.COLLECTION_VERIFIED,
    }
)


def _parse_bool(raw: str) -> bool:
    if raw == "true":
        return True
    if raw == "false":
        return False
    raise InvalidInputError(f"Expected 'true' or 'false', got {raw!r}")


def _parse_u(raw: str, *, bits: int) -> int:
    if not (raw.isascii() and raw.isdigit()):
        raise InvalidInputError(f"Expected an unsigned integer, got {raw!r}")
    value = int(raw)
    if value >= 1 << bits:
        raise InvalidInputError(f"{raw} does not fit in u{bits}")
    return value


def _parse_creator(raw: str) -> Creator:
    parts = raw.split(":")
    if len(parts) != 3:
        raise InvalidInputError(f"Creator must be address:verified:share, got {raw!r}")
    address, verified, share = parts
    return Creator(
        address=to_pubkey(address),
        verified=_parse_bool(verified),
        share=_parse_u(share, bits=8),
    )


def _format_bool(value: bool) -> str:
    return "true" if value else "false"


@dataclass(frozen=True, slots=True)
class MetadataValue:
    """A single ``key=value`` expectation about a metadata account."""

    key: MetadataKey
    value: Any

    @classmethod
    def parse(cls, s: str) -> MetadataValue:
        raw_key, sep, raw = s.partition("=")
        if not sep:
            raise InvalidInputError(f"Expected key=value, got {s!r}")
        try:
            key = MetadataKey(raw_key)
        except ValueError as e:
            raise InvalidInputError(f"Invalid metadata key: {raw_key!r}") from e

        value: Any
        if key in _BOOL_KEYS:
            value = _parse_bool(raw)
        elif key == MetadataKey.SELLER_FEE_BASIS_POINTS:
            value = _parse_u(raw, bits=16)
        elif key == MetadataKey.CREATORS:
            value = tuple(_parse_creator(c) for c in raw.split(","))
        else:
            value = raw
        return cls(key=key, value=value)

    def __str__(self) -> str:
        if self.key in _BOOL_KEYS:
            raw = _format_bool(self.value)
        elif self.key == MetadataKey.CREATORS:
            raw = ",".join(
                f"{c.address}:{_format_bool(c.verified)}:{c.share}" for c in self.value
            )
        else:
            raw = str(self.value)
        return f"{self.key.value}={raw}"


def check_metadata_value(metadata: Metadata, expected: MetadataValue) -> bool:
    """
    True if `metadata` satisfies `expected`.

    Names match by containment (on-chain names are padded); other keys by equality.
    Keys referring to optional fields are False when the field is absent.
    """
    value = expected.value
    match expected.key:
        case MetadataKey.NAME:
            return value in metadata.name
        case MetadataKey.SYMBOL:
            return value == metadata.symbol
        case MetadataKey.URI:
            return value == metadata.uri
        case MetadataKey.SELLER_FEE_BASIS_POINTS:
            return value == metadata.data.seller_fee_basis_points
        case MetadataKey.CREATORS:
            creators = metadata.data.creators
            return creators is not None and tuple(value) == tuple(creators)
        case MetadataKey.UPDATE_AUTHORITY:
            return value == str(metadata.update_authority)
        case MetadataKey.PRIMARY_SALE_HAPPENED:
            return value == metadata.primary_sale_happened
        case MetadataKey.IS_MUTABLE:
            return value == metadata.is_mutable
        case MetadataKey.TOKEN_STANDARD:
            if metadata.token_standard is None:
                return False
            return value == TOKEN_STANDARD_NAMES[metadata.token_standard]
        case MetadataKey.COLLECTION_PARENT:
            if metadata.collection is None:
                return False
            return value == str(metadata.collection.key)
        case MetadataKey.COLLECTION_VERIFIED:
            if metadata.collection is None:
                return False
            return value == metadata.collection.verified
        case MetadataKey.RULE_SET:
            rule_set = metadata.rule_set
            return rule_set is not None and value == str(rule_set)
    return False

"""
Rule-set account decoding.

A rule-set account stores every revision of the set back to back, followed by a
revision map::

    header (key: u8, rev_map_version_location: u64)
    revision 0: version byte + MessagePack payload
    revision 1: ...
    rev_map_version_location -> revision map version (u8) + Vec<u64> revision offsets
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

import msgpack
from construct import ConstructError
from solders.pubkey import Pubkey

from .. import constants as const
from .. import layouts
from ..codec import AddressLike, to_pubkey
from ..errors import (
    DecodeError,
    NumericalOverflowError,
    RuleSetRevisionNotAvailableError,
)
from ..rpc import ChainReader

logger = logging.getLogger(__name__)

_MAX_U64 = 2**64 - 1


def _checked_add(a: int, b: int) -> int:
    total = a + b
    if total > _MAX_U64:
        raise NumericalOverflowError("Rule set offset overflows u64")
    return total


@dataclass(frozen=True, slots=True)
class RuleSet:
    lib_version: int
    owner: Pubkey
    name: str
    operations: Mapping[str, Any] = field(default_factory=dict)

    @staticmethod
    def from_msgpack(obj: Any) -> RuleSet:
        if isinstance(obj, Mapping):
            values: Sequence[Any] = (
                obj.get("lib_version"),
                obj.get("owner"),
                obj.get("rule_set_name"),
                obj.get("operations", {}),
            )
        elif isinstance(obj, Sequence) and len(obj) == 4:
            values = obj
        else:
            raise DecodeError("Unexpected rule set payload shape")
        lib_version, owner, name, operations = values
        try:
            owner_pk = Pubkey(bytes(owner))
        except (TypeError, ValueError) as e:
            raise DecodeError("Invalid rule set owner") from e
        if name is None:
            raise DecodeError("Rule set payload has no name")
        try:
            return RuleSet(
                lib_version=int(lib_version),
                owner=owner_pk,
                name=str(name),
                operations=dict(operations or {}),
            )
        except (TypeError, ValueError) as e:
            raise DecodeError(f"Invalid rule set payload: {e}") from e


def read_revision_map(data: bytes) -> tuple[list[int], int]:
    """Return the revision offsets and the location of the revision map version byte."""
    if len(data) < const.RULE_SET_SERIALIZED_HEADER_LEN:
        raise DecodeError("Rule set account is smaller than its header")
    header = layouts.RULE_SET_HEADER.parse(data[: const.RULE_SET_SERIALIZED_HEADER_LEN])
    location = header.rev_map_version_location

    if location >= len(data):
        raise DecodeError("Rule set revision map location is out of bounds")
    if data[location] != const.RULE_SET_REV_MAP_VERSION:
        raise DecodeError(f"Unsupported rule set revision map version: {data[location]}")

    start = _checked_add(location, 1)
    if start >= len(data):
        raise DecodeError("Rule set revision map is missing")
    try:
        revision_map = layouts.RULE_SET_REVISION_MAP.parse(data[start:])
    except (ConstructError, ValueError) as e:
        raise DecodeError("Failed to decode rule set revision map") from e
    return list(revision_map.rule_set_revisions), location


def parse_rule_set(data: bytes, revision: int | None = None) -> RuleSet:
    """
    Decode revision `revision` of a rule set (the latest one when omitted).

    Raises:
        RuleSetRevisionNotAvailableError: if the revision does not exist.
        NumericalOverflowError: if a revision offset overflows.
        DecodeError: if the account or payload is malformed.
    """
    revisions, location = read_revision_map(data)

    if revision is None:
        if not revisions:
            raise RuleSetRevisionNotAvailableError("Rule set has no revisions")
        start, end = revisions[-1], location
    else:
        if not 0 <= revision < len(revisions):
            raise RuleSetRevisionNotAvailableError(
                f"Rule set revision {revision} is not available"
            )
        next_revision = _checked_add(revision, 1)
        start = revisions[revision]
        end = revisions[next_revision] if next_revision < len(revisions) else location

    start = _checked_add(start, 1)
    payload = data[start:end]
    try:
        obj = msgpack.unpackb(payload, raw=False, strict_map_key=False)
    except (msgpack.UnpackException, ValueError) as e:
        raise DecodeError(f"Failed to decode rule set payload: {e}") from e
    return RuleSet.from_msgpack(obj)


def decode_rule_set(
    chain: ChainReader, address: AddressLike, revision: int | None = None
) -> RuleSet:
    address = to_pubkey(address)
    logger.debug("Decoding rule set %s (revision=%s)", address, revision)
    return parse_rule_set(chain.get_account_data(address), revision)

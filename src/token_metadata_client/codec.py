from __future__ import annotations

import functools
from typing import Union

from construct import Adapter, Bytes
from solders.keypair import Keypair
from solders.pubkey import Pubkey

from . import constants as const
from .errors import AddressParseError

# Anything accepted wherever an address parameter is expected.
AddressLike = Union[Pubkey, str, bytes, bytearray, Keypair]


@functools.singledispatch
def to_pubkey(value: object) -> Pubkey:
    """
    Resolve an address parameter into a canonical :class:`Pubkey`.

    Accepted forms: a ``Pubkey``, a base58 string, 32 raw bytes, or a ``Keypair``
    (its public key).
    """
    raise AddressParseError(f"Cannot interpret {type(value).__name__} as an address")


@to_pubkey.register
def _(value: Pubkey) -> Pubkey:
    return value


@to_pubkey.register
def _(value: str) -> Pubkey:
    try:
        return Pubkey.from_string(value.strip())
    except ValueError as e:
        raise AddressParseError(f"Invalid base58 address: {value!r}") from e


@to_pubkey.register(bytes)
@to_pubkey.register(bytearray)
def _(value: bytes | bytearray) -> Pubkey:
    if len(value) != const.PUBKEY_LENGTH:
        raise AddressParseError(
            f"Address must be {const.PUBKEY_LENGTH} bytes, got {len(value)}"
        )
    return Pubkey(bytes(value))


@to_pubkey.register
def _(value: Keypair) -> Pubkey:
    return value.pubkey()


def to_optional_pubkey(value: AddressLike | None) -> Pubkey | None:
    return None if value is None else to_pubkey(value)


class PubkeyAdapter(Adapter):
    """Borsh ``Pubkey``: 32 raw bytes exposed as :class:`Pubkey`."""

    def __init__(self) -> None:
        super().__init__(Bytes(const.PUBKEY_LENGTH))

    def _decode(self, obj: bytes, context, path) -> Pubkey:  # type: ignore[no-untyped-def]
        return Pubkey(obj)

    def _encode(self, obj: Pubkey, context, path) -> bytes:  # type: ignore[no-untyped-def]
        return bytes(obj)


def strip_padding(value: str) -> str:
    """Drop the NUL padding the program adds to fixed-width strings."""
    return value.rstrip("\x00")

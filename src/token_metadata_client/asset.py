from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from solders.pubkey import Pubkey

from .derive import derive_edition_pda, derive_metadata_pda, derive_token_record_pda
from .read.decode import decode_metadata

if TYPE_CHECKING:  # pragma: no cover
    from .accounts import Metadata
    from .rpc import ChainReader


@dataclass(slots=True)
class Asset:
    """
    A mint together with its derived metadata address and, once required, its edition.

    An `Asset` is built per operation and never shared.
    """

    mint: Pubkey
    metadata: Pubkey = field(init=False)
    edition: Pubkey | None = field(default=None, init=False)

    def __post_init__(self) -> None:
        self.metadata = derive_metadata_pda(self.mint)

    def add_edition(self) -> Pubkey:
        if self.edition is None:
            self.edition = derive_edition_pda(self.mint)
        return self.edition

    def get_metadata(self, chain: ChainReader) -> Metadata:
        return decode_metadata(chain, self.metadata)

    def get_token_record(self, token: Pubkey) -> Pubkey:
        return derive_token_record_pda(self.mint, token)

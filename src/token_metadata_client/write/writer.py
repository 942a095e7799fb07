from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from importlib import import_module

from solders.instruction import Instruction
from solders.keypair import Keypair
from solders.signature import Signature

from .. import constants as const
from ..errors import InvalidInputError
from ..rpc import ChainReader
from . import delegate as _delegate
from . import mint as _mint
from . import verify as _verify
from .priority import PriorityLevel
from .transaction import RetryPolicy, estimate_compute_units, submit

# Loaded by module path: the package re-exports functions named burn/transfer/update,
# which shadow the submodule attributes of the same name.
_burn = import_module(".burn", __package__)
_transfer = import_module(".transfer", __package__)
_update = import_module(".update", __package__)


@dataclass(frozen=True, slots=True)
class WriteOptions:
    """
    Controls how write transactions are built and sent.

    Notes:
    - `priority` prepends compute-budget instructions sized for each operation.
    - `retry` resubmits on transport errors; without it every transaction is sent once.
    - `compute_unit_multiplier` scales simulated compute units in
      :meth:`TokenMetadataWrite.estimate_compute_units`.
    """

    priority: PriorityLevel | None = None
    retry: RetryPolicy | None = None
    compute_unit_multiplier: float = const.DEFAULT_COMPUTE_UNIT_MULTIPLIER

    def __post_init__(self) -> None:
        if self.compute_unit_multiplier <= 0:
            raise InvalidInputError("compute_unit_multiplier must be positive")


@dataclass(slots=True)
class TokenMetadataWrite:
    """
    Write API for Token Metadata assets.

    Every operation has a ``build_*`` variant returning the instructions without
    sending them. `options` applies to every call unless a call passes its own.
    """

    chain: ChainReader
    options: WriteOptions = WriteOptions()

    def _opts(self, options: WriteOptions | None) -> WriteOptions:
        return options or self.options

    # ------------------------------------------------------------------
    # Builders
    # ------------------------------------------------------------------
    def build_mint(
        self, args: _mint.MintAssetArgs, *, options: WriteOptions | None = None
    ) -> _mint.PreparedMint:
        return _mint.mint_asset_ix(args, priority=self._opts(options).priority)

    def build_transfer(
        self, args: _transfer.TransferAssetArgs, *, options: WriteOptions | None = None
    ) -> list[Instruction]:
        return _transfer.transfer_ix(self.chain, args, priority=self._opts(options).priority)

    def build_burn(
        self, args: _burn.BurnAssetArgs, *, options: WriteOptions | None = None
    ) -> list[Instruction]:
        return _burn.burn_ix(self.chain, args, priority=self._opts(options).priority)

    def build_update(
        self, args: _update.UpdateAssetArgs, *, options: WriteOptions | None = None
    ) -> list[Instruction]:
        return _update.update_ix(self.chain, args, priority=self._opts(options).priority)

    def build_delegate(
        self, args: _delegate.DelegateAssetArgs, *, options: WriteOptions | None = None
    ) -> list[Instruction]:
        return _delegate.delegate_ix(self.chain, args, priority=self._opts(options).priority)

    def build_revoke(
        self, args: _delegate.RevokeAssetArgs, *, options: WriteOptions | None = None
    ) -> list[Instruction]:
        return _delegate.revoke_ix(self.chain, args, priority=self._opts(options).priority)

    def build_verification(
        self,
        args: _verify.VerifyCollectionArgsV1 | _verify.VerifyCreatorArgsV1,
        *,
        options: WriteOptions | None = None,
    ) -> list[Instruction]:
        return _verify.verification_ix(
            self.chain, args, priority=self._opts(options).priority
        )

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------
    def mint(
        self, args: _mint.MintAssetArgs, *, options: WriteOptions | None = None
    ) -> _mint.MintResult:
        opt = self._opts(options)
        return _mint.mint_asset(self.chain, args, priority=opt.priority, retry=opt.retry)

    def mint_legacy(
        self, args: _mint.LegacyMintArgs, *, options: WriteOptions | None = None
    ) -> _mint.MintResult:
        opt = self._opts(options)
        return _mint.mint_legacy_nft(
            self.chain, args, priority=opt.priority, retry=opt.retry
        )

    def transfer(
        self, args: _transfer.TransferAssetArgs, *, options: WriteOptions | None = None
    ) -> Signature:
        opt = self._opts(options)
        return _transfer.transfer(self.chain, args, priority=opt.priority, retry=opt.retry)

    def burn(
        self, args: _burn.BurnAssetArgs, *, options: WriteOptions | None = None
    ) -> Signature:
        opt = self._opts(options)
        return _burn.burn(self.chain, args, priority=opt.priority, retry=opt.retry)

    def update(
        self, args: _update.UpdateAssetArgs, *, options: WriteOptions | None = None
    ) -> Signature:
        opt = self._opts(options)
        return _update.update(self.chain, args, priority=opt.priority, retry=opt.retry)

    def delegate(
        self, args: _delegate.DelegateAssetArgs, *, options: WriteOptions | None = None
    ) -> Signature:
        opt = self._opts(options)
        return _delegate.delegate_asset(
            self.chain, args, priority=opt.priority, retry=opt.retry
        )

    def revoke(
        self, args: _delegate.RevokeAssetArgs, *, options: WriteOptions | None = None
    ) -> Signature:
        opt = self._opts(options)
        return _delegate.revoke_asset(
            self.chain, args, priority=opt.priority, retry=opt.retry
        )

    def verify_collection(
        self, args: _verify.VerifyCollectionArgs, *, options: WriteOptions | None = None
    ) -> Signature:
        opt = self._opts(options)
        return _verify.verify_collection(
            self.chain, args, priority=opt.priority, retry=opt.retry
        )

    def unverify_collection(
        self, args: _verify.UnverifyCollectionArgs, *, options: WriteOptions | None = None
    ) -> Signature:
        opt = self._opts(options)
        return _verify.unverify_collection(
            self.chain, args, priority=opt.priority, retry=opt.retry
        )

    def verify_creator(
        self, args: _verify.VerifyCreatorArgs, *, options: WriteOptions | None = None
    ) -> Signature:
        opt = self._opts(options)
        return _verify.verify_creator(
            self.chain, args, priority=opt.priority, retry=opt.retry
        )

    def unverify_creator(
        self, args: _verify.UnverifyCreatorArgs, *, options: WriteOptions | None = None
    ) -> Signature:
        opt = self._opts(options)
        return _verify.unverify_creator(
            self.chain, args, priority=opt.priority, retry=opt.retry
        )

    # ------------------------------------------------------------------
    # Raw submission
    # ------------------------------------------------------------------
    def send(
        self,
        signers: Sequence[Keypair],
        instructions: Sequence[Instruction],
        *,
        options: WriteOptions | None = None,
    ) -> Signature:
        """Sign and submit prebuilt instructions; ``signers[0]`` pays the fee."""
        return submit(self.chain, signers, instructions, retry=self._opts(options).retry)

    def estimate_compute_units(
        self,
        signers: Sequence[Keypair],
        instructions: Sequence[Instruction],
        *,
        options: WriteOptions | None = None,
    ) -> int | None:
        return estimate_compute_units(
            self.chain,
            signers,
            instructions,
            multiplier=self._opts(options).compute_unit_multiplier,
        )

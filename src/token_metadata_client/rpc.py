from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any, TypeVar

from solana.exceptions import SolanaRpcException
from solana.rpc.api import Client
from solana.rpc.commitment import Commitment, Confirmed
from solana.rpc.core import (
    RPCException,
    TransactionExpiredBlockheightExceededError,
    UnconfirmedTxError,
)
from solana.rpc.types import MemcmpOpts, TxOpts
from solders.hash import Hash
from solders.pubkey import Pubkey
from solders.signature import Signature
from solders.transaction import Transaction

from .errors import (
    AccountNotFoundError,
    AmbiguousHolderError,
    HolderNotFoundError,
    TransportError,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Errors raised by solana-py when a node rejects a request or cannot be reached.
RPC_ERRORS: tuple[type[Exception], ...] = (SolanaRpcException, RPCException)
# Errors raised while polling for a signature status.
CONFIRM_ERRORS: tuple[type[Exception], ...] = (
    *RPC_ERRORS,
    UnconfirmedTxError,
    TransactionExpiredBlockheightExceededError,
)


@dataclass(slots=True)
class ChainReader:
    """
    Thin wrapper over a solana-py :class:`Client`.

    It owns no connection of its own: the client is supplied (and closed) by the
    caller. RPC failures surface as :class:`TransportError` with the original
    exception chained.
    """

    client: Client
    commitment: Commitment = Confirmed

    def _call(self, method: str, fn: Callable[..., T], *args: Any, **kwargs: Any) -> T:
        try:
            return fn(*args, **kwargs)
        except RPC_ERRORS as e:
            raise TransportError(f"{method} failed: {e}") from e

    # ------------------------------------------------------------------
    # Accounts
    # ------------------------------------------------------------------
    def try_get_account_data(self, address: Pubkey) -> bytes | None:
        """Return the raw account bytes, or None if the account doesn't exist."""
        resp = self._call(
            "getAccountInfo",
            self.client.get_account_info,
            address,
            commitment=self.commitment,
            encoding="base64",
        )
        if resp.value is None:
            return None
        return bytes(resp.value.data)

    def get_account_data(self, address: Pubkey) -> bytes:
        """
        Fetch raw account bytes.

        Raises:
            AccountNotFoundError: if the account doesn't exist.
        """
        data = self.try_get_account_data(address)
        if data is None:
            raise AccountNotFoundError(f"Account not found: {address}")
        return data

    def get_program_accounts(
        self,
        program_id: Pubkey,
        *,
        filters: Sequence[MemcmpOpts | int],
    ) -> list[tuple[Pubkey, bytes]]:
        resp = self._call(
            "getProgramAccounts",
            self.client.get_program_accounts,
            program_id,
            commitment=self.commitment,
            encoding="base64",
            filters=list(filters),
        )
        return [(keyed.pubkey, bytes(keyed.account.data)) for keyed in resp.value]

    # ------------------------------------------------------------------
    # Token holders
    # ------------------------------------------------------------------
    def find_single_holder(self, mint: Pubkey) -> Pubkey:
        """
        Return the only token account holding exactly one unit of `mint`.

        Raises:
            HolderNotFoundError: if no account holds exactly one unit.
            AmbiguousHolderError: if several accounts do.
        """
        resp = self._call(
            "getTokenLargestAccounts",
            self.client.get_token_largest_accounts,
            mint,
            commitment=self.commitment,
        )
        holders = [
            balance.address
            for balance in resp.value
            if _raw_amount(balance.amount) == 1
        ]
        if not holders:
            raise HolderNotFoundError(f"No token account holds mint {mint}")
        if len(holders) > 1:
            raise AmbiguousHolderError(
                f"{len(holders)} token accounts hold one unit of mint {mint}"
            )
        logger.debug("Located holder %s for mint %s", holders[0], mint)
        return holders[0]

    # ------------------------------------------------------------------
    # Cluster state
    # ------------------------------------------------------------------
    def latest_blockhash(self) -> Hash:
        resp = self._call(
            "getLatestBlockhash",
            self.client.get_latest_blockhash,
            commitment=self.commitment,
        )
        return resp.value.blockhash

    def minimum_balance_for_rent_exemption(self, size: int) -> int:
        resp = self._call(
            "getMinimumBalanceForRentExemption",
            self.client.get_minimum_balance_for_rent_exemption,
            size,
            commitment=self.commitment,
        )
        return int(resp.value)

    # ------------------------------------------------------------------
    # Transactions
    # ------------------------------------------------------------------
    def send_transaction(self, tx: Transaction, *, skip_preflight: bool = False) -> Signature:
        opts = TxOpts(
            skip_confirmation=True,
            skip_preflight=skip_preflight,
            preflight_commitment=self.commitment,
        )
        resp = self._call("sendTransaction", self.client.send_transaction, tx, opts=opts)
        return resp.value

    def confirm_transaction(self, signature: Signature) -> None:
        try:
            resp = self.client.confirm_transaction(signature, commitment=self.commitment)
        except CONFIRM_ERRORS as e:
            # Confirmation failures keep the signature: the transaction may still land.
            raise TransportError(
                f"Failed to confirm transaction {signature}: {e}", signature=signature
            ) from e
        statuses = getattr(resp, "value", None) or []
        status = statuses[0] if statuses else None
        if status is not None and status.err is not None:
            raise TransportError(
                f"Transaction {signature} failed: {status.err}", signature=signature
            )

    def simulate_transaction(self, tx: Transaction) -> Any:
        resp = self._call(
            "simulateTransaction",
            self.client.simulate_transaction,
            tx,
            sig_verify=False,
            commitment=self.commitment,
        )
        return resp.value


def _raw_amount(amount: Any) -> int | None:
    """Raw integer balance of a `UiTokenAmount`-like value, or None if unparsable."""
    raw = getattr(amount, "amount", amount)
    try:
        return int(raw)
    except (TypeError, ValueError):
        return None

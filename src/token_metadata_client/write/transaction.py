"""
Signing, submission and simulation of instruction lists.

``signers[0]`` always pays the fee. Duplicate signers (e.g. the same keypair used as
payer and authority) are collapsed before signing.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence
from dataclasses import dataclass
from decimal import Decimal

from solders.hash import Hash
from solders.instruction import Instruction
from solders.keypair import Keypair
from solders.signature import Signature
from solders.transaction import Transaction
from tenacity import (
    Retrying,
    before_sleep_log,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from .. import constants as const
from ..errors import InvalidInputError, SimulationError, TransportError
from ..rpc import ChainReader

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class RetryPolicy:
    """
    Exponential backoff for transaction submission.

    Delays are ``base_delay * factor ** (attempt - 1)`` seconds between attempts.
    Only :class:`TransportError` is retried.
    """

    max_attempts: int = const.RETRY_MAX_ATTEMPTS
    base_delay: float = const.RETRY_BASE_DELAY_SECONDS
    factor: int = const.RETRY_BACKOFF_FACTOR

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise InvalidInputError("max_attempts must be >= 1")
        if self.base_delay < 0:
            raise InvalidInputError("base_delay must be non-negative")

    def retrying(self) -> Retrying:
        return Retrying(
            stop=stop_after_attempt(self.max_attempts),
            wait=wait_exponential(multiplier=self.base_delay, exp_base=self.factor),
            retry=retry_if_exception_type(TransportError),
            before_sleep=before_sleep_log(logger, logging.WARNING),
            reraise=True,
        )


def unique_signers(signers: Sequence[Keypair]) -> list[Keypair]:
    """Drop repeated keypairs, keeping first-seen order (the fee payer stays first)."""
    seen = set()
    unique: list[Keypair] = []
    for signer in signers:
        pubkey = signer.pubkey()
        if pubkey not in seen:
            seen.add(pubkey)
            unique.append(signer)
    return unique


def build_transaction(
    signers: Sequence[Keypair],
    instructions: Sequence[Instruction],
    recent_blockhash: Hash,
) -> Transaction:
    if not signers:
        raise InvalidInputError("At least one signer (the fee payer) is required")
    if not instructions:
        raise InvalidInputError("At least one instruction is required")
    keypairs = unique_signers(signers)
    return Transaction.new_signed_with_payer(
        list(instructions), keypairs[0].pubkey(), keypairs, recent_blockhash
    )


def _send_and_confirm(chain: ChainReader, tx: Transaction) -> Signature:
    signature = chain.send_transaction(tx)
    logger.info("Submitted transaction %s", signature)
    chain.confirm_transaction(signature)
    logger.debug("Confirmed transaction %s", signature)
    return signature


def send_and_confirm(
    chain: ChainReader,
    signers: Sequence[Keypair],
    instructions: Sequence[Instruction],
) -> Signature:
    """Sign with the latest blockhash, submit once and wait for confirmation."""
    tx = build_transaction(signers, instructions, chain.latest_blockhash())
    return _send_and_confirm(chain, tx)


def send_and_confirm_with_retries(
    chain: ChainReader,
    signers: Sequence[Keypair],
    instructions: Sequence[Instruction],
    *,
    policy: RetryPolicy | None = None,
) -> Signature:
    """
    Like :func:`send_and_confirm`, resubmitting the same signed transaction on
    transport errors according to `policy`.
    """
    tx = build_transaction(signers, instructions, chain.latest_blockhash())
    retrying = (policy or RetryPolicy()).retrying()
    return retrying(_send_and_confirm, chain, tx)


def estimate_compute_units(
    chain: ChainReader,
    signers: Sequence[Keypair],
    instructions: Sequence[Instruction],
    *,
    multiplier: float = const.DEFAULT_COMPUTE_UNIT_MULTIPLIER,
) -> int | None:
    """
    Simulate the instructions and return the consumed compute units scaled by
    `multiplier` (rounded down), or None if the node did not report them.

    Raises:
        SimulationError: carrying the simulation's error verbatim.
    """
    if multiplier <= 0:
        raise InvalidInputError("multiplier must be positive")
    tx = build_transaction(signers, instructions, chain.latest_blockhash())
    result = chain.simulate_transaction(tx)
    if result.err is not None:
        raise SimulationError(result.err, logs=list(result.logs or []))
    if result.units_consumed is None:
        return None
    return math.floor(Decimal(result.units_consumed) * Decimal(str(multiplier)))


def submit(
    chain: ChainReader,
    signers: Sequence[Keypair],
    instructions: Sequence[Instruction],
    *,
    retry: RetryPolicy | None = None,
) -> Signature:
    """Submit once, or under `retry` when a policy is given."""
    if retry is None:
        return send_and_confirm(chain, signers, instructions)
    return send_and_confirm_with_retries(chain, signers, instructions, policy=retry)

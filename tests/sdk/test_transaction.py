"""
Unit tests for token_metadata_client.write.transaction.

Tests cover:
- Signer de-duplication and fee-payer ordering
- Single submission and confirmation
- Bounded retries on transport errors
- Compute-unit estimation through simulation
"""

import pytest
from solana.rpc.core import RPCException
from solders.instruction import Instruction
from solders.keypair import Keypair
from solders.system_program import TransferParams, transfer

from token_metadata_client.errors import (
    InvalidInputError,
    SimulationError,
    TransportError,
)
from token_metadata_client.rpc import ChainReader
from token_metadata_client.write.transaction import (
    RetryPolicy,
    build_transaction,
    estimate_compute_units,
    send_and_confirm,
    send_and_confirm_with_retries,
    submit,
    unique_signers,
)

from tests.helpers.fakes import FakeSolanaClient

NO_WAIT = RetryPolicy(base_delay=0)


def _instruction(payer: Keypair) -> Instruction:
    return transfer(
        TransferParams(from_pubkey=payer.pubkey(), to_pubkey=Keypair().pubkey(), lamports=1)
    )


class TestSigners:
    def test_duplicates_are_dropped(self) -> None:
        a, b = Keypair(), Keypair()
        assert [k.pubkey() for k in unique_signers([a, b, a])] == [a.pubkey(), b.pubkey()]

    def test_first_signer_pays(self, fake_client: FakeSolanaClient) -> None:
        payer = Keypair()
        tx = build_transaction([payer, payer], [_instruction(payer)], fake_client.blockhash)
        assert tx.message.account_keys[0] == payer.pubkey()
        assert len(tx.signatures) == 1

    def test_requires_signer(self, fake_client: FakeSolanaClient) -> None:
        with pytest.raises(InvalidInputError, match="fee payer"):
            build_transaction([], [_instruction(Keypair())], fake_client.blockhash)

    def test_requires_instruction(self, fake_client: FakeSolanaClient) -> None:
        with pytest.raises(InvalidInputError, match="instruction"):
            build_transaction([Keypair()], [], fake_client.blockhash)


class TestSubmission:
    def test_send_and_confirm(self, fake_client: FakeSolanaClient, chain: ChainReader) -> None:
        payer = Keypair()
        signature = send_and_confirm(chain, [payer], [_instruction(payer)])
        assert len(fake_client.sent) == 1
        assert signature == fake_client.sent[0].signatures[0]

    def test_single_attempt_without_policy(
        self, fake_client: FakeSolanaClient, chain: ChainReader
    ) -> None:
        payer = Keypair()
        fake_client.send_errors.append(RPCException("busy"))
        with pytest.raises(TransportError):
            submit(chain, [payer], [_instruction(payer)])
        assert len(fake_client.sent) == 1

    def test_retries_then_succeeds(self, fake_client: FakeSolanaClient, chain: ChainReader) -> None:
        payer = Keypair()
        fake_client.send_errors.extend([RPCException("busy"), RPCException("busy")])
        signature = submit(chain, [payer], [_instruction(payer)], retry=NO_WAIT)
        assert len(fake_client.sent) == 3
        assert signature == fake_client.sent[-1].signatures[0]

    def test_retries_are_bounded(self, fake_client: FakeSolanaClient, chain: ChainReader) -> None:
        payer = Keypair()
        fake_client.send_errors.extend([RPCException("busy")] * 5)
        with pytest.raises(TransportError):
            send_and_confirm_with_retries(chain, [payer], [_instruction(payer)], policy=NO_WAIT)
        assert len(fake_client.sent) == 3

    def test_same_transaction_is_resubmitted(
        self, fake_client: FakeSolanaClient, chain: ChainReader
    ) -> None:
        payer = Keypair()
        fake_client.send_errors.append(RPCException("busy"))
        submit(chain, [payer], [_instruction(payer)], retry=NO_WAIT)
        assert fake_client.sent[0] == fake_client.sent[1]

    def test_confirmation_failure_is_retried(
        self, fake_client: FakeSolanaClient, chain: ChainReader
    ) -> None:
        payer = Keypair()
        fake_client.confirm_errors.append(RPCException("timeout"))
        submit(chain, [payer], [_instruction(payer)], retry=NO_WAIT)
        assert len(fake_client.sent) == 2

    def test_non_transport_errors_are_not_retried(
        self, fake_client: FakeSolanaClient, chain: ChainReader
    ) -> None:
        payer = Keypair()
        fake_client.send_errors.append(KeyError("bug"))
        with pytest.raises(KeyError):
            submit(chain, [payer], [_instruction(payer)], retry=NO_WAIT)
        assert len(fake_client.sent) == 1

    @pytest.mark.parametrize(
        ("kwargs", "match"),
        [({"max_attempts": 0}, "max_attempts"), ({"base_delay": -1}, "base_delay")],
    )
    def test_policy_validation(self, kwargs: dict[str, float], match: str) -> None:
        with pytest.raises(InvalidInputError, match=match):
            RetryPolicy(**kwargs)  # type: ignore[arg-type]


class TestEstimateComputeUnits:
    def test_multiplier_is_floored(self, fake_client: FakeSolanaClient, chain: ChainReader) -> None:
        payer = Keypair()
        fake_client.simulation.units_consumed = 1001
        assert estimate_compute_units(chain, [payer], [_instruction(payer)]) == 1201
        assert len(fake_client.simulated) == 1
        assert len(fake_client.sent) == 0

    def test_custom_multiplier(self, fake_client: FakeSolanaClient, chain: ChainReader) -> None:
        payer = Keypair()
        fake_client.simulation.units_consumed = 150_000
        units = estimate_compute_units(chain, [payer], [_instruction(payer)], multiplier=1.5)
        assert units == 225_000

    def test_missing_units(self, fake_client: FakeSolanaClient, chain: ChainReader) -> None:
        payer = Keypair()
        fake_client.simulation.units_consumed = None
        assert estimate_compute_units(chain, [payer], [_instruction(payer)]) is None

    def test_simulation_error(self, fake_client: FakeSolanaClient, chain: ChainReader) -> None:
        payer = Keypair()
        err = {"InstructionError": [0, {"Custom": 1}]}
        fake_client.simulation.err = err
        fake_client.simulation.logs = ["Program log: boom"]
        with pytest.raises(SimulationError) as exc_info:
            estimate_compute_units(chain, [payer], [_instruction(payer)])
        assert exc_info.value.err == err
        assert exc_info.value.logs == ["Program log: boom"]

    def test_multiplier_must_be_positive(self, chain: ChainReader) -> None:
        payer = Keypair()
        with pytest.raises(InvalidInputError):
            estimate_compute_units(chain, [payer], [_instruction(payer)], multiplier=0)

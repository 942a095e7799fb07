"""
Unit tests for token_metadata_client.write.priority.

Tests cover:
- Priority levels and their compute-unit prices
- Compute-budget instruction ordering
- with_priority pass-through when no priority is set
"""

import pytest
from solders.compute_budget import set_compute_unit_limit, set_compute_unit_price
from solders.instruction import Instruction
from solders.pubkey import Pubkey

from token_metadata_client.errors import InvalidInputError
from token_metadata_client.write.priority import (
    PriorityLevel,
    compute_budget_instructions,
    with_priority,
)

BODY = Instruction(Pubkey.new_unique(), b"\x01", [])


class TestPriorityLevel:
    @pytest.mark.parametrize(
        ("level", "price"),
        [
            (PriorityLevel.NONE, 20),
            (PriorityLevel.LOW, 20_000),
            (PriorityLevel.MEDIUM, 200_000),
            (PriorityLevel.HIGH, 1_000_000),
            (PriorityLevel.MAX, 2_000_000),
        ],
    )
    def test_prices(self, level: PriorityLevel, price: int) -> None:
        assert level.micro_lamports == price

    def test_parse(self) -> None:
        assert PriorityLevel.parse(" high ") is PriorityLevel.HIGH

    def test_parse_unknown(self) -> None:
        with pytest.raises(InvalidInputError, match="Unknown priority level"):
            PriorityLevel.parse("urgent")


class TestComputeBudget:
    def test_limit_then_price(self) -> None:
        assert compute_budget_instructions(PriorityLevel.MEDIUM, 100_000) == [
            set_compute_unit_limit(100_000),
            set_compute_unit_price(200_000),
        ]

    def test_limit_must_be_positive(self) -> None:
        with pytest.raises(InvalidInputError):
            compute_budget_instructions(PriorityLevel.LOW, 0)

    def test_prepended(self) -> None:
        out = with_priority([BODY], PriorityLevel.LOW, 50_000)
        assert out[:2] == compute_budget_instructions(PriorityLevel.LOW, 50_000)
        assert out[2:] == [BODY]

    def test_no_priority_is_pass_through(self) -> None:
        assert with_priority([BODY], None, 50_000) == [BODY]

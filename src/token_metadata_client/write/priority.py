from __future__ import annotations

import enum
from collections.abc import Sequence

from solders.compute_budget import set_compute_unit_limit, set_compute_unit_price
from solders.instruction import Instruction

from .. import constants as const
from ..errors import InvalidInputError


class PriorityLevel(enum.IntEnum):
    """Coarse priority, valued as the compute-unit price in micro-lamports."""

    NONE = const.PRIORITY_FEE_NONE
    LOW = const.PRIORITY_FEE_LOW
    MEDIUM = const.PRIORITY_FEE_MEDIUM
    HIGH = const.PRIORITY_FEE_HIGH
    MAX = const.PRIORITY_FEE_MAX

    @property
    def micro_lamports(self) -> int:
        return int(self)

    @classmethod
    def parse(cls, name: str) -> PriorityLevel:
        try:
            return cls[name.strip().upper()]
        except KeyError as e:
            raise InvalidInputError(f"Unknown priority level: {name!r}") from e


def compute_budget_instructions(priority: PriorityLevel, units: int) -> list[Instruction]:
    """Set-limit then set-price compute-budget instructions."""
    if units <= 0:
        raise InvalidInputError("Compute-unit limit must be positive")
    return [
        set_compute_unit_limit(units),
        set_compute_unit_price(priority.micro_lamports),
    ]


def with_priority(
    instructions: Sequence[Instruction],
    priority: PriorityLevel | None,
    units: int,
) -> list[Instruction]:
    """Prepend compute-budget instructions when `priority` is set; otherwise return as is."""
    if priority is None:
        return list(instructions)
    return [*compute_budget_instructions(priority, units), *instructions]

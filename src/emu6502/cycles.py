"""
Cycle Budget
============

Execution-cost accounting shared by the memory and CPU layers.

Every primitive operation (fetching a byte, fetching a word, writing a
word, an instruction's extra internal work) debits a fixed number of cycles
from a CycleBudget. The run loop stops once the budget is no longer
positive; the last instruction may overshoot, which shows up as a negative
``remaining`` and a ``consumed`` greater than the allowance.

Copyright (c) 2026 emu6502 Contributors
"""

from dataclasses import dataclass, field


@dataclass
class CycleBudget:
    """
    Remaining cycle allowance for one ``execute`` call.

    Attributes:
        remaining: Cycles left; may go negative on overshoot
        allowance: Cycles granted when the budget was created

    Example:
        >>> budget = CycleBudget(9)
        >>> budget.debit(2)
        >>> budget.remaining, budget.consumed
        (7, 2)
    """
    remaining: int
    allowance: int = field(init=False)

    def __post_init__(self) -> None:
        self.allowance = self.remaining

    def debit(self, cycles: int = 1) -> None:
        """Charge ``cycles`` against the budget."""
        self.remaining -= cycles

    @property
    def exhausted(self) -> bool:
        """True once no positive allowance remains."""
        return self.remaining <= 0

    @property
    def consumed(self) -> int:
        """Cycles charged so far (including any overshoot)."""
        return self.allowance - self.remaining

"""Fixed lookup tables."""

from dataclasses import dataclass
from typing import Tuple

from plonkish.constraints.columns import Column
from plonkish.constraints.system import ConstraintSystem

OPEN_BRACKET = ord("(")
CLOSE_BRACKET = ord(")")


@dataclass(frozen=True)
class LookupTable:
    """A named single-column set of allowed values."""
    name: str
    values: Tuple[int, ...]

    def load(self, cs: ConstraintSystem) -> Column:
        """Declare a Fixed column holding this table."""
        column = cs.fixed_column(self.name)
        cs.declare_table(column, self.values)
        return column

    def __contains__(self, value: int) -> bool:
        return int(value) in self.values


BRACKET_TABLE = LookupTable("bracket_codes", (OPEN_BRACKET, CLOSE_BRACKET))
"""The only legal character codes: 40 '(' and 41 ')'."""

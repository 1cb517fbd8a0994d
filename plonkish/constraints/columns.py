"""Column and cell handles.

A Column is a stable handle (kind, index) returned by the constraint system.
Indices are assigned per kind in declaration order, so the same sequence of
declarations always yields the same handles.
"""

from dataclasses import dataclass, field
from enum import Enum


class ColumnKind(Enum):
    FIXED = "fixed"
    INSTANCE = "instance"
    ADVICE = "advice"


@dataclass(frozen=True)
class Column:
    """Handle to one column of the matrix.

    Attributes:
        kind: Fixed (baked in), Instance (public per run) or Advice (private per run)
        index: Position among columns of the same kind
        name: Label used in diagnostics only (not part of equality)
    """
    kind: ColumnKind
    index: int
    name: str = field(default="", compare=False)

    def cell(self, row: int) -> "Cell":
        return Cell(self, row)

    def __str__(self) -> str:
        label = f"{self.kind.value}[{self.index}]"
        return f"{label}({self.name})" if self.name else label


@dataclass(frozen=True)
class Cell:
    """An absolute (column, row) position in the matrix."""
    column: Column
    row: int

    def __str__(self) -> str:
        return f"{self.column}@{self.row}"


@dataclass(frozen=True)
class CopyConstraint:
    """Equality between two cells."""
    a: Cell
    b: Cell

    def __str__(self) -> str:
        return f"{self.a} == {self.b}"

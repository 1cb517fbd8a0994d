"""Per-instance column storage for witness synthesis.

Each proof attempt gets its own Assignment over a shared FrozenShape. The
shape is only read; all writes land in arrays owned by the Assignment, so
independent assignments can be filled concurrently.
"""

from typing import Dict

from plonkish.constraints.columns import Cell, Column, ColumnKind
from plonkish.constraints.system import FrozenShape
from plonkish.errors import OutOfBounds, ShapeMismatch
from plonkish.primitives.field import FF, FieldLike, to_field
from plonkish.protocol.data import Witness


class Assignment:
    """Mutable advice values for one input."""

    def __init__(self, shape: FrozenShape):
        self.shape = shape
        self._advice: Dict[Column, FF] = {
            column: FF.Zeros(shape.n_rows) for column in shape.advice_columns
        }

    @property
    def n_rows(self) -> int:
        return self.shape.n_rows

    def assign_advice(self, column: Column, row: int, value: FieldLike) -> Cell:
        """Write one advice cell.

        Raises:
            ShapeMismatch: If column is not an Advice column of this shape
            OutOfBounds: If row is outside the matrix
        """
        if column.kind is not ColumnKind.ADVICE or column not in self._advice:
            raise ShapeMismatch(f"Cannot assign a witness value to {column}")
        self._check_row(column, row)
        self._advice[column][row] = to_field(value)
        return Cell(column, row)

    def assign_advice_column(self, column: Column, values: FF, offset: int = 0) -> None:
        """Write a run of advice cells starting at offset."""
        if column.kind is not ColumnKind.ADVICE or column not in self._advice:
            raise ShapeMismatch(f"Cannot assign a witness value to {column}")
        if len(values) == 0:
            return
        self._check_row(column, offset)
        self._check_row(column, offset + len(values) - 1)
        self._advice[column][offset:offset + len(values)] = values

    def advice(self, column: Column) -> FF:
        """Current values of an advice column (a copy)."""
        if column not in self._advice:
            raise ShapeMismatch(f"{column} is not an Advice column of this shape")
        return self._advice[column].copy()

    def into_witness(self) -> Witness:
        """Snapshot the assignment as an immutable Witness."""
        advice = {column: values.copy() for column, values in self._advice.items()}
        for values in advice.values():
            values.flags.writeable = False
        return Witness(advice=advice)

    def _check_row(self, column: Column, row: int) -> None:
        if not 0 <= row < self.shape.n_rows:
            raise OutOfBounds(
                f"Row {row} of {column} outside the matrix of {self.shape.n_rows} rows"
            )

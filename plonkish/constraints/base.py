"""Constraint evaluation context.

ConstraintContext gives expressions uniform access to column values over a set
of rows. Queries return one value per row, so a gate is checked on every
active row at once thanks to galois broadcasting.

Example:
    def eval_gate(ctx: ConstraintContext):
        a = ctx.query(a_col, 0)
        prev_a = ctx.query(a_col, -1)
        return a - prev_a - ctx.constant(1)

Unlike a cyclic evaluation domain, rotations do not wrap around: querying a
row outside the matrix raises OutOfBounds.
"""

from typing import Mapping, Sequence

import numpy as np

from plonkish.constraints.columns import Column
from plonkish.errors import OutOfBounds, ShapeMismatch
from plonkish.primitives.field import FF


def active_rows(selector_values: FF) -> np.ndarray:
    """Indices of rows where a selector column is nonzero."""
    return np.flatnonzero(selector_values.view(np.ndarray))


class ConstraintContext:
    """Column access for a fixed set of rows of one matrix.

    Args:
        columns: Full column values keyed by Column, each of length n_rows
        rows: Row indices the expression is evaluated at
        n_rows: Height of the matrix
    """

    def __init__(self, columns: Mapping[Column, FF], rows: Sequence[int], n_rows: int):
        self._columns = columns
        self._rows = np.asarray(rows, dtype=np.int64)
        self._n_rows = n_rows

    @property
    def rows(self) -> np.ndarray:
        return self._rows

    def query(self, column: Column, rotation: int = 0) -> FF:
        """Get column values at each row shifted by rotation.

        Raises:
            ShapeMismatch: If the column is not part of the matrix
            OutOfBounds: If any shifted row falls outside [0, n_rows)
        """
        if column not in self._columns:
            raise ShapeMismatch(f"Column {column} is not part of this constraint system")
        target = self._rows + rotation
        outside = (target < 0) | (target >= self._n_rows)
        if np.any(outside):
            row = int(self._rows[np.argmax(outside)])
            raise OutOfBounds(
                f"Query {column} at rotation {rotation:+d} from row {row} "
                f"leaves the matrix of {self._n_rows} rows"
            )
        return self._columns[column][target]

    def constant(self, value: int) -> FF:
        """Get a constant broadcast to one value per row."""
        return FF(np.full(len(self._rows), value, dtype=np.uint64))

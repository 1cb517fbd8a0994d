"""Constraint system declaration and frozen circuit shape.

A circuit is declared once against a mutable ConstraintSystem:

    cs = ConstraintSystem()
    q = cs.fixed_column("q")
    a = cs.advice_column("a")
    cs.declare_gate("double", q, query(a) * 2 - query(a, 1))
    shape = cs.finalize(usable_rows=8)

finalize() returns a FrozenShape: an immutable value (tuples, read-only
arrays) that can be shared by reference across any number of concurrently
synthesized witnesses.
"""

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

from plonkish.constraints.columns import Cell, Column, ColumnKind, CopyConstraint
from plonkish.constraints.expressions import Expression, ExpressionLike, as_expression
from plonkish.errors import OutOfBounds, ShapeFrozen, ShapeMismatch
from plonkish.primitives.field import FF, to_field

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Gate:
    """Identity selector(row) * expression(row) == 0 for every row."""
    name: str
    selector: Column
    expression: Expression

    def rotations(self) -> Tuple[int, ...]:
        return tuple(sorted({q.rotation for q in self.expression.queries()}))


@dataclass(frozen=True)
class Lookup:
    """On every active row, the tuple of inputs must be a row of the table.

    Rows are active where the selector is nonzero, or everywhere when the
    lookup has no selector.
    """
    name: str
    inputs: Tuple[Expression, ...]
    table: Tuple[Column, ...]
    selector: Optional[Column] = None


@dataclass(frozen=True, eq=False)
class FrozenShape:
    """Immutable column/gate/lookup layout of a circuit.

    Attributes:
        n_rows: Height shared by every column
        fixed_columns, instance_columns, advice_columns: Columns by kind
        gates, lookups, copies: Declared constraints
        fixed_values: Baked-in Fixed column values (read-only arrays)
        tables: Declared contents of each table column
    """
    n_rows: int
    fixed_columns: Tuple[Column, ...]
    instance_columns: Tuple[Column, ...]
    advice_columns: Tuple[Column, ...]
    gates: Tuple[Gate, ...]
    lookups: Tuple[Lookup, ...]
    copies: Tuple[CopyConstraint, ...]
    fixed_values: Mapping[Column, FF]
    tables: Mapping[Column, Tuple[int, ...]]

    @property
    def columns(self) -> Tuple[Column, ...]:
        return self.fixed_columns + self.instance_columns + self.advice_columns

    def has_column(self, column: Column) -> bool:
        return column in self.columns

    def check_cell(self, cell: Cell) -> None:
        """Raise unless the cell lies inside the matrix."""
        if not self.has_column(cell.column):
            raise ShapeMismatch(f"Column {cell.column} is not part of this shape")
        if not 0 <= cell.row < self.n_rows:
            raise OutOfBounds(f"Cell {cell} outside the matrix of {self.n_rows} rows")


class ConstraintSystem:
    """Mutable builder for a FrozenShape.

    Column indices are assigned per kind in declaration order.
    """

    def __init__(self):
        self._columns: Dict[ColumnKind, List[Column]] = {kind: [] for kind in ColumnKind}
        self._gates: List[Gate] = []
        self._lookups: List[Lookup] = []
        self._copies: List[CopyConstraint] = []
        self._fixed_cells: Dict[Column, Dict[int, int]] = {}
        self._tables: Dict[Column, Tuple[int, ...]] = {}
        self._frozen = False

    # --- Columns ---

    def declare_column(self, kind: ColumnKind, name: str = "") -> Column:
        self._check_open()
        column = Column(kind, len(self._columns[kind]), name)
        self._columns[kind].append(column)
        logger.debug("Declared %s", column)
        return column

    def fixed_column(self, name: str = "") -> Column:
        return self.declare_column(ColumnKind.FIXED, name)

    def instance_column(self, name: str = "") -> Column:
        return self.declare_column(ColumnKind.INSTANCE, name)

    def advice_column(self, name: str = "") -> Column:
        return self.declare_column(ColumnKind.ADVICE, name)

    # --- Constraints ---

    def declare_gate(self, name: str, selector: Column, expression: ExpressionLike) -> Gate:
        """Register selector(row) * expression(row) == 0 for every row."""
        self._check_open()
        self._check_declared(selector)
        if selector.kind is not ColumnKind.FIXED:
            raise ShapeMismatch(f"Gate '{name}': selector {selector} must be a Fixed column")
        expression = as_expression(expression)
        for query in expression.queries():
            self._check_declared(query.column)
        gate = Gate(name, selector, expression)
        self._gates.append(gate)
        logger.debug("Declared gate '%s' (degree %d, rotations %s)",
                     name, expression.degree() + 1, gate.rotations())
        return gate

    def declare_lookup(
        self,
        input_exprs: Sequence[ExpressionLike],
        table_columns: Sequence[Column],
        name: str = "lookup",
        selector: Optional[Column] = None,
    ) -> Lookup:
        """Require every active row's input tuple to appear in the table.

        Raises:
            ShapeMismatch: If arities differ, the table is empty or a table
                column or selector is not Fixed
        """
        self._check_open()
        inputs = tuple(as_expression(e) for e in input_exprs)
        table = tuple(table_columns)
        if len(inputs) != len(table):
            raise ShapeMismatch(
                f"Lookup '{name}': {len(inputs)} input expressions vs {len(table)} table columns"
            )
        if not table:
            raise ShapeMismatch(f"Lookup '{name}' needs at least one column")
        for column in table:
            self._check_declared(column)
            if column.kind is not ColumnKind.FIXED:
                raise ShapeMismatch(f"Lookup '{name}': table column {column} must be Fixed")
        if selector is not None:
            self._check_declared(selector)
            if selector.kind is not ColumnKind.FIXED:
                raise ShapeMismatch(f"Lookup '{name}': selector {selector} must be a Fixed column")
        for expr in inputs:
            for query in expr.queries():
                self._check_declared(query.column)
        lookup = Lookup(name, inputs, table, selector)
        self._lookups.append(lookup)
        logger.debug("Declared lookup '%s' into %s", name, ", ".join(map(str, table)))
        return lookup

    def declare_table(self, column: Column, values: Sequence[int]) -> None:
        """Populate a Fixed column as a lookup table.

        Rows past the table's length repeat its first entry, so the set of
        values found in the column is exactly the declared set.
        """
        self._check_open()
        self._check_declared(column)
        if column.kind is not ColumnKind.FIXED:
            raise ShapeMismatch(f"Table column {column} must be Fixed")
        if column in self._tables or column in self._fixed_cells:
            raise ShapeMismatch(f"Column {column} is already assigned")
        if not values:
            raise ShapeMismatch(f"Table column {column} needs at least one value")
        self._tables[column] = tuple(int(to_field(v)) for v in values)

    def assign_fixed(self, column: Column, row: int, value) -> None:
        """Bake a constant into a Fixed column."""
        self._check_open()
        self._check_declared(column)
        if column.kind is not ColumnKind.FIXED:
            raise ShapeMismatch(f"Cannot bake a constant into {column.kind.value} column {column}")
        if column in self._tables:
            raise ShapeMismatch(f"Column {column} is a lookup table")
        if row < 0:
            raise OutOfBounds(f"Row {row} of {column} is negative")
        self._fixed_cells.setdefault(column, {})[row] = int(to_field(value))

    def declare_equal(self, cell_a: Cell, cell_b: Cell) -> CopyConstraint:
        """Record a copy constraint between two cells."""
        self._check_open()
        for cell in (cell_a, cell_b):
            self._check_declared(cell.column)
            if cell.row < 0:
                raise OutOfBounds(f"Cell {cell} has a negative row")
        copy = CopyConstraint(cell_a, cell_b)
        self._copies.append(copy)
        return copy

    # --- Freezing ---

    def finalize(self, usable_rows: int = 0) -> FrozenShape:
        """Freeze the layout into an immutable FrozenShape.

        The row count is the largest of usable_rows, every table length and
        every statically referenced row + 1.
        """
        self._check_open()
        if usable_rows < 0:
            raise OutOfBounds(f"usable_rows must be non-negative, got {usable_rows}")
        n_rows = max(
            [usable_rows, 1]
            + [len(values) for values in self._tables.values()]
            + [row + 1 for cells in self._fixed_cells.values() for row in cells]
            + [cell.row + 1 for copy in self._copies for cell in (copy.a, copy.b)]
        )

        fixed_values = {}
        for column in self._columns[ColumnKind.FIXED]:
            values = FF.Zeros(n_rows)
            if column in self._tables:
                table = self._tables[column]
                values[:] = table[0]
                values[:len(table)] = FF(list(table))
            for row, value in self._fixed_cells.get(column, {}).items():
                values[row] = value
            values.flags.writeable = False
            fixed_values[column] = values

        shape = FrozenShape(
            n_rows=n_rows,
            fixed_columns=tuple(self._columns[ColumnKind.FIXED]),
            instance_columns=tuple(self._columns[ColumnKind.INSTANCE]),
            advice_columns=tuple(self._columns[ColumnKind.ADVICE]),
            gates=tuple(self._gates),
            lookups=tuple(self._lookups),
            copies=tuple(self._copies),
            fixed_values=MappingProxyType(fixed_values),
            tables=MappingProxyType(dict(self._tables)),
        )
        self._frozen = True
        logger.debug(
            "Finalized shape: %d rows, %d fixed / %d instance / %d advice columns, "
            "%d gates, %d lookups",
            n_rows, len(shape.fixed_columns), len(shape.instance_columns),
            len(shape.advice_columns), len(shape.gates), len(shape.lookups),
        )
        return shape

    def _check_open(self) -> None:
        if self._frozen:
            raise ShapeFrozen("Constraint system is finalized; no further declarations")

    def _check_declared(self, column: Column) -> None:
        if column not in self._columns[column.kind]:
            raise ShapeMismatch(f"Column {column} was not declared in this constraint system")

"""Backend contract and a mock backend that checks the matrix directly.

A Backend consumes a frozen shape, public instance values and a witness and
returns a deterministic verdict. The proving system behind a real backend
(commitments, transcript, opening proofs) is not modelled here.

MockBackend evaluates every constraint on the assembled matrix:

    1. Gates: selector * expression == 0 on every active row
    2. Lookups: every active row's input tuple is a row of the table
    3. Copy constraints: both cells hold the same value

It is the reference for what a sound and complete backend must accept.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Mapping, Optional, Sequence, Tuple, Union

import numpy as np

from plonkish.constraints.base import ConstraintContext, active_rows
from plonkish.constraints.columns import Cell, Column, ColumnKind, CopyConstraint
from plonkish.constraints.system import FrozenShape, Gate, Lookup
from plonkish.errors import OutOfBounds, ShapeMismatch
from plonkish.primitives.field import FF, to_field
from plonkish.protocol.data import Witness

logger = logging.getLogger(__name__)

InstanceValues = Mapping[Column, Sequence[Union[int, FF]]]


class Verdict(Enum):
    ACCEPTED = "accepted"
    REJECTED = "rejected"


@dataclass(frozen=True)
class GateFailure:
    gate: str
    row: int

    def __str__(self) -> str:
        return f"gate '{self.gate}' not satisfied at row {self.row}"


@dataclass(frozen=True)
class LookupFailure:
    lookup: str
    row: int
    values: Tuple[int, ...]

    def __str__(self) -> str:
        return f"lookup '{self.lookup}' input {self.values} at row {self.row} not in table"


@dataclass(frozen=True)
class CopyFailure:
    a: Cell
    b: Cell

    def __str__(self) -> str:
        return f"copy constraint {self.a} == {self.b} violated"


Failure = Union[GateFailure, LookupFailure, CopyFailure]


@dataclass(frozen=True)
class VerificationResult:
    verdict: Verdict
    failures: Tuple[Failure, ...] = ()

    @property
    def accepted(self) -> bool:
        return self.verdict is Verdict.ACCEPTED


class Backend(ABC):
    """External proving/verification engine consuming a finished matrix."""

    @abstractmethod
    def verify(
        self,
        shape: FrozenShape,
        instance_values: InstanceValues,
        witness: Witness,
    ) -> VerificationResult:
        """Accept or reject the matrix described by shape, instance and witness."""
        pass


class MockBackend(Backend):
    """Backend that checks every constraint on the plain matrix.

    Args:
        max_failures: Report at most this many failures (None = all). The
            verdict always reflects every failure found.
    """

    def __init__(self, max_failures: Optional[int] = None):
        if max_failures is not None and max_failures < 0:
            raise ValueError(f"max_failures must be non-negative, got {max_failures}")
        self.max_failures = max_failures

    def verify(
        self,
        shape: FrozenShape,
        instance_values: InstanceValues,
        witness: Witness,
    ) -> VerificationResult:
        columns = build_matrix(shape, instance_values, witness)
        failures: List[Failure] = []

        for gate in shape.gates:
            failures.extend(self._check_gate(shape, columns, gate))
        for lookup in shape.lookups:
            failures.extend(self._check_lookup(shape, columns, lookup))
        for copy in shape.copies:
            failures.extend(self._check_copy(shape, columns, copy))

        verdict = Verdict.REJECTED if failures else Verdict.ACCEPTED
        logger.info("Mock backend verdict: %s (%d failures)", verdict.value, len(failures))

        if self.max_failures is not None:
            failures = failures[:self.max_failures]
        for failure in failures:
            logger.warning("Constraint failure: %s", failure)
        return VerificationResult(verdict, tuple(failures))

    def _check_gate(self, shape: FrozenShape, columns: Mapping[Column, FF],
                    gate: Gate) -> List[GateFailure]:
        selector = columns[gate.selector]
        rows = active_rows(selector)
        if len(rows) == 0:
            return []
        ctx = ConstraintContext(columns, rows, shape.n_rows)
        values = selector[rows] * gate.expression.evaluate(ctx)
        bad = np.flatnonzero(values.view(np.ndarray))
        return [GateFailure(gate.name, int(rows[i])) for i in bad]

    def _check_lookup(self, shape: FrozenShape, columns: Mapping[Column, FF],
                      lookup: Lookup) -> List[LookupFailure]:
        if lookup.selector is None:
            rows = np.arange(shape.n_rows)
        else:
            rows = active_rows(columns[lookup.selector])
        if len(rows) == 0:
            return []
        ctx = ConstraintContext(columns, rows, shape.n_rows)
        inputs = [expr.evaluate(ctx).view(np.ndarray) for expr in lookup.inputs]
        table = set(zip(*(columns[col].view(np.ndarray).tolist() for col in lookup.table)))

        failures = []
        for i, row in enumerate(rows):
            values = tuple(int(column[i]) for column in inputs)
            if values not in table:
                failures.append(LookupFailure(lookup.name, int(row), values))
        return failures

    def _check_copy(self, shape: FrozenShape, columns: Mapping[Column, FF],
                    copy: CopyConstraint) -> List[CopyFailure]:
        shape.check_cell(copy.a)
        shape.check_cell(copy.b)
        a = int(columns[copy.a.column][copy.a.row])
        b = int(columns[copy.b.column][copy.b.row])
        return [] if a == b else [CopyFailure(copy.a, copy.b)]


def build_matrix(
    shape: FrozenShape,
    instance_values: InstanceValues,
    witness: Witness,
) -> Dict[Column, FF]:
    """Assemble every column of the matrix, zero-filling missing cells.

    Raises:
        ShapeMismatch: If a value is keyed by a column of the wrong kind or
            a witness column does not have n_rows values
        OutOfBounds: If an instance vector is longer than the matrix
    """
    n = shape.n_rows
    columns: Dict[Column, FF] = dict(shape.fixed_values)

    for column in shape.instance_columns:
        columns[column] = FF.Zeros(n)
    for column, values in instance_values.items():
        if column.kind is not ColumnKind.INSTANCE or column not in shape.instance_columns:
            raise ShapeMismatch(f"Instance values supplied for non-instance column {column}")
        if len(values) > n:
            raise OutOfBounds(f"{len(values)} instance values for {column} exceed {n} rows")
        column_values = FF.Zeros(n)
        for row, value in enumerate(values):
            column_values[row] = to_field(value)
        columns[column] = column_values

    for column in shape.advice_columns:
        columns[column] = FF.Zeros(n)
    for column, values in witness.advice.items():
        if column.kind is not ColumnKind.ADVICE or column not in shape.advice_columns:
            raise ShapeMismatch(f"Witness values supplied for non-advice column {column}")
        columns[column] = _full_column(column, values, n)

    return columns


def _full_column(column: Column, values: FF, n: int) -> FF:
    if len(values) != n:
        raise ShapeMismatch(f"{column} has {len(values)} values, expected {n}")
    return values

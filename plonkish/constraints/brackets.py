"""Balanced-bracket circuit layout.

Proves that a string over '(' and ')' is balanced without revealing it. The
sequential check

    acc = 0
    for c in s:
        acc = acc + 1 if c == '(' else acc - 1   # must never go below zero
    assert acc == 0

is spread over one row per character:

    char       advice   character code
    encoded    advice   f(char) = 81 - 2 * char, so 40 -> 1 and 41 -> p - 1
    accum      advice   running sum of encoded
    accum_inv  advice   (accum + 1)^(-1), or 0 when accum == -1
    q_active   fixed    1 on rows holding a character
    q_first    fixed    1 on row 0 of a non-empty input
    q_step     fixed    1 on character rows after the first
    zero       fixed    all zero; row 0 is the target of the final copy
    table      fixed    lookup table {40, 41}

Constraints:
    lookup    char in {40, 41} on active rows
    gate      encoding:             q_active * (encoded - (81 - 2 * char))
    gate      accumulation start:   q_first * (accum - encoded)
    gate      accumulation:         q_step * (accum - accum[-1] - encoded)
    gate      non-negative balance: q_active * (1 - (accum + 1) * accum_inv)
    copy      accum[last] == zero[0]

The final copy alone accepts ")(" since the sum returns to zero. Each step is
exactly +1 or -1 from 0, so the balance can only turn negative by passing
through -1; the non-negative balance gate forbids accum == -1 by requiring
accum + 1 to have an inverse.

The selectors and the final copy depend on the input length, which is public:
BracketCircuit bakes them into one FrozenShape per length, so a witness only
ever supplies advice values.
"""

import json
import logging
import threading
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

from plonkish.constraints.columns import Column
from plonkish.constraints.expressions import query
from plonkish.constraints.system import ConstraintSystem, FrozenShape
from plonkish.constraints.table import BRACKET_TABLE
from plonkish.errors import OutOfBounds
from plonkish.primitives.field import GOLDILOCKS_PRIME
from plonkish.protocol.data import Witness

logger = logging.getLogger(__name__)

# f(x) = ENCODING_OFFSET - ENCODING_SLOPE * x maps '(' to 1 and ')' to -1
ENCODING_OFFSET = 81
ENCODING_SLOPE = 2


@dataclass(frozen=True)
class BracketConfig:
    """Capacity of a bracket circuit.

    Attributes:
        max_len: Longest input the circuit accepts; also its usable row count
    """
    max_len: int = 10

    def __post_init__(self):
        if not isinstance(self.max_len, int) or isinstance(self.max_len, bool):
            raise ValueError(f"max_len must be an int, got {self.max_len!r}")
        if self.max_len < 0:
            raise ValueError(f"max_len must be non-negative, got {self.max_len}")
        # Balances lie in [-max_len, max_len] and must not wrap around p
        if 2 * self.max_len + 1 >= GOLDILOCKS_PRIME:
            raise ValueError(f"max_len {self.max_len} too large for the field")

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "BracketConfig":
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"Unknown BracketConfig keys: {sorted(unknown)}")
        return cls(**dict(data))

    @classmethod
    def from_json(cls, path: Union[str, Path]) -> "BracketConfig":
        with open(path) as f:
            return cls.from_dict(json.load(f))


@dataclass(frozen=True)
class BracketColumns:
    """Column handles of the bracket circuit."""
    char: Column
    encoded: Column
    accum: Column
    accum_inv: Column
    q_active: Column
    q_first: Column
    q_step: Column
    zero: Column
    table: Column


def configure(cs: ConstraintSystem) -> BracketColumns:
    """Declare columns, gates, lookup and table of the bracket circuit."""
    columns = BracketColumns(
        char=cs.advice_column("char"),
        encoded=cs.advice_column("encoded"),
        accum=cs.advice_column("accum"),
        accum_inv=cs.advice_column("accum_inv"),
        q_active=cs.fixed_column("q_active"),
        q_first=cs.fixed_column("q_first"),
        q_step=cs.fixed_column("q_step"),
        zero=cs.fixed_column("zero"),
        table=BRACKET_TABLE.load(cs),
    )

    char = query(columns.char)
    encoded = query(columns.encoded)
    accum = query(columns.accum)
    prev_accum = query(columns.accum, -1)
    accum_inv = query(columns.accum_inv)

    cs.declare_lookup([char], [columns.table], name="bracket alphabet",
                      selector=columns.q_active)
    cs.declare_gate("encoding", columns.q_active,
                    encoded - (ENCODING_OFFSET - ENCODING_SLOPE * char))
    cs.declare_gate("accumulation start", columns.q_first, accum - encoded)
    cs.declare_gate("accumulation", columns.q_step, accum - prev_accum - encoded)
    cs.declare_gate("non-negative balance", columns.q_active,
                    1 - (accum + 1) * accum_inv)
    cs.assign_fixed(columns.zero, 0, 0)

    return columns


def lay_out_rows(cs: ConstraintSystem, columns: BracketColumns, length: int) -> None:
    """Enable the selectors of the first length rows and tie off the sum.

    Empty input has no last row, so the zero cell is tied to itself.
    """
    for row in range(length):
        cs.assign_fixed(columns.q_active, row, 1)
        cs.assign_fixed(columns.q_first if row == 0 else columns.q_step, row, 1)
    if length:
        cs.declare_equal(columns.accum.cell(length - 1), columns.zero.cell(0))
    else:
        cs.declare_equal(columns.zero.cell(0), columns.zero.cell(0))


class BracketCircuit:
    """Bracket circuit shapes plus witness synthesis.

    One FrozenShape is built per input length on first use and cached; it is
    shared read-only by every witness of that length. All shapes of a circuit
    have max_len usable rows and the same column handles.

    Example:
        circuit = BracketCircuit(BracketConfig(max_len=8))
        witness = circuit.synthesize("(())")
        result = MockBackend().verify(circuit.shape_for(4), {}, witness)
    """

    def __init__(self, config: Optional[BracketConfig] = None):
        self.config = config or BracketConfig()
        self.columns = configure(ConstraintSystem())
        self._shapes: Dict[int, FrozenShape] = {}
        self._lock = threading.Lock()

    def fits(self, text: str) -> bool:
        return len(text) <= self.config.max_len

    def shape_for(self, length: int) -> FrozenShape:
        """Shape that proves a statement about an input of exactly length characters.

        Raises:
            OutOfBounds: If length is negative or exceeds max_len
        """
        if not 0 <= length <= self.config.max_len:
            raise OutOfBounds(
                f"Input length {length} outside [0, max_len={self.config.max_len}]"
            )
        with self._lock:
            shape = self._shapes.get(length)
            if shape is None:
                cs = ConstraintSystem()
                lay_out_rows(cs, configure(cs), length)
                shape = cs.finalize(usable_rows=self.config.max_len)
                self._shapes[length] = shape
                logger.debug("Bracket shape for length %d: %d rows", length, shape.n_rows)
        return shape

    def assign(self, text: str):
        """Fill a fresh Assignment for text over the shape of its length.

        Raises:
            OutOfBounds: If text is longer than max_len
        """
        from plonkish.witness import Assignment, get_witness_module

        assignment = Assignment(self.shape_for(len(text)))
        get_witness_module("brackets", self.columns).synthesize(assignment, text)
        return assignment

    def synthesize(self, text: str) -> Witness:
        return self.assign(text).into_witness()

    def try_synthesize(self, text: str) -> Optional[Witness]:
        """Synthesize a witness, or return None when text exceeds capacity."""
        if not self.fits(text):
            return None
        return self.synthesize(text)

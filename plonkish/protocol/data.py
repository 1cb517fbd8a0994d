"""Data structures handed from witness synthesis to a backend.

A Witness holds only what a single proof attempt adds on top of the shared
FrozenShape: the private advice column values. Selectors and copy
constraints belong to the shape, so a prover cannot switch rows or
constraints off. Instance values are public and travel separately, keyed by
Instance column.
"""

from dataclasses import dataclass, field
from typing import Mapping

from plonkish.constraints.columns import Column
from plonkish.primitives.field import FF


@dataclass(frozen=True, eq=False)
class Witness:
    """Per-instance matrix contents produced by witness synthesis.

    Attributes:
        advice: Advice column values keyed by Column, each of length n_rows
    """
    advice: Mapping[Column, FF] = field(default_factory=dict)

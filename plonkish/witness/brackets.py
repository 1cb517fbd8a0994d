"""Balanced-bracket witness generation.

Row i holds character i of the input:

    char[i]       = ord(s[i])
    encoded[i]    = 81 - 2 * char[i]            (1 for '(', p - 1 for ')')
    accum[i]      = accum[i - 1] + encoded[i]   (accum[-1] = 0)
    accum_inv[i]  = (accum[i] + 1)^(-1), or 0 when accum[i] + 1 == 0

Rows past the input keep zero advice. Selectors and the final copy come from
the shape of the input's length, never from this module. The input is never
validated here: an illegal character or an unbalanced string still produces a
complete witness that the backend rejects.
"""

import logging

import numpy as np

from plonkish.constraints.brackets import ENCODING_OFFSET, ENCODING_SLOPE, BracketColumns
from plonkish.primitives.field import FF, GOLDILOCKS_PRIME, ONE, batch_inverse_or_zero
from plonkish.witness.assignment import Assignment
from plonkish.witness.base import WitnessModule

logger = logging.getLogger(__name__)


def encode_char(code: int) -> int:
    """f(x) = 81 - 2x reduced modulo p."""
    return (ENCODING_OFFSET - ENCODING_SLOPE * code) % GOLDILOCKS_PRIME


class BracketWitness(WitnessModule):
    """Witness generation for the bracket circuit."""

    def __init__(self, columns: BracketColumns):
        self.columns = columns

    def synthesize(self, assignment: Assignment, private_input: str) -> None:
        cols = self.columns
        n = len(private_input)
        codes = [ord(c) % GOLDILOCKS_PRIME for c in private_input]

        if n == 0:
            logger.debug("Synthesized empty bracket witness")
            return

        chars = FF(np.array(codes, dtype=np.uint64))
        encoded = FF(np.array([encode_char(code) for code in codes], dtype=np.uint64))
        accum = self._compute_cumulative_sum(encoded)
        accum_inv = batch_inverse_or_zero(accum + ONE)

        assignment.assign_advice_column(cols.char, chars)
        assignment.assign_advice_column(cols.encoded, encoded)
        assignment.assign_advice_column(cols.accum, accum)
        assignment.assign_advice_column(cols.accum_inv, accum_inv)

        logger.debug("Synthesized bracket witness: %d rows used of %d", n, assignment.n_rows)

"""Base class for witness generation."""

from abc import ABC, abstractmethod
from typing import Any

from plonkish.primitives.field import FF
from plonkish.witness.assignment import Assignment


class WitnessModule(ABC):
    """Per-circuit witness generation. Used by the prover only.

    Each circuit has its own witness module that walks the private input and
    fills advice columns. A witness module never judges the input: an
    illegal input still yields a filled matrix, which the backend rejects.
    """

    @abstractmethod
    def synthesize(self, assignment: Assignment, private_input: Any) -> None:
        """Fill assignment for one private input.

        Args:
            assignment: Fresh per-instance storage over the circuit's shape
            private_input: Circuit-specific private input
        """
        pass

    def _compute_cumulative_sum(self, row_values: FF) -> FF:
        """Compute cumulative sum: result[i] = sum(row_values[0:i+1])."""
        result = row_values.copy()
        for i in range(1, len(row_values)):
            result[i] = result[i - 1] + row_values[i]
        return result

"""PLONKish arithmetization engine.

Describe a computation as a matrix of Goldilocks field elements constrained
by gates, lookups and copy constraints, fill the matrix for a concrete input,
and hand it to a backend for an accept/reject verdict.

Structure:
    primitives/   Field arithmetic (galois)
    constraints/  Columns, expressions, constraint system, circuit layouts
    witness/      Per-instance assignments and witness modules
    protocol/     Witness data, backends, proving helpers

Example:
    from plonkish import BracketCircuit, BracketConfig, MockBackend

    circuit = BracketCircuit(BracketConfig(max_len=8))
    witness = circuit.synthesize("(())")
    assert MockBackend().verify(circuit.shape_for(4), {}, witness).accepted
"""

from plonkish.constraints import (
    BracketCircuit,
    BracketConfig,
    Cell,
    Column,
    ColumnKind,
    ConstraintSystem,
    FrozenShape,
)
from plonkish.errors import (
    FieldInversionOfZero,
    OutOfBounds,
    PlonkishError,
    ShapeFrozen,
    ShapeMismatch,
)
from plonkish.primitives.field import FF, GOLDILOCKS_PRIME
from plonkish.protocol import Backend, MockBackend, VerificationResult, Verdict, Witness
from plonkish.reference import is_valid_brackets, running_balances
from plonkish.witness import Assignment

__all__ = [
    "FF",
    "GOLDILOCKS_PRIME",
    "Column",
    "ColumnKind",
    "Cell",
    "ConstraintSystem",
    "FrozenShape",
    "Assignment",
    "Witness",
    "Backend",
    "MockBackend",
    "Verdict",
    "VerificationResult",
    "BracketCircuit",
    "BracketConfig",
    "is_valid_brackets",
    "running_balances",
    "PlonkishError",
    "ShapeMismatch",
    "OutOfBounds",
    "FieldInversionOfZero",
    "ShapeFrozen",
]
